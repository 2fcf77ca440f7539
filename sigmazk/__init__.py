"""
Composable Sigma-Protocol Proofs of Knowledge
=============================================

Interactive proofs of knowledge of discrete-log secrets over a prime-order
subgroup of Z_p^*, a Fiat-Shamir transform turning any of them into a
signature, and an aggregation layer that runs several of them under one
shared challenge.

Modules:
--------
- groups: Group parameters (p, q, generators) and parameter helpers
- zr: Exponent unit (secret scalar + single-use blinding)
- fs_oracles: Fiat-Shamir random oracle H(q, values...)
- interfaces: Prover / Verifier roles
- schnorr: Identification (knowledge of x with y = g^x)
- pedersen: Single- and multi-base Pedersen commitment proofs
- signing: Fiat-Shamir sign / verify_sig
- meta: MetaProver / MetaVerifier aggregation
- serialization: JSON / base64 encoding of proofs and parameters
- config, errors, utils: configuration, exceptions, integer helpers

Usage:
------
    from sigmazk import setup
    from sigmazk.pedersen import PedersenProver, PedersenVerifier, pedersen_commit

    params = setup(p=127, q=7, g=2, h=4)
    z = pedersen_commit(params, 3, 4)
    prover = PedersenProver(params, 3, 4)
    verifier = PedersenVerifier(params, z)

    # Interactive
    comm = prover.commit()
    resp = prover.prove(5)
    assert verifier.verify(comm, 5, resp)

    # Non-interactive
    sig = prover.sign(b"hello")
    assert verifier.verify_sig(b"hello", sig)
"""

__version__ = "0.1.0"

from .errors import (
    ConfigurationError, MalformedProofError, ProtocolStateError,
    RandomSourceError, SigmaZKError, VerificationFailed,
)
from .groups import setup, modp_2048
from .zr import Zr
from .fs_oracles import H
from .meta import MetaProver, MetaVerifier

__all__ = [
    'setup', 'modp_2048', 'Zr', 'H', 'MetaProver', 'MetaVerifier',
    'SigmaZKError', 'RandomSourceError', 'ProtocolStateError',
    'MalformedProofError', 'VerificationFailed', 'ConfigurationError',
]
