"""
Fiat-Shamir Signing
===================

Turns any prover into a non-interactive signer and any verifier into a
signature checker by deriving the challenge from the transcript:

    comm  = Commit()
    c     = H(q, m, comm_1, ..., comm_k)
    resp  = Prove(c)
    proof = resp || [c]

Verification recovers the commitments from (resp, c), re-derives the
challenge from (m, recovered commitments) and accepts iff it equals the
trailing challenge, with every response consumed.

The challenge is always computed over the commitments of the session that
was opened for this signature. Signing two messages under one blinding
would reveal the secret key.
"""

import logging
from typing import List

from .errors import VerificationFailed
from .fs_oracles import challenge
from .utils import trace

logger = logging.getLogger(__name__)


def sign(prover, m) -> List[int]:
    """
    Sign message m with ``prover``.

    Parameters
    ----------
    prover : Prover
        Any prover of this package, including a MetaProver
    m : int, bytes or str
        The message (see ``fs_oracles.encode_message``)

    Returns
    -------
    List[int]
        The signature [responses..., challenge]

    Raises
    ------
    RandomSourceError
        If a fresh blinding cannot be drawn
    """
    comm = prover.commit()
    c = challenge(prover.q, m, comm)
    proof = prover.prove(c)
    proof.append(c)
    trace(logger, "signature: %s", proof)
    return proof


def verify_sig(verifier, m, proof: List[int]) -> bool:
    """
    Verify a signature produced by ``sign``.

    Parameters
    ----------
    verifier : Verifier
        The verifier matching the signing prover (same arity and order)
    m : int, bytes or str
        The signed message
    proof : List[int]
        The signature [responses..., challenge]

    Returns
    -------
    bool
        True if the signature is valid for m, False otherwise

    Notes
    -----
    The proof must hold exactly ``verifier.response_arity`` responses
    followed by the challenge; anything else is rejected without raising.
    """
    if len(proof) != verifier.response_arity + 1:
        return False

    resp = list(proof[:-1])
    c = proof[-1]

    recovered, rem_resp = verifier.recover_commitments(c, resp)
    if recovered is None or len(rem_resp) != 0:
        return False

    return challenge(verifier.q, m, recovered) == c


def require_valid(valid: bool, what: str = "proof"):
    """Raise VerificationFailed unless ``valid`` is true."""
    if not valid:
        raise VerificationFailed(f"{what} did not verify")
