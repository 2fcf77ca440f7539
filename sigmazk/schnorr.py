"""
Schnorr Identification
======================

Proof of knowledge of x such that y = g^x (mod p).

Protocol:
---------
Prover                                  Verifier
k ← Z_q,  t = g^k          ── t ──▶
                           ◀── c ──     c ← Z_q
s = k - c·x (mod q)        ── s ──▶     g^s · y^c == t

Wire shape:
-----------
- commitments: [t]
- responses:   [s]
- signature:   [s, c]
"""

from typing import List, Optional, Tuple

from .groups import require
from .interfaces import Prover, Verifier
from .zr import RandomSource, as_zr, random_below


def keygen(params: dict, random_source: Optional[RandomSource] = None) -> Tuple[int, int]:
    """
    Generate a key pair (x, y = g^x mod p).

    Examples
    --------
    >>> priv, pub = keygen(params)
    >>> prover = SchnorrProver(params, priv)
    >>> verifier = SchnorrVerifier(params, pub)
    """
    g, = require(params, 'g')
    priv = random_below(params['q'], random_source)
    return priv, pow(g, priv, params['p'])


class SchnorrProver(Prover):
    """
    Prover for the Schnorr identification protocol.

    Parameters
    ----------
    params : dict
        Group parameters from ``groups.setup`` (needs 'g')
    priv : int or Zr
        The private key x
    random_source : callable, optional
        RandomBelow(modulus) used for blindings
    """

    def __init__(self, params: dict, priv, random_source: Optional[RandomSource] = None):
        self.g, = require(params, 'g')
        self.p = params['p']
        self.q = params['q']
        self.priv = as_zr(priv, self.q, random_source)

    def units(self):
        return [self.priv]

    def _commit(self) -> List[int]:
        k = self.priv.commit()
        return [pow(self.g, k, self.p)]

    def _prove(self, c: int) -> List[int]:
        return [self.priv.prove(c)]


class SchnorrVerifier(Verifier):
    """
    Verifier for the Schnorr identification protocol.

    Parameters
    ----------
    params : dict
        Group parameters from ``groups.setup`` (needs 'g')
    pub : int
        The public key y = g^x (mod p)
    """

    response_arity = 1

    def __init__(self, params: dict, pub: int):
        self.g, = require(params, 'g')
        self.p = params['p']
        self.q = params['q']
        self.pub = pub

    def recover_commitment(self, c: int, resp: List[int]) -> Tuple[Optional[int], List[int]]:
        """
        Recompute t from s and c.

        Formula:
        --------
        t' = g^s · y^c = g^(s + x·c) = g^k  (mod p)
        """
        if len(resp) < 1:
            return None, resp

        s = resp[0]
        rc = pow(self.g, s, self.p) * pow(self.pub, c, self.p) % self.p
        return rc, resp[1:]
