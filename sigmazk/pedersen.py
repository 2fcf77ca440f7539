"""
Pedersen Commitment Proofs
==========================

Proofs of knowledge of the opening of a Pedersen commitment.

Single-base:
------------
Knowledge of (x, r) such that z = g^x · h^r (mod p).

- commitments: [g^{k_x} · h^{k_r}]
- responses:   [s_x, s_r]
- signature:   [s_x, s_r, c]

Multi-base (generalized):
-------------------------
Knowledge of ({x_1, ..., x_n}, r) such that z = ∏ g_i^{x_i} · h^r (mod p).

- commitments: [∏ g_i^{k_i} · h^{k_r}]
- responses:   [s_1, ..., s_n, s_r]
- signature:   [s_1, ..., s_n, s_r, c]

In both cases s = k - c·secret (mod q) per secret, and the verifier recovers
the commitment as

    rc = (∏ base^s) · z^c  (mod p)

Secrets may be passed as ints or as shared ``Zr`` units; sharing a unit
between provers combined in a MetaProver proves that the same secret
appears in each statement.
"""

from typing import List, Optional, Tuple

from .groups import require
from .interfaces import Prover, Verifier
from .utils import multiexp
from .zr import RandomSource, as_zr


def pedersen_commit(params: dict, x: int, r: int) -> int:
    """
    Compute the public commitment z = g^x · h^r (mod p).

    Examples
    --------
    >>> pedersen_commit(setup(127, 7, g=2, h=4), 3, 4)
    16
    """
    g, h = require(params, 'g', 'h')
    return multiexp([g, h], [x, r], params['p'])


def generalized_commit(params: dict, exponents: List[int], r: int, bases: List[int] = None) -> int:
    """
    Compute z = ∏ g_i^{x_i} · h^r (mod p).

    Parameters
    ----------
    params : dict
        Group parameters (needs 'h', and 'bases' unless given)
    exponents : List[int]
        The secrets {x_i}, one per base
    r : int
        The blinding factor
    bases : List[int], optional
        Generators {g_i} overriding params['bases']
    """
    h, = require(params, 'h')
    bases = _bases(params, bases)
    if len(exponents) != len(bases):
        raise ValueError(f"{len(exponents)} exponents given for {len(bases)} bases")
    return multiexp(bases + [h], list(exponents) + [r], params['p'])


def _bases(params: dict, bases: Optional[List[int]]) -> List[int]:
    bases = list(bases if bases is not None else params.get('bases') or [])
    if not bases:
        raise ValueError("multi-base protocol needs at least one base")
    return bases


class PedersenProver(Prover):
    """
    Proves knowledge of (x, r) such that z = g^x · h^r.

    Parameters
    ----------
    params : dict
        Group parameters (needs 'g' and 'h')
    x : int or Zr
        The committed value
    r : int or Zr
        The blinding factor of z
    random_source : callable, optional
        RandomBelow(modulus) used for new units
    """

    def __init__(self, params: dict, x, r, random_source: Optional[RandomSource] = None):
        self.g, self.h = require(params, 'g', 'h')
        self.p = params['p']
        self.q = params['q']
        self.x = as_zr(x, self.q, random_source)
        self.r = as_zr(r, self.q, random_source)

    def units(self):
        return [self.x, self.r]

    def _commit(self) -> List[int]:
        kx = self.x.commit()
        kr = self.r.commit()
        return [multiexp([self.g, self.h], [kx, kr], self.p)]

    def _prove(self, c: int) -> List[int]:
        # s_x = k_x - c·x,  s_r = k_r - c·r  (mod q)
        return [self.x.prove(c), self.r.prove(c)]


class PedersenVerifier(Verifier):
    """
    Verifier for PedersenProver.

    Parameters
    ----------
    params : dict
        Group parameters (needs 'g' and 'h')
    z : int
        The public commitment z = g^x · h^r
    """

    response_arity = 2

    def __init__(self, params: dict, z: int):
        self.g, self.h = require(params, 'g', 'h')
        self.p = params['p']
        self.q = params['q']
        self.z = z

    def recover_commitment(self, c: int, resp: List[int]) -> Tuple[Optional[int], List[int]]:
        """
        Formula:
        --------
        rc = g^{s_x} · h^{s_r} · z^c
           = g^{s_x + x·c} · h^{s_r + r·c}
           = g^{k_x} · h^{k_r}  (mod p)
        """
        if len(resp) < 2:
            return None, resp

        sx, sr = resp[0], resp[1]
        rc = multiexp([self.g, self.h, self.z], [sx, sr, c], self.p)
        return rc, resp[2:]


class GeneralizedPedersenProver(Prover):
    """
    Proves knowledge of ({x_1, ..., x_n}, r) such that z = ∏ g_i^{x_i} · h^r.

    Parameters
    ----------
    params : dict
        Group parameters (needs 'h', and 'bases' unless given)
    exponents : List[int or Zr]
        The secrets {x_i}, one per base, in base order
    r : int or Zr
        The blinding factor of z
    random_source : callable, optional
        RandomBelow(modulus) used for new units
    bases : List[int], optional
        Generators {g_i} overriding params['bases']
    """

    def __init__(self, params: dict, exponents: list, r, random_source: Optional[RandomSource] = None,
                 bases: List[int] = None):
        self.h, = require(params, 'h')
        self.bases = _bases(params, bases)
        self.p = params['p']
        self.q = params['q']

        if len(exponents) != len(self.bases):
            raise ValueError(f"{len(exponents)} exponents given for {len(self.bases)} bases")

        self.exponents = [as_zr(x, self.q, random_source) for x in exponents]
        self.r = as_zr(r, self.q, random_source)

    def units(self):
        return self.exponents + [self.r]

    def _commit(self) -> List[int]:
        blindings = [unit.commit() for unit in self.units()]
        return [multiexp(self.bases + [self.h], blindings, self.p)]

    def _prove(self, c: int) -> List[int]:
        # one response per exponent in base order, blinding response last
        return [unit.prove(c) for unit in self.units()]


class GeneralizedPedersenVerifier(Verifier):
    """
    Verifier for GeneralizedPedersenProver.

    Parameters
    ----------
    params : dict
        Group parameters (needs 'h', and 'bases' unless given)
    z : int
        The public commitment z = ∏ g_i^{x_i} · h^r
    bases : List[int], optional
        Generators {g_i} overriding params['bases']

    Notes
    -----
    ``consume_verify`` needs n responses before it attempts recovery; the
    blinding response (n + 1) is checked by ``recover_commitment``.
    """

    def __init__(self, params: dict, z: int, bases: List[int] = None):
        self.h, = require(params, 'h')
        self.bases = _bases(params, bases)
        self.p = params['p']
        self.q = params['q']
        self.z = z

    @property
    def response_arity(self) -> int:
        return len(self.bases) + 1

    @property
    def min_responses(self) -> int:
        return len(self.bases)

    def recover_commitment(self, c: int, resp: List[int]) -> Tuple[Optional[int], List[int]]:
        """
        Formula:
        --------
        rc = ∏ g_i^{s_i} · h^{s_r} · z^c = ∏ g_i^{k_i} · h^{k_r}  (mod p)

        Consumes exactly n + 1 responses, n being the number of bases.
        """
        n = len(self.bases)
        if len(resp) < n + 1:
            return None, resp

        rc = multiexp(self.bases + [self.h, self.z], list(resp[:n + 1]) + [c], self.p)
        return rc, resp[n + 1:]
