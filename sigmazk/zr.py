"""
Exponent Unit
=============

``Zr`` holds one secret scalar of the exponent ring Z_q together with the
blinding value of the proof session it currently takes part in. It is the
base unit every protocol in this package is built from.

Session lifecycle:
------------------
1. ``commit()`` draws a fresh blinding k ∈ [0, q) (idempotent until reset)
2. the protocol publishes base^k
3. ``prove(c)`` answers the challenge: s = k - c·x (mod q)
4. ``reset()`` discards k

A blinding may answer one challenge only. Two responses s1, s2 to different
challenges c1, c2 under the same k reveal the secret:

    x = (s1 - s2) / (c2 - c1)  (mod q)

so ``prove`` refuses a second, different challenge within one session.

Concurrency:
------------
A unit is stateful across commit → prove and must not be shared between two
in-flight proof sessions.
"""

import secrets
from typing import Callable, Optional

from .errors import ProtocolStateError, RandomSourceError
from .utils import int_to_bytes

RandomSource = Callable[[int], int]


def default_random_source(modulus: int) -> int:
    """RandomBelow(modulus) backed by the operating system CSPRNG."""
    return secrets.randbelow(modulus)


def random_below(modulus: int, random_source: Optional[RandomSource] = None) -> int:
    """
    Draw a value in [0, modulus) from ``random_source``.

    Any failure of the source, or a value outside the range, raises
    RandomSourceError chained to the cause.
    """
    source = random_source or default_random_source
    try:
        value = source(modulus)
    except Exception as e:
        raise RandomSourceError(f"randomness source failed: {e}") from e

    if not isinstance(value, int) or not 0 <= value < modulus:
        raise RandomSourceError(f"randomness source returned {value!r}, expected a value in [0, {modulus})")
    return value


class Zr:
    """
    An element of Z_q carrying the blinding value of its current proof session.

    Attributes
    ----------
    value : int
        The secret, reduced into [0, modulus)
    modulus : int
        The ring modulus q
    blinding : int or None
        The blinding drawn by the latest ``commit`` (None outside a session)
    """

    def __init__(self, value: int, modulus: int, random_source: Optional[RandomSource] = None):
        if modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {modulus}")
        self.modulus = modulus
        self.value = value % modulus
        self.random_source = random_source
        self.blinding = None
        self._answered = None

    def __repr__(self):
        # secret value omitted
        return f"Zr(modulus={self.modulus}, committed={self.blinding is not None})"

    def __eq__(self, other):
        if not isinstance(other, Zr):
            return NotImplemented
        return self.value == other.value and self.modulus == other.modulus

    __hash__ = None

    def commit(self) -> int:
        """
        Return the blinding exponent of the current session.

        A fresh blinding is drawn when none is held; later calls in the same
        session return the same value, so sub-provers sharing this unit
        commit consistently.

        Raises
        ------
        RandomSourceError
            If the randomness source fails
        """
        if self.blinding is None:
            self.blinding = random_below(self.modulus, self.random_source)
            self._answered = None
        return self.blinding

    def prove(self, c: int) -> int:
        """
        Compute the response to challenge ``c``.

        Formula:
        --------
        s = (k - c · x) mod q

        Raises
        ------
        ProtocolStateError
            If no blinding is held, or the blinding already answered a
            different challenge
        """
        if self.blinding is None:
            raise ProtocolStateError("prove called without a preceding commit")

        c = c % self.modulus
        if self._answered is not None and self._answered != c:
            raise ProtocolStateError("blinding already answered a different challenge; commit again")

        self._answered = c
        return (self.blinding - c * self.value) % self.modulus

    def reset(self):
        """End the session: discard the blinding."""
        self.blinding = None
        self._answered = None

    def exp(self, x: int) -> 'Zr':
        """Return value^x mod modulus as a new unit."""
        return Zr(pow(self.value, x, self.modulus), self.modulus, self.random_source)

    def mul(self, other: 'Zr') -> 'Zr':
        if other.modulus != self.modulus:
            raise ProtocolStateError("Unmatched modulus in Zr multiplication.")
        return Zr(self.value * other.value, self.modulus, self.random_source)

    def inverse(self) -> 'Zr':
        """Multiplicative inverse; ValueError if value is not invertible."""
        return Zr(pow(self.value, -1, self.modulus), self.modulus, self.random_source)

    def to_bytes(self) -> bytes:
        return int_to_bytes(self.value)


def as_zr(value, modulus: int, random_source: Optional[RandomSource] = None) -> Zr:
    """
    Wrap an int into a Zr, or check that an existing unit lives in Z_modulus.

    Existing units are returned as they are, so several provers can share
    one secret.
    """
    if isinstance(value, Zr):
        if value.modulus != modulus:
            raise ProtocolStateError(f"unit modulus {value.modulus} does not match group order {modulus}")
        return value
    return Zr(value, modulus, random_source)
