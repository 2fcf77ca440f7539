"""
Group Parameters
================

This module handles the multiplicative group Z_p^* and its prime-order
subgroup in which every protocol of this package runs.

- p is the prime modulus of the group
- q is the order of the subgroup (the modulus of the exponent ring Z_q)
- g, h and bases are generators of the order-q subgroup

Parameters are plain dictionaries, shared read-only by any number of
provers and verifiers. No primality or subgroup-membership check is made:
supplying sound parameters is the caller's responsibility. ``setup`` only
rejects structurally impossible values.

Helpers are provided to obtain parameters:
- ``modp_2048()``: RFC 3526 group 14 (safe prime, q = (p-1)/2, g = 4)
- ``derive_generator`` / ``derive_bases``: generators nobody knows a
  discrete logarithm for, derived by hashing a seed
- ``generate_params``: fresh Schnorr group from charm-crypto's IntegerGroupQ
"""

import logging
from typing import List

from .config import config
from .errors import ProtocolStateError
from .utils import bytes_to_int, int_to_bytes

logger = logging.getLogger(__name__)

# RFC 3526, 2048-bit MODP Group (id 14)
MODP_2048 = int('FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1'
                '29024E088A67CC74020BBEA63B139B22514A08798E3404DD'
                'EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245'
                'E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED'
                'EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D'
                'C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F'
                '83655D23DCA3AD961C62F356208552BB9ED529077096966D'
                '670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B'
                'E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9'
                'DE2BCBF6955817183995497CEA956AE515D2261898FA0510'
                '15728E5A8AACAA68FFFFFFFFFFFFFFFF', 16)


def setup(p: int, q: int, g: int = None, h: int = None, bases: List[int] = None) -> dict:
    """
    Assemble the group parameters shared by provers and verifiers.

    Parameters
    ----------
    p : int
        The prime modulus of the multiplicative group
    q : int
        The order of the subgroup the generators live in (divides p - 1)
    g : int, optional
        Generator used by the identification and single-base protocols
    h : int, optional
        Generator for blinding factors (single- and multi-base protocols)
    bases : List[int], optional
        Generators {g_i} of the multi-base protocol

    Returns
    -------
    dict
        A dictionary containing:
        - 'p': The group modulus
        - 'q': The subgroup order
        - 'g': The generator g (or None)
        - 'h': The generator h (or None)
        - 'bases': The list of generators {g_i} (possibly empty)

    Examples
    --------
    >>> params = setup(p=127, q=7, g=2, h=4)
    >>> params['q']
    7
    """
    if p <= 2:
        raise ValueError(f"p must be greater than 2, got {p}")
    if q <= 1:
        raise ValueError(f"q must be greater than 1, got {q}")

    bases = list(bases or [])
    for name, gen in [('g', g), ('h', h)] + [(f'bases[{i}]', b) for i, b in enumerate(bases)]:
        if gen is not None and not 1 <= gen < p:
            raise ValueError(f"generator {name}={gen} is not in [1, p)")

    return {
        'p': p,
        'q': q,
        'g': g,
        'h': h,
        'bases': bases,
    }


def require(params: dict, *names: str):
    """Fetch generators from ``params``; ValueError if one is missing."""
    values = []
    for name in names:
        value = params.get(name)
        if value is None:
            raise ValueError(f"group parameters do not define generator '{name}'")
        values.append(value)
    return values


def derive_generator(p: int, q: int, seed: bytes, hash_name: str = None) -> int:
    """
    Derive a generator of the order-q subgroup of Z_p^* from a seed.

    Formula:
    --------
    g = (Digest(seed || counter) mod p)^{(p-1)/q}  (mod p)

    The counter starts at 0 and is incremented until g ≠ 1. Since g is a
    hash output, nobody knows its discrete logarithm with respect to any
    other derived generator.

    Parameters
    ----------
    p : int
        The group modulus
    q : int
        The subgroup order, must divide p - 1
    seed : bytes
        Domain-separation label
    hash_name : str, optional
        hashlib algorithm overriding the configured one

    Returns
    -------
    int
        An element of order q (when q is prime)
    """
    if (p - 1) % q != 0:
        raise ValueError("q must divide p - 1")
    cofactor = (p - 1) // q

    counter = 0
    while True:
        digest = config.new_hash(hash_name)
        digest.update(seed + counter.to_bytes(4, 'big'))
        candidate = pow(bytes_to_int(digest.digest()) % p, cofactor, p)
        if candidate > 1:
            return candidate
        counter += 1


def derive_bases(p: int, q: int, n: int, label: bytes = b"sigmazk-base") -> List[int]:
    """Derive n independent generators with seeds label || i."""
    return [derive_generator(p, q, label + i.to_bytes(4, 'big')) for i in range(n)]


def modp_2048(n_bases: int = 0) -> dict:
    """
    Parameters over the RFC 3526 2048-bit MODP group.

    q = (p-1)/2 is prime (p is a safe prime) and g = 4 = 2^2 generates the
    subgroup of quadratic residues. h and the ``n_bases`` multi-base
    generators are derived from fixed labels.
    """
    p = MODP_2048
    q = (p - 1) // 2
    h = derive_generator(p, q, b"sigmazk-h")
    return setup(p, q, g=4, h=h, bases=derive_bases(p, q, n_bases))


def generate_params(bits: int = 1024, n_bases: int = 0) -> dict:
    """
    Generate a fresh Schnorr group with charm-crypto.

    Uses IntegerGroupQ.paramgen(bits), which produces a safe prime
    p = 2q + 1, and draws g, h and ``n_bases`` further generators with
    randomGen().

    Parameters
    ----------
    bits : int, optional
        Bit length of p. Default is 1024.
    n_bases : int, optional
        Number of multi-base generators. Default is 0.

    Returns
    -------
    dict
        Parameters as returned by ``setup``

    Notes
    -----
    charm-crypto is an optional dependency (``pip install sigmazk[groups]``).
    Generation takes seconds for realistic sizes; generate once and share.
    """
    try:
        from charm.toolbox.integergroup import IntegerGroupQ
    except ImportError as e:
        raise ImportError("generate_params needs charm-crypto: pip install 'sigmazk[groups]'") from e

    group = IntegerGroupQ()
    group.paramgen(bits)
    # paramgen produces a safe prime p = 2q + 1
    p = int(group.p)
    q = (p - 1) // 2

    generators = []
    while len(generators) < n_bases + 2:
        gen = int(group.randomGen())
        if gen > 1 and gen not in generators:
            generators.append(gen)

    logger.info("generated %d-bit Schnorr group with %d generators", bits, len(generators))
    return setup(p, q, g=generators[0], h=generators[1], bases=generators[2:])


class ZZ:
    """
    An element of the multiplicative group Z_p^*.

    Operations return new elements; combining elements of different
    groups raises ProtocolStateError.
    """

    def __init__(self, value: int, modulus: int):
        self.value = value % modulus
        self.modulus = modulus

    def __repr__(self):
        return f"ZZ({self.value}, {self.modulus})"

    def __eq__(self, other):
        if not isinstance(other, ZZ):
            return NotImplemented
        return self.value == other.value and self.modulus == other.modulus

    def __hash__(self):
        return hash((self.value, self.modulus))

    def __int__(self):
        return self.value

    def mul(self, other: 'ZZ') -> 'ZZ':
        if other.modulus != self.modulus:
            raise ProtocolStateError("Unmatched modulus in ZZ multiplication.")
        return ZZ(self.value * other.value, self.modulus)

    def exp(self, x: int) -> 'ZZ':
        return ZZ(pow(self.value, x, self.modulus), self.modulus)

    def inverse(self) -> 'ZZ':
        return ZZ(pow(self.value, -1, self.modulus), self.modulus)

    def to_bytes(self) -> bytes:
        return int_to_bytes(self.value)
