"""
Fiat-Shamir Random Oracle
=========================

This module implements the hash function used in the Fiat-Shamir
transformation to replace the verifier's random challenge.

Random Oracle:
--------------
- H: digest of an ordered list of integers, reduced into Z_q

Encoding:
---------
Each value is fed to the digest as its minimal big-endian byte string,
in order, with no separators or length prefixes. The digest is read as an
unsigned big-endian integer and reduced modulo q.

The digest algorithm comes from ``config.hash_name`` (``SIGMAZK_HASH``,
default sha256) unless a ``hash_name`` is passed explicitly.
"""

from typing import List, Union

from .config import config
from .utils import bytes_to_int, int_to_bytes


def H(q: int, *values: int, hash_name: str = None) -> int:
    """
    Random oracle H: hash an ordered list of integers into Z_q.

    Formula:
    --------
    H(q, v_1, ..., v_k) = int(Digest(bytes(v_1) || ... || bytes(v_k))) mod q

    Parameters
    ----------
    q : int
        The modulus of the exponent ring (the subgroup order)
    *values : int
        Non-negative integers, hashed in the given order
    hash_name : str, optional
        hashlib algorithm name overriding the configured one

    Returns
    -------
    int
        A value in [0, q)

    Notes
    -----
    Deterministic and order-sensitive: the same ordered inputs always give
    the same output, permuting the inputs changes it (with overwhelming
    probability).

    Examples
    --------
    >>> c = H(7, 1, 8)
    >>> 0 <= c < 7
    True
    """
    digest = config.new_hash(hash_name)
    for value in values:
        digest.update(int_to_bytes(value))
    return bytes_to_int(digest.digest()) % q


def challenge(q: int, message: int, commitments: List[int], hash_name: str = None) -> int:
    """
    Fiat-Shamir transcript challenge c = H(q, m, comm_1, ..., comm_k).

    The message always comes first, followed by the commitments in the
    order the prover published them.
    """
    return H(q, encode_message(message, hash_name=hash_name), *commitments, hash_name=hash_name)


def encode_message(message: Union[int, bytes, str], hash_name: str = None) -> int:
    """
    Map a message to the integer that enters the transcript.

    Integers are used as they are. Byte strings (and str, as UTF-8) are
    digested first, so messages differing only in leading zero bytes stay
    distinct.
    """
    if isinstance(message, bool):
        raise TypeError("message must be an int, bytes or str")
    if isinstance(message, int):
        if message < 0:
            raise ValueError(f"message must be non-negative, got {message}")
        return message
    if isinstance(message, str):
        message = message.encode('utf-8')
    if isinstance(message, (bytes, bytearray)):
        digest = config.new_hash(hash_name)
        digest.update(bytes(message))
        return bytes_to_int(digest.digest())
    raise TypeError(f"message must be an int, bytes or str, not {type(message).__name__}")
