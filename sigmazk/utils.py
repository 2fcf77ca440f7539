"""
Utility Functions
=================

This module provides the integer helpers shared by every protocol:
multi-exponentiation in Z_p^*, byte encoding of big integers and
transcript tracing.

Key Operations:
- Multi-exponentiation: Compute ∏ g_i^{e_i} mod p
- Products: Compute ∏ a_i mod p
- Encoding: Minimal big-endian bytes of a non-negative integer
"""

import logging
from typing import List

from .config import config


def multiexp(bases: List[int], exponents: List[int], p: int) -> int:
    """
    Compute multi-exponentiation in Z_p^*: ∏ bases[i]^{exponents[i]} mod p.

    Formula:
    --------
    result = ∏_{i=0}^{len(bases)-1} bases[i]^{exponents[i]}  (mod p)

    Parameters
    ----------
    bases : List[int]
        List of group elements in [1, p)
    exponents : List[int]
        List of exponents (non-negative)
    p : int
        The group modulus

    Returns
    -------
    int
        The product ∏ bases[i]^{exponents[i]} mod p

    Notes
    -----
    - If bases is empty, returns the identity element 1
    - bases and exponents must have the same length
    - Exponents are used as given; callers that hold exponents mod q need
      not reduce them again because every base has order dividing q

    Examples
    --------
    >>> multiexp([2, 4], [3, 4], 127)
    16
    """
    if len(bases) != len(exponents):
        raise ValueError(f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = 1
    for base, exp in zip(bases, exponents):
        result = result * pow(base, exp, p) % p

    return result


def int_to_bytes(value: int) -> bytes:
    """
    Minimal big-endian encoding of a non-negative integer.

    Zero encodes to the empty byte string, so ``int_to_bytes(0) == b""``.
    """
    if value < 0:
        raise ValueError(f"cannot encode negative integer {value}")
    return value.to_bytes((value.bit_length() + 7) // 8, 'big')


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, 'big')


def trace(logger: logging.Logger, msg: str, *args):
    """Log a public transcript value at DEBUG when tracing is enabled."""
    if config.trace:
        logger.debug(msg, *args)
