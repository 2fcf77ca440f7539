"""
Exception Hierarchy
===================

Errors raised by the Sigma-protocol toolkit.

Propagation policy:
-------------------
- Arity shortfalls and arithmetic mismatches found while verifying are NOT
  raised. ``consume_verify`` / ``recover_commitment`` report them as an
  invalid result with the input streams left untouched, so an aggregated
  verifier can keep consuming a stream uniformly.
- Conditions that make a proof round meaningless (entropy failure, a blinding
  asked to answer two challenges, units living in different rings) are raised
  and must reach the caller.
"""


class SigmaZKError(Exception):
    """Base class for all toolkit errors."""


class RandomSourceError(SigmaZKError):
    """
    The randomness collaborator failed to produce a blinding value.

    Fatal to the current proof round. The round is aborted; a weak
    (zero, fixed, out-of-range) value is never substituted.
    """


class ProtocolStateError(SigmaZKError):
    """
    A prover was driven out of order, or incompatible units were combined.

    Raised when ``prove`` runs without a preceding ``commit``, when one
    blinding is asked to answer a second, different challenge, and when
    units or sub-provers disagree on the group modulus.
    """


class MalformedProofError(SigmaZKError, ValueError):
    """A serialized proof or parameter payload could not be decoded."""


class VerificationFailed(SigmaZKError):
    """A proof did not verify (only raised by ``signing.require_valid``)."""


class ConfigurationError(SigmaZKError, ValueError):
    """An invalid configuration value was supplied."""
