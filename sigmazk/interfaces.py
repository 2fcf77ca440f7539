"""
Prover and Verifier Roles
=========================

Every protocol in this package (identification, single-base and multi-base
commitment proofs, aggregated proofs) exposes the same operations:

Prover:
- commit(): start a fresh session and publish the commitment list
- prove(c): answer challenge c with the response list, then end the session
- sign(m): Fiat-Shamir signature (see ``signing``)

Verifier:
- consume_verify(comm, c, resp): check one proof at the front of the
  commitment / response streams and return what is left of them
- verify(comm, c, resp): consume_verify with nothing left over
- recover_commitment(c, resp): recompute the commitment from responses
- verify_sig(m, proof): check a Fiat-Shamir signature

Streams are plain lists of integers. Decoding is positional: a verifier
consumes ``commitment_arity`` leading commitments and ``response_arity``
leading responses, so the order of a composed proof must mirror the order
in which it was produced.

Session hooks:
--------------
``_commit`` and ``_prove`` compute commitments and responses without
opening or closing the session. ``commit`` / ``prove`` wrap them with
``reset``; the aggregation layer calls the hooks directly so that exponent
units shared between sub-provers commit once per session.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .signing import sign, verify_sig
from .utils import trace

logger = logging.getLogger(__name__)


class Prover(ABC):
    """Base class for the prover side of a Sigma protocol."""

    q: int

    @abstractmethod
    def units(self) -> list:
        """The exponent units (``Zr``) whose blindings this prover uses."""

    @abstractmethod
    def _commit(self) -> List[int]:
        """Commitments for the current session."""

    @abstractmethod
    def _prove(self, c: int) -> List[int]:
        """Responses to challenge c for the current session."""

    def reset(self):
        """Discard the blindings of every unit (end of session)."""
        for unit in self.units():
            unit.reset()

    def commit(self) -> List[int]:
        """
        Open a fresh proof session and return its commitments.

        Any blinding left over from an earlier session is discarded first,
        so every call draws new randomness.
        """
        self.reset()
        comm = self._commit()
        trace(logger, "%s commit: %s", type(self).__name__, comm)
        return comm

    def prove(self, c: int) -> List[int]:
        """
        Answer challenge c and close the session.

        Raises
        ------
        ProtocolStateError
            If no session is open (``commit`` was not called)
        """
        try:
            resp = self._prove(c)
        finally:
            self.reset()
        trace(logger, "%s challenge: %d, responses: %s", type(self).__name__, c, resp)
        return resp

    def sign(self, m) -> List[int]:
        """Fiat-Shamir signature [responses..., challenge] on message m."""
        return sign(self, m)


class Verifier(ABC):
    """Base class for the verifier side of a Sigma protocol."""

    q: int
    commitment_arity: int = 1
    response_arity: int

    @property
    def min_responses(self) -> int:
        """Responses that must be present before recovery is attempted."""
        return self.response_arity

    @abstractmethod
    def recover_commitment(self, c: int, resp: List[int]) -> Tuple[Optional[int], List[int]]:
        """
        Recompute the commitment from challenge c and the leading responses.

        Consumes exactly ``response_arity`` responses and returns
        ``(rc, remaining)``. Returns ``(None, resp)`` with ``resp``
        untouched when too few responses are given.
        """

    def recover_commitments(self, c: int, resp: List[int]) -> Tuple[Optional[List[int]], List[int]]:
        """List form of ``recover_commitment`` (one entry per commitment)."""
        rc, rem_resp = self.recover_commitment(c, resp)
        if rc is None:
            return None, resp
        return [rc], rem_resp

    def consume_verify(self, comm: List[int], c: int, resp: List[int]) -> Tuple[bool, List[int], List[int]]:
        """
        Verify the proof at the front of the streams.

        Returns
        -------
        valid : bool
            True if the recovered commitment matches comm[0]
        rem_comm : List[int]
            Commitments left for the next verifier
        rem_resp : List[int]
            Responses left for the next verifier

        Notes
        -----
        Too short a stream returns ``(False, comm, resp)`` unchanged. An
        arithmetic mismatch still consumes this protocol's slice, so the
        shape of what is left does not depend on the outcome.
        """
        if len(resp) < self.min_responses or len(comm) < self.commitment_arity:
            return False, comm, resp

        rc, rem_resp = self.recover_commitment(c, resp)
        if rc is None:
            return False, comm, resp

        valid = rc == comm[0]
        if not valid:
            trace(logger, "%s mismatch: recovered %d, published %d", type(self).__name__, rc, comm[0])
        return valid, comm[1:], rem_resp

    def verify(self, comm: List[int], c: int, resp: List[int]) -> bool:
        """Verify a complete interactive transcript (no values left over)."""
        valid, rem_comm, rem_resp = self.consume_verify(comm, c, resp)
        return valid and len(rem_comm) == 0 and len(rem_resp) == 0

    def verify_sig(self, m, proof: List[int]) -> bool:
        """Check a Fiat-Shamir signature produced by the matching prover."""
        return verify_sig(self, m, proof)
