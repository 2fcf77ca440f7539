"""
Aggregated Proofs
=================

A MetaProver runs several Sigma protocols under one shared challenge; a
MetaVerifier checks the result.

Encoding:
---------
    comm = comm(P_1) || comm(P_2) || ... || comm(P_k)
    resp = resp(P_1) || resp(P_2) || ... || resp(P_k)

There are no tags or length prefixes. The verifier decodes the streams by
letting each sub-verifier, in order, consume its own prefix and hand the
remainder to the next one. The sub-verifier list must therefore mirror the
sub-prover list exactly; a permuted or mismatched list rejects.

Shared secrets:
---------------
Sub-provers may hold the same ``Zr`` unit. The unit commits once per
session and answers the shared challenge once, so the aggregated proof
shows the same secret is used in every statement. Keeping secrets
consistent across sub-provers is the caller's responsibility.

Signature:
----------
    c     = H(q, m, comm_1, ..., comm_k)
    proof = resp || [c]
"""

from typing import List, Optional, Tuple

from .errors import ProtocolStateError
from .interfaces import Prover, Verifier


def _common_order(parts: list, role: str) -> int:
    if not parts:
        raise ValueError(f"Meta{role} needs at least one sub-{role.lower()}")
    q = parts[0].q
    for part in parts[1:]:
        if part.q != q:
            raise ProtocolStateError(f"sub-{role.lower()}s disagree on the group order: {q} != {part.q}")
    return q


class MetaProver(Prover):
    """
    Composes sub-provers so they answer a single shared challenge.

    Parameters
    ----------
    subprovers : List[Prover]
        Provers in the order their outputs are concatenated

    Raises
    ------
    ProtocolStateError
        If the sub-provers do not share the same group order q
    """

    def __init__(self, subprovers: List[Prover]):
        self.subprovers = list(subprovers)
        self.q = _common_order(self.subprovers, 'Prover')

    def units(self):
        units = []
        for prover in self.subprovers:
            for unit in prover.units():
                if not any(unit is seen for seen in units):
                    units.append(unit)
        return units

    def _commit(self) -> List[int]:
        comm = []
        for prover in self.subprovers:
            comm.extend(prover._commit())
        return comm

    def _prove(self, c: int) -> List[int]:
        resp = []
        for prover in self.subprovers:
            resp.extend(prover._prove(c))
        return resp


class MetaVerifier(Verifier):
    """
    Verifies an aggregated proof by streaming it through sub-verifiers.

    Parameters
    ----------
    subverifiers : List[Verifier]
        Verifiers in the same order as the MetaProver's sub-provers

    Notes
    -----
    A MetaVerifier is itself a Verifier, so aggregates can be nested.
    """

    def __init__(self, subverifiers: List[Verifier]):
        self.subverifiers = list(subverifiers)
        self.q = _common_order(self.subverifiers, 'Verifier')

    @property
    def commitment_arity(self) -> int:
        return sum(v.commitment_arity for v in self.subverifiers)

    @property
    def response_arity(self) -> int:
        return sum(v.response_arity for v in self.subverifiers)

    def consume_verify(self, comm: List[int], c: int, resp: List[int]) -> Tuple[bool, List[int], List[int]]:
        """
        Thread the streams through every sub-verifier.

        Returns ``(True, rem_comm, rem_resp)`` if every sub-verifier
        accepts. Checking stops at the first sub-verifier that rejects:

        - on an arithmetic mismatch the slices of the remaining
          sub-verifiers are skipped by arity, so the remainders have the
          same shape as for an accepted proof;
        - if the streams are too short for this aggregate,
          ``(False, comm, resp)`` is returned with the input untouched.
        """
        rem_comm, rem_resp = comm, resp
        for i, verifier in enumerate(self.subverifiers):
            valid, next_comm, next_resp = verifier.consume_verify(rem_comm, c, rem_resp)
            if valid:
                rem_comm, rem_resp = next_comm, next_resp
                continue

            # a sub-verifier that consumed nothing found its slice too short
            if len(next_comm) == len(rem_comm):
                return False, comm, resp
            rest = self.subverifiers[i + 1:]
            n_comm = sum(v.commitment_arity for v in rest)
            n_resp = sum(v.response_arity for v in rest)
            if len(next_comm) < n_comm or len(next_resp) < n_resp:
                return False, comm, resp
            return False, next_comm[n_comm:], next_resp[n_resp:]
        return True, rem_comm, rem_resp

    def verify(self, comm: List[int], c: int, resp: List[int]) -> bool:
        """
        Verify an aggregated transcript.

        Succeeds only if every sub-verifier accepts and no commitment or
        response is left over.
        """
        valid, rem_comm, rem_resp = self.consume_verify(comm, c, resp)
        return valid and len(rem_comm) == 0 and len(rem_resp) == 0

    def recover_commitment(self, c: int, resp: List[int]) -> Tuple[Optional[List[int]], List[int]]:
        """Recover one commitment per sub-verifier, consuming their responses in order."""
        return self.recover_commitments(c, resp)

    def recover_commitments(self, c: int, resp: List[int]) -> Tuple[Optional[List[int]], List[int]]:
        recovered = []
        rem_resp = resp
        for verifier in self.subverifiers:
            rcs, rem_resp = verifier.recover_commitments(c, rem_resp)
            if rcs is None:
                return None, resp
            recovered.extend(rcs)
        return recovered, rem_resp
