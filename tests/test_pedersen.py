"""
Test Suite for Pedersen Commitment Proofs
=========================================

Single-base proof over p=127, q=7, g=2, h=4 with x=3, r=4 (z = 16), and
the multi-base generalization with bases {2, 8}, h=4.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sigmazk.errors import ProtocolStateError
from sigmazk.groups import modp_2048, setup
from sigmazk.pedersen import (
    GeneralizedPedersenProver, GeneralizedPedersenVerifier, PedersenProver,
    PedersenVerifier, generalized_commit, pedersen_commit,
)
from sigmazk.zr import Zr, random_below


@pytest.fixture(scope="module")
def toy_params():
    return setup(p=127, q=7, g=2, h=4, bases=[2, 8])


@pytest.fixture(scope="module")
def modp_params():
    return modp_2048(n_bases=3)


# ============================================================================
# Single-base
# ============================================================================

def test_public_commitment(toy_params):
    assert pedersen_commit(toy_params, 3, 4) == 16


@pytest.mark.parametrize("c", range(1, 7))
def test_completeness(toy_params, c):
    prover = PedersenProver(toy_params, 3, 4)
    verifier = PedersenVerifier(toy_params, 16)

    comm = prover.commit()
    resp = prover.prove(c)
    assert len(comm) == 1
    assert len(resp) == 2
    assert verifier.verify(comm, c, resp)


def test_single_combined_commitment(toy_params):
    blindings = iter([5, 2])
    prover = PedersenProver(toy_params, 3, 4, random_source=lambda q: next(blindings))
    assert prover.commit() == [pow(2, 5, 127) * pow(4, 2, 127) % 127]
    assert prover.prove(1) == [(5 - 3) % 7, (2 - 4) % 7]


@pytest.mark.parametrize("index", [0, 1])
def test_tampered_response_rejected(toy_params, index):
    prover = PedersenProver(toy_params, 3, 4)
    verifier = PedersenVerifier(toy_params, 16)
    comm = prover.commit()
    resp = prover.prove(3)

    for delta in range(1, 7):
        tampered = list(resp)
        tampered[index] = (tampered[index] + delta) % 7
        assert not verifier.verify(comm, 3, tampered)


def test_arity_shortfall(toy_params):
    verifier = PedersenVerifier(toy_params, 16)
    comm, resp = [5], [1]
    valid, rem_comm, rem_resp = verifier.consume_verify(comm, 2, resp)
    assert not valid
    assert rem_comm is comm and rem_resp is resp


def test_consume_verify_leftovers(toy_params):
    prover = PedersenProver(toy_params, 3, 4)
    verifier = PedersenVerifier(toy_params, 16)
    comm = prover.commit()
    resp = prover.prove(5)

    valid, rem_comm, rem_resp = verifier.consume_verify(comm, 5, resp + [6])
    assert valid
    assert rem_comm == [] and rem_resp == [6]


@pytest.mark.parametrize("m", range(1, 7))
def test_sign_verify_toy(toy_params, m):
    proof = PedersenProver(toy_params, 3, 4).sign(m)
    assert len(proof) == 3
    assert PedersenVerifier(toy_params, 16).verify_sig(m, proof)


def test_sign_verify_modp(modp_params):
    q = modp_params['q']
    x, r = random_below(q), random_below(q)
    z = pedersen_commit(modp_params, x, r)
    proof = PedersenProver(modp_params, x, r).sign("vote: yes")
    verifier = PedersenVerifier(modp_params, z)

    assert verifier.verify_sig("vote: yes", proof)
    assert not verifier.verify_sig("vote: no", proof)
    assert not verifier.verify_sig("vote: yes", proof[:2])
    assert not verifier.verify_sig("vote: yes", proof + [0])


def test_unit_modulus_mismatch(toy_params):
    with pytest.raises(ProtocolStateError):
        PedersenProver(toy_params, Zr(3, 11), 4)


def test_requires_h():
    with pytest.raises(ValueError):
        PedersenVerifier(setup(p=127, q=7, g=2), 16)


# ============================================================================
# Multi-base
# ============================================================================

@pytest.fixture
def toy_generalized(toy_params):
    exponents, r = [3, 5], 4
    z = generalized_commit(toy_params, exponents, r)
    return (GeneralizedPedersenProver(toy_params, exponents, r),
            GeneralizedPedersenVerifier(toy_params, z))


def test_generalized_public_commitment(toy_params):
    expected = pow(2, 3, 127) * pow(8, 5, 127) * pow(4, 4, 127) % 127
    assert generalized_commit(toy_params, [3, 5], 4) == expected


@pytest.mark.parametrize("c", range(1, 7))
def test_generalized_completeness(toy_generalized, c):
    prover, verifier = toy_generalized
    comm = prover.commit()
    resp = prover.prove(c)
    assert len(comm) == 1
    assert len(resp) == 3
    assert verifier.verify(comm, c, resp)


@pytest.mark.parametrize("index", [0, 1, 2])
def test_generalized_single_flip_rejected(toy_generalized, index):
    prover, verifier = toy_generalized
    comm = prover.commit()
    resp = prover.prove(2)

    for value in range(7):
        if value == resp[index]:
            continue
        tampered = list(resp)
        tampered[index] = value
        assert not verifier.verify(comm, 2, tampered)


def test_generalized_response_order(toy_params):
    blindings = iter([1, 2, 3])
    prover = GeneralizedPedersenProver(toy_params, [3, 5], 4, random_source=lambda q: next(blindings))
    prover.commit()
    # exponents in base order, blinding response last
    assert prover.prove(1) == [(1 - 3) % 7, (2 - 5) % 7, (3 - 4) % 7]


@pytest.mark.parametrize("resp", [[1], [1, 2]])
def test_generalized_arity_shortfall(toy_generalized, resp):
    """Fewer than n responses fails the pre-check, n fails inside recovery."""
    _, verifier = toy_generalized
    comm = [5]
    valid, rem_comm, rem_resp = verifier.consume_verify(comm, 2, resp)
    assert not valid
    assert rem_comm is comm and rem_resp is resp


def test_generalized_recover_consumes_n_plus_one(toy_generalized):
    _, verifier = toy_generalized
    rc, rem = verifier.recover_commitment(1, [1, 2, 3, 4, 5])
    assert rc is not None
    assert rem == [4, 5]
    assert verifier.response_arity == 3


def test_generalized_exponent_count_mismatch(toy_params):
    with pytest.raises(ValueError):
        GeneralizedPedersenProver(toy_params, [3], 4)
    with pytest.raises(ValueError):
        generalized_commit(toy_params, [3, 5, 6], 4)


def test_generalized_needs_bases():
    params = setup(p=127, q=7, g=2, h=4)
    with pytest.raises(ValueError):
        GeneralizedPedersenVerifier(params, 16)


def test_generalized_bases_override(toy_params):
    bases = [8, 16, 32]
    z = generalized_commit(toy_params, [1, 2, 3], 4, bases=bases)
    prover = GeneralizedPedersenProver(toy_params, [1, 2, 3], 4, bases=bases)
    verifier = GeneralizedPedersenVerifier(toy_params, z, bases=bases)
    assert verifier.verify_sig(7, prover.sign(7))


def test_generalized_sign_verify_modp(modp_params):
    q = modp_params['q']
    exponents = [random_below(q) for _ in modp_params['bases']]
    r = random_below(q)
    z = generalized_commit(modp_params, exponents, r)

    proof = GeneralizedPedersenProver(modp_params, exponents, r).sign(b"attribute set")
    verifier = GeneralizedPedersenVerifier(modp_params, z)

    assert len(proof) == 5
    assert verifier.verify_sig(b"attribute set", proof)
    assert not verifier.verify_sig(b"attribute sets", proof)
