"""
Tests for the Fiat-Shamir wrapper, configuration and logging setup.
"""

import logging

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sigmazk.config import Config, config, configure_logging
from sigmazk.errors import ConfigurationError, RandomSourceError, VerificationFailed
from sigmazk.fs_oracles import challenge
from sigmazk.groups import setup
from sigmazk.schnorr import SchnorrProver, SchnorrVerifier
from sigmazk.signing import require_valid, sign, verify_sig


@pytest.fixture(scope="module")
def toy_params():
    return setup(p=127, q=7, g=2)


def test_sign_hashes_fresh_commitment(toy_params):
    """c = H(q, m, g^k) for the blinding k drawn by this signature."""
    prover = SchnorrProver(toy_params, 3, random_source=lambda q: 5)
    proof = sign(prover, 9)

    expected_c = challenge(7, 9, [pow(2, 5, 127)])
    assert proof == [(5 - expected_c * 3) % 7, expected_c]


def test_functions_match_methods(toy_params):
    prover = SchnorrProver(toy_params, 3)
    verifier = SchnorrVerifier(toy_params, 8)
    assert verify_sig(verifier, 4, prover.sign(4))
    assert verifier.verify_sig(4, sign(prover, 4))


def test_sign_with_hash_override(toy_params, monkeypatch):
    prover = SchnorrProver(toy_params, 3)
    verifier = SchnorrVerifier(toy_params, 8)

    monkeypatch.setattr(config, 'hash_name', 'sha1')
    proof = prover.sign(b"legacy digest")
    assert verifier.verify_sig(b"legacy digest", proof)


def test_sign_aborts_on_entropy_failure(toy_params):
    def broken(q):
        raise RuntimeError("no entropy")

    prover = SchnorrProver(toy_params, 3, random_source=broken)
    with pytest.raises(RandomSourceError):
        prover.sign(1)


def test_require_valid():
    require_valid(True)
    with pytest.raises(VerificationFailed):
        require_valid(False, "signature")


def test_config_validate():
    cfg = Config()
    cfg.validate()

    cfg.hash_name = 'no-such-digest'
    with pytest.raises(ConfigurationError):
        cfg.validate()

    cfg = Config()
    cfg.log_level = 'LOUD'
    with pytest.raises(ConfigurationError):
        cfg.validate()


def test_configure_logging():
    logger = configure_logging('debug')
    try:
        assert logger.name == 'sigmazk'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        # idempotent
        configure_logging('info')
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    with pytest.raises(ConfigurationError):
        configure_logging('LOUD')


@pytest.mark.parametrize("attr, value", [
    ('hash_name', 'no-such-digest'),
    ('log_level', 'LOUD'),
])
def test_configure_logging_validates_config(monkeypatch, attr, value):
    monkeypatch.setattr(config, attr, value)
    with pytest.raises(ConfigurationError):
        configure_logging('info')
    assert logging.getLogger('sigmazk').handlers == []