"""
Tests for proof / transcript / parameter serialization.
"""

import json

import pytest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sigmazk.errors import MalformedProofError
from sigmazk.groups import modp_2048, setup
from sigmazk.pedersen import PedersenProver, PedersenVerifier, pedersen_commit
from sigmazk.serialization import (
    deserialize_int, deserialize_params, deserialize_transcript, dumps_proof,
    loads_proof, serialize_int, serialize_params, serialize_transcript,
)


def test_int_encoding():
    assert serialize_int(0) == "AA=="
    assert deserialize_int("AA==") == 0
    assert deserialize_int(serialize_int(2 ** 2048 + 5)) == 2 ** 2048 + 5


def test_negative_int_rejected():
    with pytest.raises(ValueError):
        serialize_int(-1)


def test_signature_through_json():
    params = setup(p=127, q=7, g=2, h=4)
    proof = PedersenProver(params, 3, 4).sign(b"payload")

    text = dumps_proof(proof)
    assert json.loads(text).keys() == {'proof'}
    assert PedersenVerifier(params, 16).verify_sig(b"payload", loads_proof(text))


def test_transcript_through_json():
    params = modp_2048()
    z = pedersen_commit(params, 11, 22)
    prover = PedersenProver(params, 11, 22)
    comm = prover.commit()
    resp = prover.prove(12345)

    data = json.loads(json.dumps(serialize_transcript(comm, 12345, resp)))
    comm2, c2, resp2 = deserialize_transcript(data)
    assert (comm2, c2, resp2) == (comm, 12345, resp)
    assert PedersenVerifier(params, z).verify(comm2, c2, resp2)


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    '{"sig": []}',
    '{"proof": "AA=="}',
    '{"proof": ["***"]}',
    '{"proof": [""]}',
    '{"proof": [5]}',
])
def test_malformed_proof(text):
    with pytest.raises(MalformedProofError):
        loads_proof(text)


def test_malformed_transcript():
    with pytest.raises(MalformedProofError):
        deserialize_transcript({'comm': []})


def test_params_round_trip():
    params = modp_2048(n_bases=2)
    assert deserialize_params(json.loads(json.dumps(serialize_params(params)))) == params

    partial = setup(p=127, q=7, g=2)
    assert deserialize_params(serialize_params(partial)) == partial


def test_malformed_params():
    with pytest.raises(MalformedProofError):
        deserialize_params({'q': serialize_int(7)})


@pytest.mark.parametrize("data", [
    {'p': serialize_int(1), 'q': serialize_int(7)},
    {'p': serialize_int(127), 'q': serialize_int(1)},
    {'p': serialize_int(127), 'q': serialize_int(7), 'g': serialize_int(0)},
    {'p': serialize_int(127), 'q': serialize_int(7), 'bases': [serialize_int(127)]},
])
def test_structurally_invalid_params(data):
    with pytest.raises(MalformedProofError):
        deserialize_params(data)
