"""
Proof serialization
Encodes proofs, transcripts and group parameters for transport as JSON.
Integers travel as base64 of their big-endian bytes.
"""

import base64
import binascii
import json
from typing import Dict, List

from .errors import MalformedProofError
from .groups import setup


def serialize_int(value: int) -> str:
    """Serialize a non-negative integer as a base64 string."""
    if value < 0:
        raise ValueError(f"cannot serialize negative integer {value}")
    data = value.to_bytes(max(1, (value.bit_length() + 7) // 8), 'big')
    return base64.b64encode(data).decode('utf-8')


def deserialize_int(data: str) -> int:
    """Deserialize an integer from its base64 string."""
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise MalformedProofError(f"invalid integer encoding: {data!r}") from e
    if not raw:
        raise MalformedProofError("empty integer encoding")
    return int.from_bytes(raw, 'big')


def serialize_proof(values: List[int]) -> List[str]:
    """Serialize a proof (or a commitment / response stream)."""
    return [serialize_int(v) for v in values]


def deserialize_proof(data: List[str]) -> List[int]:
    if not isinstance(data, list):
        raise MalformedProofError(f"proof must be a list, got {type(data).__name__}")
    return [deserialize_int(item) for item in data]


def dumps_proof(values: List[int]) -> str:
    """Serialize a proof to a JSON document {"proof": [...]}."""
    return json.dumps({'proof': serialize_proof(values)})


def loads_proof(text: str) -> List[int]:
    """Inverse of ``dumps_proof``; MalformedProofError on bad input."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedProofError(f"invalid proof document: {e}") from e
    if not isinstance(data, dict) or 'proof' not in data:
        raise MalformedProofError("proof document has no 'proof' field")
    return deserialize_proof(data['proof'])


def serialize_transcript(comm: List[int], c: int, resp: List[int]) -> Dict:
    """Serialize an interactive transcript (commitments, challenge, responses)."""
    return {
        'comm': serialize_proof(comm),
        'c': serialize_int(c),
        'resp': serialize_proof(resp),
    }


def deserialize_transcript(data: Dict):
    """Return (comm, c, resp) from ``serialize_transcript`` output."""
    try:
        return (deserialize_proof(data['comm']),
                deserialize_int(data['c']),
                deserialize_proof(data['resp']))
    except (KeyError, TypeError) as e:
        raise MalformedProofError(f"invalid transcript: {e}") from e


def serialize_params(params: dict) -> dict:
    """Serialize group parameters from ``groups.setup``."""
    result = {
        'p': serialize_int(params['p']),
        'q': serialize_int(params['q']),
        'bases': serialize_proof(params.get('bases') or []),
    }
    for name in ('g', 'h'):
        if params.get(name) is not None:
            result[name] = serialize_int(params[name])
    return result


def deserialize_params(data: dict) -> dict:
    """Deserialize group parameters back into a ``groups.setup`` dict."""
    try:
        p = deserialize_int(data['p'])
        q = deserialize_int(data['q'])
    except (KeyError, TypeError) as e:
        raise MalformedProofError(f"invalid group parameters: {e}") from e

    g = deserialize_int(data['g']) if 'g' in data else None
    h = deserialize_int(data['h']) if 'h' in data else None
    bases = deserialize_proof(data.get('bases', []))
    try:
        return setup(p, q, g=g, h=h, bases=bases)
    except ValueError as e:
        raise MalformedProofError(f"invalid group parameters: {e}") from e
