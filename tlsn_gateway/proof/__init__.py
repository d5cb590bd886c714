"""
Package proof handles the caller-facing proof envelope: structural
validation of the JSON wrapper and strict decoding of its hex payload.
"""

from .envelope import (
    ProofEnvelope,
    parse_envelope,
    decode_hex,
    encode_hex,
)

__all__ = [
    'ProofEnvelope',
    'parse_envelope',
    'decode_hex',
    'encode_hex',
]
