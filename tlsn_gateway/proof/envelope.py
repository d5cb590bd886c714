"""Proof envelope parsing and payload decoding."""

import binascii
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import InvalidEncoding, MalformedEnvelope, PayloadTooLarge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProofEnvelope:
    """The caller-supplied wrapper around a hex-encoded presentation."""
    version: str
    data: str
    notary_url: str
    websocket_proxy_url: Optional[str] = None


def _require_str(obj: dict, key: str, path: str) -> str:
    if key not in obj or obj[key] is None:
        raise MalformedEnvelope(f"missing field `{path}`")
    value = obj[key]
    if not isinstance(value, str):
        raise MalformedEnvelope(f"invalid type for `{path}`: expected a string")
    return value


def parse_envelope(value: Any) -> ProofEnvelope:
    """Validate an untrusted JSON value and build a ProofEnvelope.

    An empty ``data`` string is accepted here; it is rejected only after the
    trust checks have passed.

    Raises:
        MalformedEnvelope: value is not an object or a required field is missing
            or of the wrong type.
    """
    if not isinstance(value, dict):
        raise MalformedEnvelope(f"expected a JSON object, got {type(value).__name__}")

    version = _require_str(value, "version", "version")
    data = _require_str(value, "data", "data")

    meta = value.get("meta")
    if meta is None:
        raise MalformedEnvelope("missing field `meta`")
    if not isinstance(meta, dict):
        raise MalformedEnvelope("invalid type for `meta`: expected an object")
    notary_url = _require_str(meta, "notaryUrl", "meta.notaryUrl")

    proxy_url = meta.get("websocketProxyUrl")
    if proxy_url is not None and not isinstance(proxy_url, str):
        raise MalformedEnvelope("invalid type for `meta.websocketProxyUrl`: expected a string")

    return ProofEnvelope(
        version=version,
        data=data,
        notary_url=notary_url,
        websocket_proxy_url=proxy_url,
    )


def decode_hex(data: str, max_bytes: Optional[int] = None) -> bytes:
    """Strictly decode a hex string.

    Odd length, non-hex characters and whitespace are all rejected. When
    ``max_bytes`` is given the size is checked before any decoding work.
    """
    if max_bytes and len(data) // 2 > max_bytes:
        raise PayloadTooLarge(len(data) // 2, max_bytes)
    if len(data) % 2:
        raise InvalidEncoding("odd number of digits")
    try:
        # unhexlify rejects whitespace, unlike bytes.fromhex
        decoded = binascii.unhexlify(data)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(str(e)) from e
    logger.debug(f"Decoded proof payload: {len(decoded)} bytes")
    return decoded


def encode_hex(data: bytes) -> str:
    return binascii.hexlify(data).decode("ascii")


__all__ = [
    "ProofEnvelope",
    "parse_envelope",
    "decode_hex",
    "encode_hex",
]
