"""
Reference presentation format signed with Ed25519.

A presentation is canonical JSON:

    {"format": 1,
     "body": {"server_name": ..., "connection_time": ..., "sent": <hex>, "received": <hex>},
     "key_id": ..., "verifying_key": <hex>, "signature": <hex>}

The notary signs the hex SHA-256 digest of the canonical body. This is what a
self-hosted notary in front of the gateway emits, and what fixtures and tests
build; deployments backed by a full TLS notary stack inject their own
PresentationVerifier instead.
"""

import hashlib
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from ..config import CryptoConfig
from .types import AttestationOutput, PartialTranscript

PRESENTATION_FORMAT = 1
ALGORITHM = "ed25519"


@dataclass
class NotaryKey:
    """Wraps an ed25519 notary key pair."""
    public: Ed25519PublicKey
    private: Ed25519PrivateKey
    key_id: str

    @property
    def public_hex(self) -> str:
        return _public_bytes(self.public).hex()


@dataclass
class PresentationBody:
    """The attested statement: who the server was and what it sent back."""
    server_name: Optional[str]
    received: bytes
    sent: bytes = b""
    connection_time: int = 0


@dataclass
class SignedPresentation:
    """A presentation body together with the notary's signature."""
    body: PresentationBody
    key_id: str
    verifying_key: str
    signature: str


def _public_bytes(key: Ed25519PublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def new_notary_key() -> NotaryKey:
    """Generate a new ed25519 notary key with a simple time-based key ID."""
    private_key = Ed25519PrivateKey.generate()
    public_key = private_key.public_key()

    # Key ID: notary-<date>-<first8hex>
    fingerprint = hashlib.sha256(_public_bytes(public_key)).hexdigest()
    key_id = f"notary-{time.strftime('%Y%m%d')}-{fingerprint[:8]}"

    return NotaryKey(public=public_key, private=private_key, key_id=key_id)


def canonical_body(body: PresentationBody) -> bytes:
    """Return a deterministic JSON encoding of the presentation body."""
    data = {
        "server_name": body.server_name,
        "connection_time": body.connection_time,
        "sent": body.sent.hex(),
        "received": body.received.hex(),
    }
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")


def body_digest(body: PresentationBody) -> str:
    """Return hex-encoded SHA-256 of the canonical body."""
    return hashlib.sha256(canonical_body(body)).hexdigest()


def sign_presentation(body: PresentationBody, key: NotaryKey) -> SignedPresentation:
    """Produce a SignedPresentation using the provided notary key."""
    if key is None:
        raise ValueError("nil notary key")
    signature = key.private.sign(body_digest(body).encode("utf-8"))
    return SignedPresentation(
        body=body,
        key_id=key.key_id,
        verifying_key=key.public_hex,
        signature=signature.hex(),
    )


def encode_presentation(presentation: SignedPresentation) -> bytes:
    """Serialize a SignedPresentation to its wire bytes."""
    document = {
        "format": PRESENTATION_FORMAT,
        "body": json.loads(canonical_body(presentation.body)),
        "key_id": presentation.key_id,
        "verifying_key": presentation.verifying_key,
        "signature": presentation.signature,
    }
    return json.dumps(document, sort_keys=True, separators=(",", ":")).encode("utf-8")


def _field(obj: Dict[str, Any], key: str, kind: Tuple[type, ...]) -> Any:
    if key not in obj:
        raise ValueError(f"missing field '{key}'")
    value = obj[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(f"invalid type for field '{key}'")
    return value


def decode_presentation(data: bytes) -> SignedPresentation:
    """Parse wire bytes into a SignedPresentation; raises ValueError on any defect."""
    try:
        document = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"not a presentation document: {e}") from e
    if not isinstance(document, dict):
        raise ValueError("presentation must be an object")

    fmt = _field(document, "format", (int,))
    if fmt != PRESENTATION_FORMAT:
        raise ValueError(f"unsupported presentation format {fmt}")

    raw_body = _field(document, "body", (dict,))
    server_name = raw_body.get("server_name")
    if server_name is not None and not isinstance(server_name, str):
        raise ValueError("invalid type for field 'server_name'")

    body = PresentationBody(
        server_name=server_name,
        connection_time=_field(raw_body, "connection_time", (int,)),
        sent=bytes.fromhex(_field(raw_body, "sent", (str,))),
        received=bytes.fromhex(_field(raw_body, "received", (str,))),
    )
    return SignedPresentation(
        body=body,
        key_id=_field(document, "key_id", (str,)),
        verifying_key=_field(document, "verifying_key", (str,)),
        signature=_field(document, "signature", (str,)),
    )


class Ed25519PresentationVerifier:
    """PresentationVerifier for the reference Ed25519 presentation format."""

    def deserialize(self, data: bytes) -> SignedPresentation:
        return decode_presentation(data)

    def verifying_key(self, presentation: SignedPresentation) -> str:
        return f"{presentation.key_id} ({presentation.verifying_key})"

    def verify(self, presentation: SignedPresentation, crypto_config: CryptoConfig) -> AttestationOutput:
        """Verify signature and digest integrity, returning the attested output."""
        if ALGORITHM not in crypto_config.allowed_algorithms:
            raise ValueError(f"algorithm {ALGORITHM} not allowed by crypto configuration")

        try:
            public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(presentation.verifying_key))
            signature = bytes.fromhex(presentation.signature)
        except ValueError as e:
            raise ValueError(f"malformed key material: {e}") from e

        try:
            public_key.verify(signature, body_digest(presentation.body).encode("utf-8"))
        except InvalidSignature as e:
            raise ValueError("signature verification failed") from e

        body = presentation.body
        return AttestationOutput(
            server_name=body.server_name,
            transcript=PartialTranscript(sent=body.sent, received=body.received),
            connection_time=body.connection_time,
        )


__all__ = [
    "NotaryKey",
    "PresentationBody",
    "SignedPresentation",
    "new_notary_key",
    "canonical_body",
    "body_digest",
    "sign_presentation",
    "encode_presentation",
    "decode_presentation",
    "Ed25519PresentationVerifier",
]
