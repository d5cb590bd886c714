"""
Core types for the attestation verification boundary.

The cryptographic verification of a presentation is an external capability:
anything implementing PresentationVerifier can be injected into the
AttestationAdapter (a production TLS notary binding, the bundled Ed25519
reference verifier, or a test double).
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..config import CryptoConfig


@dataclass(frozen=True)
class PartialTranscript:
    """The revealed portion of a TLS session transcript.

    Redacted ranges are not distinguished from revealed ones here; callers
    must treat the bytes as untrusted-but-attested plaintext.
    """
    sent: bytes = b""
    received: bytes = b""


@dataclass(frozen=True)
class AttestationOutput:
    """What a successful presentation verification attests to."""
    server_name: Optional[str] = None
    transcript: Optional[PartialTranscript] = None
    connection_time: Optional[int] = None  # unix seconds


@dataclass(frozen=True)
class AttestedTranscript:
    """Result of the adapter: a vetted server identity and the received text."""
    server_name: str
    received_text: str
    connection_time: Optional[int] = None


class PresentationVerifier(Protocol):
    """Interface for attestation verification backends."""

    def deserialize(self, data: bytes) -> Any:
        """Decode presentation bytes into an opaque presentation object."""
        ...  # pragma: no cover - interface placeholder

    def verifying_key(self, presentation: Any) -> str:
        """Return a printable identifier of the key that signed the presentation."""
        ...  # pragma: no cover - interface placeholder

    def verify(self, presentation: Any, crypto_config: CryptoConfig) -> AttestationOutput:
        """Cryptographically verify the presentation, raising on failure."""
        ...  # pragma: no cover - interface placeholder


__all__ = [
    "PartialTranscript",
    "AttestationOutput",
    "AttestedTranscript",
    "PresentationVerifier",
]
