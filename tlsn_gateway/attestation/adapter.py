"""Adapter between decoded proof bytes and the attestation verification capability."""

import logging
from typing import Iterable, Optional

from ..config import CryptoConfig, DEFAULT_SERVER_DOMAINS
from ..errors import (
    AttestationVerificationFailed,
    DeserializationFailed,
    NoServerIdentity,
    NoTranscript,
    ServerIdentityMismatch,
)
from .types import AttestedTranscript, PresentationVerifier

logger = logging.getLogger(__name__)


class AttestationAdapter:
    """
    Runs one presentation through the injected verifier and vets its output.

    The adapter owns the decoded presentation for the duration of a single
    ``verify`` call and keeps no state between calls.
    """

    def __init__(self, verifier: PresentationVerifier,
                 crypto_config: Optional[CryptoConfig] = None,
                 server_domains: Iterable[str] = DEFAULT_SERVER_DOMAINS):
        self.verifier = verifier
        self.crypto_config = crypto_config or CryptoConfig()
        self.server_domains = tuple(server_domains)

    def verify(self, data: bytes) -> AttestedTranscript:
        """
        Verify a presentation and return its server identity and received text.

        Args:
            data: Decoded presentation bytes

        Returns:
            AttestedTranscript with the vetted server name and the
            server-to-client transcript decoded as lossy UTF-8

        Raises:
            DeserializationFailed: bytes are not a presentation
            AttestationVerificationFailed: the verifier rejected it
            NoServerIdentity / ServerIdentityMismatch: wrong or missing server
            NoTranscript: nothing was revealed
        """
        try:
            presentation = self.verifier.deserialize(data)
        except Exception as e:
            raise DeserializationFailed(str(e), cause=e) from e

        logger.info("Successfully deserialized presentation")
        try:
            logger.info(f"Presentation signed by notary key: {self.verifier.verifying_key(presentation)}")
        except Exception as e:  # diagnostics only
            logger.debug(f"Could not read verifying key: {e}")

        try:
            output = self.verifier.verify(presentation, self.crypto_config)
        except Exception as e:
            raise AttestationVerificationFailed(str(e), cause=e) from e

        logger.info("Cryptographic verification successful")
        logger.info(f"Server name: {output.server_name}")
        logger.info(f"Connection time: {output.connection_time}")

        server_name = output.server_name
        if not server_name:
            raise NoServerIdentity()

        # Substring containment, not an exact host match.
        if not any(domain in server_name for domain in self.server_domains):
            raise ServerIdentityMismatch(server_name)

        logger.info(f"Verified server identity: {server_name}")

        if output.transcript is None:
            raise NoTranscript()

        received = output.transcript.received
        logger.debug(f"Received data length: {len(received)} bytes")

        return AttestedTranscript(
            server_name=server_name,
            received_text=received.decode("utf-8", errors="replace"),
            connection_time=output.connection_time,
        )


__all__ = ["AttestationAdapter"]
