"""
Main verification service.

This module wires the verification pipeline together from configuration and
turns every outcome into a VerifyResponse. Verification failures are domain
results, never transport errors: callers always get a response object.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..attestation.adapter import AttestationAdapter
from ..attestation.ed25519 import Ed25519PresentationVerifier
from ..attestation.types import PresentationVerifier
from ..claims.types import ClaimRequest
from ..claims.verifiers import ClaimVerifier
from ..config import GatewayConfig
from ..errors import VerificationError
from ..monitoring.metrics_exporter import MetricsRegistry, get_registry
from ..policy.trust import TrustPolicy
from .response import VerifyResponse, assemble_failure, assemble_success

logger = logging.getLogger(__name__)


class VerificationService:
    """
    Stateless front door of the gateway.

    Requests share only the immutable configuration and the injected
    verifier, so any number of them may run concurrently.
    """

    def __init__(self, config: Optional[GatewayConfig] = None,
                 verifier: Optional[PresentationVerifier] = None,
                 metrics: Optional[MetricsRegistry] = None):
        """Initialize the service; ``verifier`` defaults to the Ed25519 reference format."""
        self.config = config or GatewayConfig()
        self.metrics = metrics or get_registry()
        adapter = AttestationAdapter(
            verifier or Ed25519PresentationVerifier(),
            crypto_config=self.config.crypto,
            server_domains=self.config.trust.server_domains,
        )
        self.claim_verifier = ClaimVerifier(
            TrustPolicy.from_config(self.config.trust),
            adapter,
            max_proof_bytes=self.config.max_proof_bytes or None,
        )
        logger.info(
            f"Verification service initialized "
            f"(notaries={list(self.config.trust.trusted_notaries)}, "
            f"version_prefix={self.config.trust.version_prefix})"
        )

    async def verify(self, payload: Any) -> VerifyResponse:
        """
        Verify an inbound ``{proof, questType, expectedData}`` payload.

        Args:
            payload: Decoded JSON request body

        Returns:
            VerifyResponse, valid or not
        """
        claim_label = "unknown"
        try:
            request = ClaimRequest.from_payload(payload)
            claim_label = request.claim_type.value
            return await self._run(request)
        except VerificationError as e:
            return self._reject(claim_label, e)

    async def verify_request(self, request: ClaimRequest) -> VerifyResponse:
        """Verify an already-parsed ClaimRequest."""
        try:
            return await self._run(request)
        except VerificationError as e:
            return self._reject(request.claim_type.value, e)

    async def _run(self, request: ClaimRequest) -> VerifyResponse:
        verifier = self.claim_verifier
        data = verifier.prepare(request)
        # Cryptographic verification is CPU-bound; keep it off the event loop.
        attested = await asyncio.to_thread(verifier.adapter.verify, data)
        result = verifier.decide(request.claim_type, attested)
        self.metrics.observe_success(request.claim_type.value)
        return assemble_success(result)

    def _reject(self, claim_label: str, error: VerificationError) -> VerifyResponse:
        logger.warning(f"Proof rejected ({error.kind}): {error.message}")
        self.metrics.observe_failure(claim_label, error.kind)
        return assemble_failure(error)

    def verify_sync(self, payload: Any) -> VerifyResponse:
        """Blocking variant for callers without an event loop."""
        claim_label = "unknown"
        try:
            request = ClaimRequest.from_payload(payload)
            claim_label = request.claim_type.value
            result = self.claim_verifier.verify(request)
        except VerificationError as e:
            return self._reject(claim_label, e)
        self.metrics.observe_success(claim_label)
        return assemble_success(result)

    async def health_check(self) -> Dict[str, Any]:
        """Perform a health check on the service."""
        return {
            "status": "ok",
            "components": {
                "trust_policy": [p.name for p in self.claim_verifier.trust_policy.list()],
                "verifier": type(self.claim_verifier.adapter.verifier).__name__,
            },
        }


def create_service(config: Optional[GatewayConfig] = None, **kwargs) -> VerificationService:
    """
    Factory function to create a verification service instance.

    Args:
        config: Gateway configuration (read from the environment when omitted)
        **kwargs: Passed through to VerificationService (verifier, metrics)

    Returns:
        Configured VerificationService
    """
    return VerificationService(config or GatewayConfig.from_env(), **kwargs)


__all__ = ["VerificationService", "create_service"]
