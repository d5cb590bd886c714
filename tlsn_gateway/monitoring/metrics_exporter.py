"""Prometheus metrics for verification outcomes.

Counters are observability only; nothing in the verification path reads them.
"""
from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, generate_latest
from prometheus_client import CONTENT_TYPE_LATEST

CONTENT_TYPE = CONTENT_TYPE_LATEST


class MetricsRegistry:
    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.verifications = Counter(
            "tlsn_gateway_verifications_total",
            "Proof verification requests by claim type",
            ["claim_type"],
            registry=self.registry,
        )
        self.successes = Counter(
            "tlsn_gateway_verification_successes_total",
            "Proofs accepted by claim type",
            ["claim_type"],
            registry=self.registry,
        )
        self.failures = Counter(
            "tlsn_gateway_verification_failures_total",
            "Proofs rejected by claim type and error kind",
            ["claim_type", "kind"],
            registry=self.registry,
        )

    def observe_success(self, claim_type: str) -> None:
        self.verifications.labels(claim_type=claim_type).inc()
        self.successes.labels(claim_type=claim_type).inc()

    def observe_failure(self, claim_type: str, kind: str) -> None:
        self.verifications.labels(claim_type=claim_type).inc()
        self.failures.labels(claim_type=claim_type, kind=kind).inc()

    def sample(self, name: str, **labels) -> float:
        """Current value of a counter sample (``name`` includes the _total suffix)."""
        value = self.registry.get_sample_value(name, labels)
        return value or 0.0

    def export(self) -> bytes:
        return generate_latest(self.registry)


_registry: Optional[MetricsRegistry] = None


def get_registry() -> MetricsRegistry:
    global _registry
    if _registry is None:
        _registry = MetricsRegistry()
    return _registry


__all__ = ["get_registry", "MetricsRegistry", "CONTENT_TYPE"]
