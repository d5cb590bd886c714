"""Trust policy for incoming proof envelopes.

Cheap-to-forge envelope fields (protocol version, notary origin) are checked
before any decoding or cryptographic work. Each check is a small policy object
producing a PolicyResult; TrustPolicy runs them in registration order and
raises the typed error of the first one that fails.

Matching rules:
 - version: plain prefix match against the supported protocol family
 - notary: prefix match against an allow-list of origins, so entries should
   end at a host/port boundary to avoid unintended prefix collisions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol

from ..config import TrustConfig
from ..errors import UnsupportedVersion, UntrustedNotary, VerificationError
from ..proof.envelope import ProofEnvelope

logger = logging.getLogger(__name__)


@dataclass
class PolicyResult:
    """Outcome of a single policy evaluation."""
    policy: str
    passed: bool
    reason: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "policy": self.policy,
            "passed": self.passed,
            "reason": self.reason,
            "details": self.details,
        }


class Policy(Protocol):
    """Policy interface that all envelope policies implement."""

    name: str

    def evaluate(self, envelope: ProofEnvelope) -> PolicyResult:
        ...  # pragma: no cover - interface placeholder

    def error(self, envelope: ProofEnvelope) -> VerificationError:
        ...  # pragma: no cover - interface placeholder


def check_version(version: str, prefix: str) -> None:
    """Raise UnsupportedVersion unless ``version`` belongs to the supported family."""
    if not version.startswith(prefix):
        raise UnsupportedVersion(version)


def check_notary(notary_url: str, allowed: Iterable[str]) -> None:
    """Raise UntrustedNotary unless ``notary_url`` starts with an allow-listed origin."""
    if not any(notary_url.startswith(origin) for origin in allowed):
        raise UntrustedNotary(notary_url)


@dataclass
class VersionPolicy:
    """Accepts only versions within a single protocol family."""
    prefix: str
    name: str = "protocol_version"

    def evaluate(self, envelope: ProofEnvelope) -> PolicyResult:
        if envelope.version.startswith(self.prefix):
            return PolicyResult(policy=self.name, passed=True)
        return PolicyResult(
            policy=self.name,
            passed=False,
            reason=f"version '{envelope.version}' outside '{self.prefix}*'",
            details={"version": envelope.version},
        )

    def error(self, envelope: ProofEnvelope) -> VerificationError:
        return UnsupportedVersion(envelope.version)


@dataclass
class NotaryAllowlistPolicy:
    """Accepts only notaries whose URL starts with an allow-listed origin."""
    allowed_origins: Iterable[str] = field(default_factory=tuple)
    name: str = "notary_allowlist"

    def evaluate(self, envelope: ProofEnvelope) -> PolicyResult:
        for origin in self.allowed_origins:
            if envelope.notary_url.startswith(origin):
                return PolicyResult(policy=self.name, passed=True, details={"origin": origin})
        return PolicyResult(
            policy=self.name,
            passed=False,
            reason=f"notary '{envelope.notary_url}' not allow-listed",
            details={"notary_url": envelope.notary_url},
        )

    def error(self, envelope: ProofEnvelope) -> VerificationError:
        return UntrustedNotary(envelope.notary_url)


class TrustPolicy:
    """Ordered set of envelope policies; the first failure aborts the request."""

    def __init__(self, policies: Optional[List[Policy]] = None):
        self._policies: List[Policy] = []
        for policy in policies or []:
            self.register(policy)

    @classmethod
    def from_config(cls, config: TrustConfig) -> "TrustPolicy":
        return cls([
            VersionPolicy(prefix=config.version_prefix),
            NotaryAllowlistPolicy(allowed_origins=tuple(config.trusted_notaries)),
        ])

    def register(self, policy: Policy) -> None:
        if any(p.name == policy.name for p in self._policies):
            raise ValueError(f"Policy with name '{policy.name}' already registered")
        self._policies.append(policy)

    def list(self) -> List[Policy]:
        return list(self._policies)

    def evaluate(self, envelope: ProofEnvelope) -> List[PolicyResult]:
        """Evaluate every policy without raising; useful for diagnostics."""
        return [p.evaluate(envelope) for p in self._policies]

    def enforce(self, envelope: ProofEnvelope) -> List[PolicyResult]:
        results: List[PolicyResult] = []
        for policy in self._policies:
            result = policy.evaluate(envelope)
            if not result.passed:
                logger.warning(f"Trust policy {result.policy} rejected proof: {result.reason}")
                raise policy.error(envelope)
            results.append(result)
        return results


__all__ = [
    "PolicyResult",
    "Policy",
    "check_version",
    "check_notary",
    "VersionPolicy",
    "NotaryAllowlistPolicy",
    "TrustPolicy",
]
