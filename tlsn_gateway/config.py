"""
Gateway configuration.

Trust settings are immutable and loaded once at process start; request
handling only ever reads them.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

DEFAULT_VERSION_PREFIX = "0.1.0-alpha"

DEFAULT_TRUSTED_NOTARIES: Tuple[str, ...] = (
    "https://notary.pse.dev",
    "http://localhost:7047",
    "http://127.0.0.1:7047",
)

DEFAULT_SERVER_DOMAINS: Tuple[str, ...] = (
    "api.x.com",
    "api.twitter.com",
    "x.com",
)

DEFAULT_MAX_PROOF_BYTES = 4 * 1024 * 1024

ENV_PREFIX = "TLSN_GATEWAY_"


def _split_list(raw: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class TrustConfig:
    """Static trust policy: which protocol family and notaries are accepted."""
    version_prefix: str = DEFAULT_VERSION_PREFIX
    trusted_notaries: Tuple[str, ...] = DEFAULT_TRUSTED_NOTARIES
    server_domains: Tuple[str, ...] = DEFAULT_SERVER_DOMAINS

    def __post_init__(self):
        if not self.version_prefix:
            raise ValueError("version_prefix must not be empty")
        if not self.trusted_notaries:
            raise ValueError("at least one trusted notary is required")
        if any(not n for n in self.trusted_notaries):
            raise ValueError("trusted notary entries must not be empty")
        if not self.server_domains:
            raise ValueError("at least one server domain is required")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "TrustConfig":
        env = os.environ if environ is None else environ
        return cls(
            version_prefix=env.get(f"{ENV_PREFIX}VERSION_PREFIX") or DEFAULT_VERSION_PREFIX,
            trusted_notaries=_split_list(env.get(f"{ENV_PREFIX}TRUSTED_NOTARIES"), DEFAULT_TRUSTED_NOTARIES),
            server_domains=_split_list(env.get(f"{ENV_PREFIX}SERVER_DOMAINS"), DEFAULT_SERVER_DOMAINS),
        )


@dataclass(frozen=True)
class CryptoConfig:
    """Parameters handed to the attestation verification capability."""
    allowed_algorithms: Tuple[str, ...] = ("ed25519",)


@dataclass
class GatewayConfig:
    """Top-level configuration for the verification service and HTTP shell."""
    trust: TrustConfig = field(default_factory=TrustConfig)
    crypto: CryptoConfig = field(default_factory=CryptoConfig)
    max_proof_bytes: int = DEFAULT_MAX_PROOF_BYTES  # 0 disables the limit
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "GatewayConfig":
        env = os.environ if environ is None else environ
        return cls(
            trust=TrustConfig.from_env(env),
            max_proof_bytes=int(env.get(f"{ENV_PREFIX}MAX_PROOF_BYTES", DEFAULT_MAX_PROOF_BYTES)),
            host=env.get(f"{ENV_PREFIX}HOST", "0.0.0.0"),
            port=int(env.get(f"{ENV_PREFIX}PORT", 8080)),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
        )


__all__ = [
    "TrustConfig",
    "CryptoConfig",
    "GatewayConfig",
    "DEFAULT_VERSION_PREFIX",
    "DEFAULT_TRUSTED_NOTARIES",
    "DEFAULT_SERVER_DOMAINS",
    "DEFAULT_MAX_PROOF_BYTES",
]
