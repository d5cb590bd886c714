import pytest

from tlsn_gateway.config import (
    DEFAULT_MAX_PROOF_BYTES,
    DEFAULT_TRUSTED_NOTARIES,
    GatewayConfig,
    TrustConfig,
)


def test_defaults():
    cfg = GatewayConfig()
    assert cfg.trust.version_prefix == "0.1.0-alpha"
    assert "https://notary.pse.dev" in cfg.trust.trusted_notaries
    assert cfg.trust.server_domains == ("api.x.com", "api.twitter.com", "x.com")
    assert cfg.crypto.allowed_algorithms == ("ed25519",)
    assert cfg.max_proof_bytes == DEFAULT_MAX_PROOF_BYTES
    assert (cfg.host, cfg.port) == ("0.0.0.0", 8080)


def test_trust_config_is_immutable():
    cfg = TrustConfig()
    with pytest.raises(Exception):
        cfg.version_prefix = "1."  # type: ignore[misc]


def test_from_env():
    env = {
        "TLSN_GATEWAY_TRUSTED_NOTARIES": " https://notary.example.org/ , http://localhost:7047 ",
        "TLSN_GATEWAY_SERVER_DOMAINS": "api.x.com",
        "TLSN_GATEWAY_VERSION_PREFIX": "0.1.0-alpha.12",
        "TLSN_GATEWAY_MAX_PROOF_BYTES": "1024",
        "TLSN_GATEWAY_PORT": "9090",
        "TLSN_GATEWAY_LOG_LEVEL": "debug",
    }
    cfg = GatewayConfig.from_env(env)
    assert cfg.trust.trusted_notaries == ("https://notary.example.org/", "http://localhost:7047")
    assert cfg.trust.server_domains == ("api.x.com",)
    assert cfg.trust.version_prefix == "0.1.0-alpha.12"
    assert cfg.max_proof_bytes == 1024
    assert cfg.port == 9090
    assert cfg.log_level == "DEBUG"


def test_from_env_empty_list_keeps_defaults():
    cfg = TrustConfig.from_env({"TLSN_GATEWAY_TRUSTED_NOTARIES": " , "})
    assert cfg.trusted_notaries == DEFAULT_TRUSTED_NOTARIES


@pytest.mark.parametrize("kwargs", [
    {"version_prefix": ""},
    {"trusted_notaries": ()},
    {"trusted_notaries": ("",)},
    {"server_domains": ()},
])
def test_invalid_trust_config(kwargs):
    with pytest.raises(ValueError):
        TrustConfig(**kwargs)
