import pytest

from tlsn_gateway.attestation import (
    AttestationOutput,
    PartialTranscript,
    PresentationBody,
    encode_presentation,
    new_notary_key,
    sign_presentation,
)
from tlsn_gateway.proof import encode_hex

TRUSTED_NOTARY = "https://notary.pse.dev/v0.1.0-alpha.12"
SUPPORTED_VERSION = "0.1.0-alpha.12"

PROFILE_TRANSCRIPT = (
    "HTTP/1.1 200 OK\r\ncontent-type: application/json\r\n\r\n"
    '{"id":42,"id_str":"42","name":"Avner","screen_name":"avnerLukk","followers_count":10}'
)

AUTHORSHIP_TRANSCRIPT = (
    'HTTP/1.1 200 OK\r\n\r\n{"created_at":"Wed May 15 10:00:00 +0000 2024",'
    '"id_str":"1790000000000000001","full_text":"gm from the notary",'
    '"user":{"id_str":"42","screen_name":"avnerLukk"}}'
)

ENGAGEMENT_TRANSCRIPT = (
    'HTTP/1.1 200 OK\r\n\r\n{"data":{"tweetResult":{"result":'
    '{"rest_id":"1790000000000000001","legacy":{"favorited":true,"retweeted":false}}}}}'
)


class FakeVerifier:
    """Deterministic PresentationVerifier returning a canned attestation."""

    def __init__(self, received=b"", server_name="api.x.com", transcript=True,
                 fail_deserialize=False, fail_verify=False):
        if isinstance(received, str):
            received = received.encode("utf-8")
        self.output = AttestationOutput(
            server_name=server_name,
            transcript=PartialTranscript(sent=b"GET /1.1/account/settings.json", received=received) if transcript else None,
            connection_time=1_700_000_000,
        )
        self.fail_deserialize = fail_deserialize
        self.fail_verify = fail_verify
        self.deserialize_calls = 0
        self.verify_calls = 0

    def deserialize(self, data):
        self.deserialize_calls += 1
        if self.fail_deserialize:
            raise ValueError("unexpected end of input")
        return data

    def verifying_key(self, presentation):
        return "fake-key"

    def verify(self, presentation, crypto_config):
        self.verify_calls += 1
        if self.fail_verify:
            raise ValueError("invalid signature")
        return self.output


@pytest.fixture
def fake_verifier():
    """Factory for FakeVerifier instances."""
    return FakeVerifier


@pytest.fixture
def make_proof():
    """Factory for proof envelope dicts as sent by the browser extension."""
    def _make(data="48656c6c6f", version=SUPPORTED_VERSION, notary_url=TRUSTED_NOTARY,
              proxy_url="ws://localhost:55688"):
        meta = {"notaryUrl": notary_url}
        if proxy_url is not None:
            meta["websocketProxyUrl"] = proxy_url
        return {"version": version, "data": data, "meta": meta}
    return _make


@pytest.fixture
def notary_key():
    return new_notary_key()


@pytest.fixture
def signed_proof(make_proof, notary_key):
    """Factory building an envelope around a real Ed25519-signed presentation."""
    def _make(received, server_name="api.x.com", key=None, **envelope_overrides):
        body = PresentationBody(
            server_name=server_name,
            received=received.encode("utf-8") if isinstance(received, str) else received,
            sent=b"GET /1.1/statuses/show.json HTTP/1.1\r\nhost: api.x.com\r\n\r\n",
            connection_time=1_700_000_000,
        )
        presentation = sign_presentation(body, key or notary_key)
        return make_proof(data=encode_hex(encode_presentation(presentation)), **envelope_overrides)
    return _make
