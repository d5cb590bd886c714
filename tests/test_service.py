import asyncio
import json

import pytest

from conftest import AUTHORSHIP_TRANSCRIPT, ENGAGEMENT_TRANSCRIPT, PROFILE_TRANSCRIPT
from tlsn_gateway.claims import ClaimRequest
from tlsn_gateway.config import GatewayConfig
from tlsn_gateway.monitoring import MetricsRegistry
from tlsn_gateway.service import VerificationService, VerifyResponse, create_service

WIRE_KEYS = {
    "valid", "twitterHandle", "tweetId", "authorScreenName",
    "tweetText", "likeVerified", "retweetVerified", "error",
}


def make_service(verifier=None, **config_overrides):
    return VerificationService(GatewayConfig(**config_overrides), verifier=verifier, metrics=MetricsRegistry())


@pytest.mark.asyncio
async def test_verify_rejects_untrusted_notary(make_proof, fake_verifier):
    verifier = fake_verifier(received=PROFILE_TRANSCRIPT)
    service = make_service(verifier)
    resp = await service.verify({"proof": make_proof(notary_url="https://evil-notary.com")})
    assert resp.valid is False
    assert "Untrusted notary" in resp.error
    assert verifier.deserialize_calls == 0


@pytest.mark.asyncio
async def test_empty_data(make_proof, fake_verifier):
    verifier = fake_verifier(received=PROFILE_TRANSCRIPT)
    resp = await make_service(verifier).verify({"proof": make_proof(data="")})
    assert resp == VerifyResponse(valid=False, error="Missing proof data")
    assert verifier.deserialize_calls == 0


@pytest.mark.asyncio
async def test_untrusted_notary_wins_over_empty_data(make_proof, fake_verifier):
    verifier = fake_verifier(received=PROFILE_TRANSCRIPT)
    resp = await make_service(verifier).verify({"proof": make_proof(data="", notary_url="https://evil-notary.com")})
    assert resp.valid is False
    assert resp.error == "Untrusted notary: https://evil-notary.com"
    assert verifier.deserialize_calls == 0


@pytest.mark.asyncio
async def test_unsupported_version_wins_over_empty_data(make_proof):
    resp = await make_service().verify({"proof": make_proof(data="", version="0.2.0")})
    assert resp.error == "Unsupported proof version: 0.2.0"


@pytest.mark.asyncio
async def test_unsupported_version(make_proof):
    resp = await make_service().verify({"proof": make_proof(version="0.2.0")})
    assert resp.error == "Unsupported proof version: 0.2.0"


@pytest.mark.asyncio
async def test_unknown_quest_type(make_proof):
    resp = await make_service().verify({"proof": make_proof(), "questType": "follow"})
    assert resp.valid is False
    assert resp.error == "Unknown quest type: follow"


@pytest.mark.asyncio
async def test_profile_success_shape(make_proof, fake_verifier):
    resp = await make_service(fake_verifier(received=PROFILE_TRANSCRIPT)).verify({"proof": make_proof()})
    assert resp.valid is True
    assert resp.twitter_handle == "avnerLukk"
    wire = resp.to_dict()
    assert set(wire) == WIRE_KEYS
    assert wire["twitterHandle"] == "avnerLukk"
    assert wire["error"] is None
    assert wire["tweetId"] is None


@pytest.mark.asyncio
async def test_failure_shape(make_proof, fake_verifier):
    resp = await make_service(fake_verifier(received="{}")).verify({"proof": make_proof()})
    wire = resp.to_dict()
    assert wire["valid"] is False
    assert wire["error"] == "Could not extract Twitter handle from verified transcript"
    assert all(wire[k] is None for k in WIRE_KEYS - {"valid", "error"})


@pytest.mark.asyncio
async def test_authorship_and_engagement(make_proof, fake_verifier):
    resp = await make_service(fake_verifier(received=AUTHORSHIP_TRANSCRIPT)).verify(
        {"proof": make_proof(), "questType": "authorship", "expectedData": {"expectedAuthor": "someoneElse"}}
    )
    # expectedData is not cross-checked
    assert resp.valid is True
    assert resp.author_screen_name == "avnerLukk"

    resp = await make_service(fake_verifier(received=ENGAGEMENT_TRANSCRIPT)).verify(
        {"proof": make_proof(), "questType": "engagement"}
    )
    assert (resp.like_verified, resp.retweet_verified) == (True, False)


@pytest.mark.asyncio
async def test_no_engagement(make_proof, fake_verifier):
    verifier = fake_verifier(received='{"rest_id":"1","favorited":false,"retweeted":false}')
    resp = await make_service(verifier).verify({"proof": make_proof(), "questType": "engagement"})
    assert resp.valid is False
    assert "No engagement" in resp.error


@pytest.mark.asyncio
async def test_idempotent(make_proof, fake_verifier):
    service = make_service(fake_verifier(received=AUTHORSHIP_TRANSCRIPT))
    payload = {"proof": make_proof(), "questType": "authorship"}
    first = await service.verify(payload)
    second = await service.verify(payload)
    assert first == second
    assert first.valid


@pytest.mark.asyncio
async def test_concurrent_requests(make_proof, fake_verifier):
    service = make_service(fake_verifier(received=PROFILE_TRANSCRIPT))
    results = await asyncio.gather(*[service.verify({"proof": make_proof()}) for _ in range(10)])
    assert all(r.twitter_handle == "avnerLukk" for r in results)


@pytest.mark.asyncio
async def test_metrics(make_proof, fake_verifier):
    service = make_service(fake_verifier(received=PROFILE_TRANSCRIPT))
    await service.verify({"proof": make_proof()})
    await service.verify({"proof": make_proof(notary_url="https://evil-notary.com")})
    await service.verify({"proof": make_proof(), "questType": "nope"})
    m = service.metrics
    assert m.sample("tlsn_gateway_verifications_total", claim_type="profile") == 2
    assert m.sample("tlsn_gateway_verification_successes_total", claim_type="profile") == 1
    assert m.sample("tlsn_gateway_verification_failures_total", claim_type="profile", kind="untrusted_notary") == 1
    assert m.sample("tlsn_gateway_verification_failures_total", claim_type="unknown", kind="unknown_claim_type") == 1
    assert b"tlsn_gateway_verifications_total" in m.export()


@pytest.mark.asyncio
async def test_end_to_end_signed_presentation(signed_proof):
    service = make_service()
    resp = await service.verify({"proof": signed_proof(AUTHORSHIP_TRANSCRIPT), "questType": "authorship"})
    assert resp.valid is True
    assert resp.tweet_id == "1790000000000000001"
    assert resp.tweet_text == "gm from the notary"


@pytest.mark.asyncio
async def test_end_to_end_wrong_server(signed_proof):
    resp = await make_service().verify({"proof": signed_proof(PROFILE_TRANSCRIPT, server_name="api.github.com")})
    assert resp.error == "Proof not from Twitter API: api.github.com"


@pytest.mark.asyncio
async def test_end_to_end_missing_server(signed_proof):
    resp = await make_service().verify({"proof": signed_proof(PROFILE_TRANSCRIPT, server_name=None)})
    assert resp.error == "No server identity in proof"


@pytest.mark.asyncio
async def test_end_to_end_garbage_payload(make_proof):
    resp = await make_service().verify({"proof": make_proof(data="48656c6c6f")})
    assert resp.valid is False
    assert resp.error.startswith("Failed to deserialize presentation")


@pytest.mark.asyncio
async def test_end_to_end_forged_signature(signed_proof, make_proof):
    proof = signed_proof(PROFILE_TRANSCRIPT)
    forged = signed_proof(PROFILE_TRANSCRIPT.replace("avnerLukk", "mallory"))
    # Splice the forged body under the original signature.
    original = bytes.fromhex(proof["data"]).decode("utf-8")
    tampered = bytes.fromhex(forged["data"]).decode("utf-8")
    doc, forged_doc = json.loads(original), json.loads(tampered)
    doc["body"] = forged_doc["body"]
    resp = await make_service().verify({"proof": make_proof(data=json.dumps(doc).encode("utf-8").hex())})
    assert resp.valid is False
    assert resp.error.startswith("Presentation verification failed")


@pytest.mark.asyncio
async def test_payload_limit(make_proof):
    resp = await make_service(max_proof_bytes=4).verify({"proof": make_proof(data="00" * 8)})
    assert "too large" in resp.error


@pytest.mark.asyncio
async def test_verify_request(make_proof, fake_verifier):
    service = make_service(fake_verifier(received=PROFILE_TRANSCRIPT))
    resp = await service.verify_request(ClaimRequest.from_payload({"proof": make_proof()}))
    assert resp.twitter_handle == "avnerLukk"


def test_verify_sync(make_proof, fake_verifier):
    service = make_service(fake_verifier(received=PROFILE_TRANSCRIPT))
    assert service.verify_sync({"proof": make_proof()}).twitter_handle == "avnerLukk"
    assert service.verify_sync({"proof": make_proof(data="")}).error == "Missing proof data"


@pytest.mark.asyncio
async def test_health_check():
    health = await make_service().health_check()
    assert health["status"] == "ok"
    assert health["components"]["verifier"] == "Ed25519PresentationVerifier"
    assert health["components"]["trust_policy"] == ["protocol_version", "notary_allowlist"]


def test_create_service_reads_env(monkeypatch):
    monkeypatch.setenv("TLSN_GATEWAY_TRUSTED_NOTARIES", "https://notary.example.org/")
    service = create_service(metrics=MetricsRegistry())
    assert service.config.trust.trusted_notaries == ("https://notary.example.org/",)
