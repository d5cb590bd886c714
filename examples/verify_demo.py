"""
Example: Verifying Notarized Twitter Proofs

This example walks through the gateway's verification flow:
- Creating an Ed25519 notary key
- Signing a presentation over a captured API response
- Submitting profile, authorship and engagement claims
- Observing rejections for untrusted notaries and forged transcripts
"""

import asyncio
import json
import os
import sys

# Add parent directory to path so we can import tlsn_gateway
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tlsn_gateway.attestation import (
    PresentationBody,
    encode_presentation,
    new_notary_key,
    sign_presentation,
)
from tlsn_gateway.monitoring import MetricsRegistry
from tlsn_gateway.proof import encode_hex
from tlsn_gateway.service import VerificationService

TRUSTED_NOTARY = "https://notary.pse.dev/v0.1.0-alpha.12"

TWEET_RESPONSE = (
    'HTTP/1.1 200 OK\r\ncontent-type: application/json\r\n\r\n'
    '{"id_str":"1790000000000000001","full_text":"gm from the notary",'
    '"favorited":true,"retweeted":false,'
    '"user":{"id_str":"42","screen_name":"avnerLukk"}}'
)


def build_proof(key, received, server_name="api.x.com", notary_url=TRUSTED_NOTARY):
    body = PresentationBody(
        server_name=server_name,
        received=received.encode("utf-8"),
        sent=b"GET /1.1/statuses/show.json?id=1790000000000000001 HTTP/1.1\r\n\r\n",
        connection_time=1_700_000_000,
    )
    presentation = sign_presentation(body, key)
    return {
        "version": "0.1.0-alpha.12",
        "data": encode_hex(encode_presentation(presentation)),
        "meta": {"notaryUrl": notary_url, "websocketProxyUrl": "ws://localhost:55688"},
    }


def show(label, response):
    mark = "✓" if response.valid else "✗"
    print(f"   {mark} {label}: {json.dumps(response.to_dict())}")


async def main():
    print("🔎 TLSN Gateway Verification Demo")
    print("=" * 50)

    print("\n1. Generating notary key...")
    key = new_notary_key()
    print(f"   Notary Key ID: {key.key_id}")

    service = VerificationService(metrics=MetricsRegistry())
    proof = build_proof(key, TWEET_RESPONSE)
    print(f"\n2. Signed presentation ({len(proof['data']) // 2} bytes)")

    print("\n3. Verifying claims...")
    for quest_type in ("profile", "authorship", "engagement"):
        show(quest_type, await service.verify({"proof": proof, "questType": quest_type}))

    print("\n4. Rejections...")
    untrusted = build_proof(key, TWEET_RESPONSE, notary_url="https://evil-notary.com")
    show("untrusted notary", await service.verify({"proof": untrusted}))

    wrong_server = build_proof(key, TWEET_RESPONSE, server_name="api.github.com")
    show("wrong server", await service.verify({"proof": wrong_server}))

    show("unknown quest type", await service.verify({"proof": proof, "questType": "follow"}))

    print("\n5. Metrics snapshot")
    print(service.metrics.export().decode("utf-8"))


if __name__ == "__main__":
    asyncio.run(main())
