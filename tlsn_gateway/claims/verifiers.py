"""Claim verification procedures.

Each claim type runs the same attestation pipeline and then applies its own
decision over the revealed text:

    envelope -> trust policy -> non-empty data -> hex decode -> attestation adapter -> claim check

Any stage may raise a VerificationError, which ends the request. Nothing is
retried and nothing is cached.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

from ..attestation.adapter import AttestationAdapter
from ..attestation.types import AttestedTranscript
from ..errors import (
    AuthorNotFound,
    FieldNotFound,
    HandleNotFound,
    MissingData,
    NoEngagementDetected,
    TweetIdNotFound,
)
from ..policy.trust import TrustPolicy
from ..proof.envelope import ProofEnvelope, decode_hex
from ..transcript.extract import contains_flag, extract_field, extract_handle, extract_nested_field
from .types import ClaimRequest, ClaimType, VerificationResult

logger = logging.getLogger(__name__)

# Authorship responses (statuses/show) carry id_str; engagement responses
# (GraphQL TweetDetail) carry rest_id, hence the different orders.
AUTHORSHIP_ID_FIELDS = ("id_str", "rest_id")
ENGAGEMENT_ID_FIELDS = ("rest_id", "id_str")
TEXT_FIELDS = ("full_text", "text")


def _first_field(text: str, fields: Sequence[str]) -> Optional[str]:
    for name in fields:
        try:
            return extract_field(text, name)
        except FieldNotFound:
            continue
    return None


def verify_profile(text: str) -> VerificationResult:
    """Profile claim: the transcript reveals a valid account handle."""
    handle = extract_handle(text)
    logger.info(f"Successfully verified Twitter handle: {handle}")
    return VerificationResult(twitter_handle=handle)


def verify_authorship(text: str) -> VerificationResult:
    """Authorship claim: a tweet id and its author; the text is optional."""
    tweet_id = _first_field(text, AUTHORSHIP_ID_FIELDS)
    if tweet_id is None:
        raise TweetIdNotFound(AUTHORSHIP_ID_FIELDS)

    try:
        author = extract_nested_field(text, "user", "screen_name")
    except FieldNotFound:
        try:
            author = extract_handle(text)
        except HandleNotFound as e:
            raise AuthorNotFound() from e

    tweet_text = _first_field(text, TEXT_FIELDS)

    logger.info(f"Verified tweet {tweet_id} by @{author}")
    return VerificationResult(
        tweet_id=tweet_id,
        author_screen_name=author,
        tweet_text=tweet_text,
    )


def verify_engagement(text: str) -> VerificationResult:
    """Engagement claim: a tweet id plus a like and/or retweet flag.

    The flags are scanned over the whole transcript, not scoped to the tweet
    object identified by the id.
    """
    tweet_id = _first_field(text, ENGAGEMENT_ID_FIELDS)
    if tweet_id is None:
        raise TweetIdNotFound(ENGAGEMENT_ID_FIELDS)

    like_verified = contains_flag(text, "favorited")
    retweet_verified = contains_flag(text, "retweeted")

    logger.info(
        f"Engagement verification for tweet {tweet_id}: "
        f"like={like_verified}, retweet={retweet_verified}"
    )

    if not like_verified and not retweet_verified:
        raise NoEngagementDetected()

    return VerificationResult(
        tweet_id=tweet_id,
        like_verified=like_verified,
        retweet_verified=retweet_verified,
    )


CLAIM_CHECKS: Dict[ClaimType, Callable[[str], VerificationResult]] = {
    ClaimType.PROFILE: verify_profile,
    ClaimType.AUTHORSHIP: verify_authorship,
    ClaimType.ENGAGEMENT: verify_engagement,
}


class ClaimVerifier:
    """Runs the full verification pipeline for one claim request."""

    def __init__(self, trust_policy: TrustPolicy, adapter: AttestationAdapter,
                 max_proof_bytes: Optional[int] = None):
        self.trust_policy = trust_policy
        self.adapter = adapter
        self.max_proof_bytes = max_proof_bytes

    def check_envelope(self, envelope: ProofEnvelope) -> bytes:
        """Apply trust policy, then decode the payload. No cryptography yet."""
        logger.info(f"Received proof version: {envelope.version}, notary: {envelope.notary_url}")
        self.trust_policy.enforce(envelope)
        if not envelope.data:
            raise MissingData()
        data = decode_hex(envelope.data, self.max_proof_bytes)
        logger.info(f"Proof data size: {len(data)} bytes")
        return data

    def prepare(self, request: ClaimRequest) -> bytes:
        """Everything before attestation: returns the decoded presentation bytes."""
        if request.expected_data is not None:
            # Accepted but not enforced against the transcript.
            logger.debug(f"Expected data supplied but not cross-checked: {request.expected_data}")
        return self.check_envelope(request.envelope)

    def decide(self, claim_type: ClaimType, attested: AttestedTranscript) -> VerificationResult:
        return CLAIM_CHECKS[claim_type](attested.received_text)

    def verify(self, request: ClaimRequest) -> VerificationResult:
        attested = self.adapter.verify(self.prepare(request))
        return self.decide(request.claim_type, attested)


__all__ = [
    "AUTHORSHIP_ID_FIELDS",
    "ENGAGEMENT_ID_FIELDS",
    "TEXT_FIELDS",
    "verify_profile",
    "verify_authorship",
    "verify_engagement",
    "CLAIM_CHECKS",
    "ClaimVerifier",
]
