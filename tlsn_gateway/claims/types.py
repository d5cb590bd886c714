"""
Claim request and result types.

A request names what the caller wants proven (the claim type), carries the
proof envelope, and may carry expected values. Expected values are accepted
and recorded but not cross-checked against what the transcript reveals.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import MalformedRequest, UnknownClaimType
from ..proof.envelope import ProofEnvelope, parse_envelope


class ClaimType(Enum):
    """What a proof is asked to establish."""
    PROFILE = "profile"        # caller controls the account
    AUTHORSHIP = "authorship"  # caller's account authored a post
    ENGAGEMENT = "engagement"  # caller liked and/or retweeted a post

    @classmethod
    def parse(cls, value: Optional[str]) -> "ClaimType":
        """Resolve the wire discriminator; absent means PROFILE."""
        if value is None:
            return cls.PROFILE
        for member in cls:
            if member.value == value:
                return member
        raise UnknownClaimType(str(value))


@dataclass(frozen=True)
class ExpectedData:
    """Caller-supplied expectations about the proven post."""
    tweet_url: Optional[str] = None
    expected_author: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["ExpectedData"]:
        if data is None:
            return None
        if not isinstance(data, dict):
            raise MalformedRequest("`expectedData` must be an object")
        for key in ("tweetUrl", "expectedAuthor"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise MalformedRequest(f"`expectedData.{key}` must be a string")
        return cls(tweet_url=data.get("tweetUrl"), expected_author=data.get("expectedAuthor"))


@dataclass(frozen=True)
class ClaimRequest:
    """A single verification request, resolved once at entry."""
    claim_type: ClaimType
    envelope: ProofEnvelope
    expected_data: Optional[ExpectedData] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ClaimRequest":
        """Build a request from the inbound ``{proof, questType, expectedData}`` body.

        The claim type is resolved before the envelope is looked at, so an
        unknown type is reported even when the proof is malformed.
        """
        if not isinstance(payload, dict):
            raise MalformedRequest(f"expected a JSON object, got {type(payload).__name__}")
        quest_type = payload.get("questType")
        if quest_type is not None and not isinstance(quest_type, str):
            raise MalformedRequest("`questType` must be a string")
        claim_type = ClaimType.parse(quest_type)
        if "proof" not in payload:
            raise MalformedRequest("missing field `proof`")
        return cls(
            claim_type=claim_type,
            envelope=parse_envelope(payload["proof"]),
            expected_data=ExpectedData.from_dict(payload.get("expectedData")),
        )


@dataclass(frozen=True)
class VerificationResult:
    """Fields established by a successful claim; irrelevant ones stay None."""
    twitter_handle: Optional[str] = None
    tweet_id: Optional[str] = None
    author_screen_name: Optional[str] = None
    tweet_text: Optional[str] = None
    like_verified: Optional[bool] = None
    retweet_verified: Optional[bool] = None


__all__ = [
    "ClaimType",
    "ExpectedData",
    "ClaimRequest",
    "VerificationResult",
]
