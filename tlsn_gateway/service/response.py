"""Outward-facing verification response."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..claims.types import VerificationResult
from ..errors import VerificationError


@dataclass(frozen=True)
class VerifyResponse:
    """
    Uniform result of a verification request.

    Exactly one of two shapes is produced: ``valid=True`` with the claim's
    fields and no error, or ``valid=False`` with only ``error`` set.
    """
    valid: bool
    twitter_handle: Optional[str] = None
    tweet_id: Optional[str] = None
    author_screen_name: Optional[str] = None
    tweet_text: Optional[str] = None
    like_verified: Optional[bool] = None
    retweet_verified: Optional[bool] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire representation (absent fields are null)."""
        return {
            "valid": self.valid,
            "twitterHandle": self.twitter_handle,
            "tweetId": self.tweet_id,
            "authorScreenName": self.author_screen_name,
            "tweetText": self.tweet_text,
            "likeVerified": self.like_verified,
            "retweetVerified": self.retweet_verified,
            "error": self.error,
        }


def assemble_success(result: VerificationResult) -> VerifyResponse:
    return VerifyResponse(
        valid=True,
        twitter_handle=result.twitter_handle,
        tweet_id=result.tweet_id,
        author_screen_name=result.author_screen_name,
        tweet_text=result.tweet_text,
        like_verified=result.like_verified,
        retweet_verified=result.retweet_verified,
    )


def assemble_failure(error: VerificationError) -> VerifyResponse:
    return VerifyResponse(valid=False, error=error.message)


__all__ = [
    "VerifyResponse",
    "assemble_success",
    "assemble_failure",
]
