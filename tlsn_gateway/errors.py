"""
Error hierarchy for proof verification.

Every failure raised inside the pipeline derives from VerificationError and is
terminal for the request. The outward contract only carries the message
string; ``kind`` is kept for logging and metrics labels.
"""

from typing import Optional


class VerificationError(Exception):
    """Base class for all verification failures."""
    kind: str = "verification"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self):
        return {"kind": self.kind, "message": self.message}


# --- Envelope format -----------------------------------------------------------

class FormatError(VerificationError):
    kind = "format"


class MalformedEnvelope(FormatError):
    kind = "malformed_envelope"

    def __init__(self, detail: str):
        super().__init__(f"Invalid proof format: {detail}")


class MalformedRequest(FormatError):
    kind = "malformed_request"

    def __init__(self, detail: str):
        super().__init__(f"Invalid request format: {detail}")


class MissingData(FormatError):
    kind = "missing_data"

    def __init__(self):
        super().__init__("Missing proof data")


class InvalidEncoding(FormatError):
    kind = "invalid_encoding"

    def __init__(self, detail: str):
        super().__init__(f"Invalid hex data: {detail}")


class PayloadTooLarge(FormatError):
    kind = "payload_too_large"

    def __init__(self, size: int, limit: int):
        super().__init__(f"Proof data too large: {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


# --- Trust policy --------------------------------------------------------------

class UnsupportedVersion(VerificationError):
    kind = "unsupported_version"

    def __init__(self, version: str):
        super().__init__(f"Unsupported proof version: {version}")
        self.version = version


class UntrustedNotary(VerificationError):
    kind = "untrusted_notary"

    def __init__(self, notary_url: str):
        super().__init__(f"Untrusted notary: {notary_url}")
        self.notary_url = notary_url


# --- Cryptographic verification ------------------------------------------------

class CryptoError(VerificationError):
    kind = "crypto"


class DeserializationFailed(CryptoError):
    kind = "deserialization_failed"

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(f"Failed to deserialize presentation: {detail}", cause)


class AttestationVerificationFailed(CryptoError):
    kind = "attestation_verification_failed"

    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        super().__init__(f"Presentation verification failed: {detail}", cause)


# --- Server identity -----------------------------------------------------------

class IdentityError(VerificationError):
    kind = "identity"


class NoServerIdentity(IdentityError):
    kind = "no_server_identity"

    def __init__(self):
        super().__init__("No server identity in proof")


class ServerIdentityMismatch(IdentityError):
    kind = "server_identity_mismatch"

    def __init__(self, server_name: str):
        super().__init__(f"Proof not from Twitter API: {server_name}")
        self.server_name = server_name


# --- Transcript content --------------------------------------------------------

class TranscriptError(VerificationError):
    kind = "transcript"


class NoTranscript(TranscriptError):
    kind = "no_transcript"

    def __init__(self):
        super().__init__("No transcript data in proof")


class FieldNotFound(TranscriptError):
    kind = "field_not_found"

    def __init__(self, field_name: str, parent: Optional[str] = None):
        if parent:
            message = f"Could not find nested field '{parent}.{field_name}'"
        else:
            message = f"Could not find field '{field_name}' in data"
        super().__init__(message)
        self.field_name = field_name
        self.parent = parent


class HandleNotFound(TranscriptError):
    kind = "handle_not_found"

    def __init__(self):
        super().__init__("Could not extract Twitter handle from verified transcript")


class TweetIdNotFound(TranscriptError):
    kind = "tweet_id_not_found"

    def __init__(self, fields):
        super().__init__(f"Could not find tweet id in data (tried {', '.join(fields)})")


class AuthorNotFound(TranscriptError):
    kind = "author_not_found"

    def __init__(self):
        super().__init__("Could not find tweet author in verified transcript")


# --- Claim decisions -----------------------------------------------------------

class EngagementError(VerificationError):
    kind = "engagement"


class NoEngagementDetected(EngagementError):
    kind = "no_engagement"

    def __init__(self):
        super().__init__("No engagement (like or retweet) detected in proof")


class UnknownClaimType(VerificationError):
    kind = "unknown_claim_type"

    def __init__(self, claim_type: str):
        super().__init__(f"Unknown quest type: {claim_type}")
        self.claim_type = claim_type


__all__ = [
    "VerificationError",
    "FormatError",
    "MalformedEnvelope",
    "MalformedRequest",
    "MissingData",
    "InvalidEncoding",
    "PayloadTooLarge",
    "UnsupportedVersion",
    "UntrustedNotary",
    "CryptoError",
    "DeserializationFailed",
    "AttestationVerificationFailed",
    "IdentityError",
    "NoServerIdentity",
    "ServerIdentityMismatch",
    "TranscriptError",
    "NoTranscript",
    "FieldNotFound",
    "HandleNotFound",
    "TweetIdNotFound",
    "AuthorNotFound",
    "EngagementError",
    "NoEngagementDetected",
    "UnknownClaimType",
]
