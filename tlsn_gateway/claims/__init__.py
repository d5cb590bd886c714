"""
Package claims defines the claim request/result types and the per-claim
decision procedures (profile, authorship, engagement).
"""

from .types import (
    ClaimType,
    ExpectedData,
    ClaimRequest,
    VerificationResult,
)

from .verifiers import (
    verify_profile,
    verify_authorship,
    verify_engagement,
    CLAIM_CHECKS,
    ClaimVerifier,
)

__all__ = [
    'ClaimType',
    'ExpectedData',
    'ClaimRequest',
    'VerificationResult',
    'verify_profile',
    'verify_authorship',
    'verify_engagement',
    'CLAIM_CHECKS',
    'ClaimVerifier',
]
