"""
TLSN Gateway Python Package

Verification gateway for TLS-notarized proofs of Twitter/X account control,
post authorship and engagement.
"""

__version__ = "0.1.0"

from .config import GatewayConfig, TrustConfig, CryptoConfig
from .errors import VerificationError
from .proof import ProofEnvelope, parse_envelope, decode_hex
from .claims import ClaimType, ClaimRequest, ExpectedData, VerificationResult, ClaimVerifier
from .service import VerificationService, VerifyResponse, create_service

# Import attestation package
from . import attestation

__all__ = [
    "GatewayConfig",
    "TrustConfig",
    "CryptoConfig",
    "VerificationError",
    "ProofEnvelope",
    "parse_envelope",
    "decode_hex",
    "ClaimType",
    "ClaimRequest",
    "ExpectedData",
    "VerificationResult",
    "ClaimVerifier",
    "VerificationService",
    "VerifyResponse",
    "create_service",
    "attestation",
]
