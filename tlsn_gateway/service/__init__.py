"""
Package service exposes the verification service and its response type.
"""

from .response import VerifyResponse, assemble_success, assemble_failure
from .service import VerificationService, create_service

__all__ = [
    "VerifyResponse",
    "assemble_success",
    "assemble_failure",
    "VerificationService",
    "create_service",
]
