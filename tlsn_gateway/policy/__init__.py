"""
Package policy holds the trust rules applied to a proof envelope before any
cryptographic work is attempted.
"""

from .trust import (
    PolicyResult,
    Policy,
    check_version,
    check_notary,
    VersionPolicy,
    NotaryAllowlistPolicy,
    TrustPolicy,
)

__all__ = [
    'PolicyResult',
    'Policy',
    'check_version',
    'check_notary',
    'VersionPolicy',
    'NotaryAllowlistPolicy',
    'TrustPolicy',
]
