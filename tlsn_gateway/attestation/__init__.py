"""
Package attestation wraps cryptographic verification of TLS notary
presentations. Verification itself is an injected capability
(PresentationVerifier); this package provides the adapter that vets its
output and a reference Ed25519 presentation format.
"""

from .types import (
    PartialTranscript,
    AttestationOutput,
    AttestedTranscript,
    PresentationVerifier,
)

from .adapter import AttestationAdapter

from .ed25519 import (
    NotaryKey,
    PresentationBody,
    SignedPresentation,
    new_notary_key,
    canonical_body,
    body_digest,
    sign_presentation,
    encode_presentation,
    decode_presentation,
    Ed25519PresentationVerifier,
)

__all__ = [
    'PartialTranscript',
    'AttestationOutput',
    'AttestedTranscript',
    'PresentationVerifier',
    'AttestationAdapter',
    'NotaryKey',
    'PresentationBody',
    'SignedPresentation',
    'new_notary_key',
    'canonical_body',
    'body_digest',
    'sign_presentation',
    'encode_presentation',
    'decode_presentation',
    'Ed25519PresentationVerifier',
]
