"""
Package transcript extracts claim-relevant values from the revealed,
server-to-client side of an attested transcript.
"""

from .extract import (
    MAX_HANDLE_LENGTH,
    is_valid_handle,
    extract_field,
    extract_nested_field,
    extract_handle,
    contains_flag,
)

__all__ = [
    'MAX_HANDLE_LENGTH',
    'is_valid_handle',
    'extract_field',
    'extract_nested_field',
    'extract_handle',
    'contains_flag',
]
