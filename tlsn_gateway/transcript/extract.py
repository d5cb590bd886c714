"""Tolerant field extraction over revealed transcript text.

The received side of a transcript is a raw HTTP response fragment: headers,
possibly chunked framing, possibly redacted spans. It is never parsed as a
JSON document. Instead fields are located by literal pattern search.

Known limitations, relied on by deployed clients and kept as-is:
 - only the first occurrence of a field is considered
 - values end at the next double quote; escaped quotes truncate the value
 - nested lookups stop at the first closing brace after the parent's opening
   brace, so an inner object placed before the target field cuts it off
"""

import re

from ..errors import FieldNotFound, HandleNotFound

MAX_HANDLE_LENGTH = 15

_HANDLE_RE = re.compile(r"[A-Za-z0-9_]{1,%d}" % MAX_HANDLE_LENGTH)


def _key_patterns(field_name: str):
    # "field":"value" and "field": "value"
    return (f'"{field_name}":"', f'"{field_name}": "')


def _value_after(text: str, pattern: str):
    start = text.find(pattern)
    if start == -1:
        return None
    rest = text[start + len(pattern):]
    end = rest.find('"')
    if end == -1:
        return None
    return rest[:end]


def is_valid_handle(handle: str) -> bool:
    """Twitter handles are 1-15 ASCII letters, digits or underscores."""
    return _HANDLE_RE.fullmatch(handle) is not None


def extract_field(text: str, field_name: str) -> str:
    """Return the string value of the first ``"field_name":"..."`` in ``text``.

    An empty value counts as a miss for that spelling of the key.
    """
    for pattern in _key_patterns(field_name):
        value = _value_after(text, pattern)
        if value:
            return value
    raise FieldNotFound(field_name)


def extract_nested_field(text: str, parent_name: str, field_name: str) -> str:
    """Return ``field_name`` from inside the first ``"parent_name":{...}`` object.

    The object is delimited by the first ``}`` after its opening brace, not by
    a balanced scan.
    """
    parent_start = text.find(f'"{parent_name}":')
    if parent_start != -1:
        brace_start = text.find("{", parent_start)
        if brace_start != -1:
            brace_end = text.find("}", brace_start)
            if brace_end != -1:
                try:
                    return extract_field(text[brace_start:brace_end + 1], field_name)
                except FieldNotFound:
                    pass
    raise FieldNotFound(field_name, parent=parent_name)


def extract_handle(text: str) -> str:
    """Return the first valid ``screen_name`` value in ``text``.

    Each spelling of the key is tried once; a captured value that is not a
    valid handle falls through to the next spelling instead of being returned.
    """
    for pattern in _key_patterns("screen_name"):
        handle = _value_after(text, pattern)
        if handle and is_valid_handle(handle):
            return handle
    raise HandleNotFound()


def contains_flag(text: str, flag_name: str) -> bool:
    """True if ``"flag_name":true`` (with or without a space) appears anywhere."""
    return f'"{flag_name}":true' in text or f'"{flag_name}": true' in text


__all__ = [
    "MAX_HANDLE_LENGTH",
    "is_valid_handle",
    "extract_field",
    "extract_nested_field",
    "extract_handle",
    "contains_flag",
]
