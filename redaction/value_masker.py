"""
Partial-reveal masking for single values.

Examples:
- "user@example.com" -> "use***com"
- "mypassword123"    -> "myp***123"
- "abcdef"           -> "abc***"
- "abc"              -> "***"
"""

from __future__ import annotations

from typing import Any

from redaction.log_value import kind_of

# Placeholder used for anything we cannot (or must not) partially reveal.
MASK = "***"

# Characters kept visible at each end of a long enough string.
VISIBLE_CHARS = 3


def mask_value(value: Any) -> str:
    """
    Mask a string keeping its first 3 (and, past 6 chars, last 3) characters.

    Total over any input: non-strings and empty strings become MASK.
    """
    if not isinstance(value, str) or not value:
        return MASK

    length = len(value)
    if length <= VISIBLE_CHARS:
        return MASK
    if length <= 2 * VISIBLE_CHARS:
        return value[:VISIBLE_CHARS] + MASK
    return value[:VISIBLE_CHARS] + MASK + value[-VISIBLE_CHARS:]


def mask_sensitive(value: Any) -> Any:
    """
    Replacement for the value of a field classified as sensitive.

    Strings get the partial reveal, None is kept (nothing to hide) and every
    other kind collapses to MASK without looking inside it. Numbers are never
    partially revealed.
    """
    kind = kind_of(value)
    if kind == "null":
        return value
    if kind == "string":
        return mask_value(value)
    return MASK
