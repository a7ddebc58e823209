"""
Text utilities for sanitizing loosely-typed request fields.

Request items arrive as parsed JSON (or form fields), so any key may hold a
string, number, bool, null, list or object.
"""

import re
from typing import Any


_TAG_RE = re.compile(r"<[^>]*>")
_PERCENT_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")
_LEADING_INT_RE = re.compile(r"\s*[+-]?0*([0-9]+)")

# Largest integer the catalog stores (signed 64-bit)
MAX_INT = 2**63 - 1


def to_text(value: Any) -> str:
    """
    Cast a scalar to text the way a form field would read.

    - None → ""
    - True → "1", False → ""
    - Numbers → their decimal form
    - Lists / dicts → "" (no meaningful text form)
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def has_text(value: Any) -> bool:
    """
    Check whether a field counts as provided.

    A field is provided when it is not null and its text form is non-empty
    after trimming. Lists and dicts count as provided: they are malformed,
    not missing.
    """
    if value is None:
        return False
    if isinstance(value, (list, dict)):
        return True
    return to_text(value).strip() != ""


def sanitize_text(value: Any) -> str:
    """
    Sanitize a single-line text field.

    - Strips HTML tags
    - Removes percent-encoded octets ("%2F")
    - Collapses line breaks, tabs and repeated spaces
    - Trims

    Examples:
        "  AA-1  " → "AA-1"
        "<b>AA</b>-1" → "AA-1"
        "AA\\n 1" → "AA 1"
    """
    text = to_text(value)
    if not text:
        return ""

    text = _TAG_RE.sub("", text)
    text = _PERCENT_OCTET_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)

    return text.strip()


def to_absint(value: Any) -> int:
    """
    Coerce a value to a non-negative integer.

    - bool → 0 or 1
    - int → abs(value)
    - float → abs(int(value)) (truncated)
    - str → leading integer, e.g. "42abc" → 42, " -7" → 7, "abc" → 0,
      saturating at MAX_INT
    - anything else → 0
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return abs(int(value))
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if not match:
            return 0
        digits = match.group(1)
        if len(digits) > len(str(MAX_INT)):
            return MAX_INT
        return min(int(digits), MAX_INT)
    return 0
