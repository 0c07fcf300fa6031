"""Text normalization for join keys and header names.

All helpers are pure and total: `None` or empty input returns "".
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any


# Constants
BOM = "\ufeff"
# full-width minus, hyphen, katakana long vowel mark, horizontal bar
DASH_CHARS = "－‐ー―"
_DASH_RE = re.compile(f"[{DASH_CHARS}]")
# U+FEFF counts as whitespace here, unlike in str.strip() and re's \s
_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")
_KEY_STRIP_RE = re.compile(r"[\s\ufeff-]")
_TRIM_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(raw: Any) -> str:
    """Strip leading/trailing whitespace and byte-order marks."""
    if raw is None:
        return ""
    return _TRIM_RE.sub("", str(raw))


def normalize_key(raw: Any) -> str:
    """Normalize a raw join-key cell.

    trim -> NFKC -> dash variants to "-" -> uppercase -> drop whitespace
    and hyphens. So "A-001", "a 001" and "Ａ－００１" all give "A001".
    """
    text = trim(raw)
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)
    text = _DASH_RE.sub("-", text)
    return _KEY_STRIP_RE.sub("", text.upper())


def normalize_header_for_matching(raw: Any) -> str:
    """Fold a header name for equality checks (BOM, width, spacing, case).

    Never used to rename headers in output.
    """
    if raw is None:
        return ""
    text = str(raw)
    if text.startswith(BOM):
        text = text[1:]
    text = unicodedata.normalize("NFKC", text)
    return _WHITESPACE_RE.sub("", text).lower()


def normalize_header(raw: Any) -> str:
    """Trim (BOM included) and lowercase a header name."""
    return trim(raw).lower()


__all__ = ["trim", "normalize_key", "normalize_header_for_matching", "normalize_header"]
