"""Option detection for the free-text product option cell.

Two options are looked up in the NFKC-normalized text:

- "ジライフ安心サポート" (jirife), matched literally;
- "Sma-yell" (smayell), matched case-insensitively with separators tolerated
  between "sma" and "yell" (spaces, underscores, hyphen and dash variants).

A mention directly followed by a zero-suppression marker, `(0)` or `（0）`
(optionally after whitespace), means "explicitly not selected". An option is
positive when at least one of its mentions lacks the marker.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

from .models import OptionFlags


# Constants
JIRIFE_TOKEN = "ジライフ安心サポート"
ZERO_SUPPRESSION = r"(?!\s*[(（]0[)）])"

_JIRIFE_RE = re.compile(re.escape(JIRIFE_TOKEN) + ZERO_SUPPRESSION, re.IGNORECASE)
_SMAYELL_RE = re.compile(
    r"s\s*m\s*a[\s_\-－‐ー―]*y\s*e\s*l\s*l" + ZERO_SUPPRESSION,
    re.IGNORECASE,
)


def parse_options(text: Any) -> OptionFlags:
    """Return which options are selected in one option cell."""
    if text is None:
        return OptionFlags()
    raw = str(text)
    if not raw:
        return OptionFlags()

    normalized = unicodedata.normalize("NFKC", raw)
    return OptionFlags(
        jirife=_JIRIFE_RE.search(normalized) is not None,
        smayell=_SMAYELL_RE.search(normalized) is not None,
    )


__all__ = ["JIRIFE_TOKEN", "parse_options"]
