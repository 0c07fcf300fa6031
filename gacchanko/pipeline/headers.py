"""Resolve required headers before running the engine.

Raw files rarely spell headers exactly: contract exports carry a BOM or
full-width characters, data exports vary in case and padding. These helpers
map the canonical header names to the concrete ones present in each source
and fail with `MissingHeadersError` when a required header is absent.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import (
    APPROVAL_HEADER,
    AUTHORITY_HEADER,
    CONTRACT_KEY_HEADER,
    DATA_KEY_HEADER,
    OPTIONS_HEADER,
    REQUIRED_DATA_HEADERS,
    ROUTE_HEADER,
    ColumnMapping,
)
from .normalize import normalize_header, normalize_header_for_matching


LOG = logging.getLogger(__name__)

CONTRACT_SOURCE = "contract"
DATA_SOURCE = "data"


class MissingHeadersError(ValueError):
    """Raised when a source lacks one or more required headers."""

    def __init__(self, source: str, missing_headers: List[str]):
        self.source = source
        self.missing_headers = list(missing_headers)
        super().__init__(
            f"Missing required headers in {source} table: {', '.join(self.missing_headers)}"
        )


def resolve_contract_key_header(headers: Iterable[str]) -> str:
    """Return the contract header matching `契約ID`.

    Matching ignores a leading BOM, full/half-width differences, whitespace
    and case. The first matching header wins.
    """
    target = normalize_header_for_matching(CONTRACT_KEY_HEADER)
    for header in headers:
        if normalize_header_for_matching(header) == target:
            return header
    raise MissingHeadersError(CONTRACT_SOURCE, [CONTRACT_KEY_HEADER])


def resolve_data_headers(headers: Iterable[str]) -> Dict[str, str]:
    """Map canonical data headers to the concrete headers present.

    Headers are compared trimmed and lowercased; when two headers fold to the
    same name the last one wins. The optional approval header is included
    only when present.
    """
    by_normalized = {normalize_header(h): h for h in headers}

    resolved: Dict[str, str] = {}
    missing: List[str] = []
    for canonical in REQUIRED_DATA_HEADERS:
        actual = by_normalized.get(normalize_header(canonical))
        if actual is None:
            missing.append(canonical)
        else:
            resolved[canonical] = actual
    if missing:
        raise MissingHeadersError(DATA_SOURCE, missing)

    approval: Optional[str] = by_normalized.get(normalize_header(APPROVAL_HEADER))
    if approval is not None:
        resolved[APPROVAL_HEADER] = approval
    else:
        LOG.debug("Optional header %s not found; approval ids fall back to ERROR", APPROVAL_HEADER)
    return resolved


def resolve_column_mapping(contract_headers: Iterable[str], data_headers: Iterable[str]) -> ColumnMapping:
    """Build the ColumnMapping for a pair of sources."""
    contract_key = resolve_contract_key_header(contract_headers)
    data = resolve_data_headers(data_headers)
    return ColumnMapping(
        contract_key=contract_key,
        data_key=data[DATA_KEY_HEADER],
        route=data[ROUTE_HEADER],
        authority=data[AUTHORITY_HEADER],
        options=data[OPTIONS_HEADER],
        approval=data.get(APPROVAL_HEADER),
    )


__all__ = [
    "MissingHeadersError",
    "resolve_contract_key_header",
    "resolve_data_headers",
    "resolve_column_mapping",
]
