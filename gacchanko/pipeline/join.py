"""Join contract rows with the aggregated data records.

Contract order is the output order: every contract row (duplicates
included) produces exactly one merged row, with the five output columns
appended after the original contract columns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import (
    APPROVAL_COLUMN,
    AUTHORITY_COLUMN,
    ERROR_SENTINEL,
    JIRIFE_COLUMN,
    ROUTE_COLUMN,
    SMAYELL_COLUMN,
    AggregatedRecord,
    ColumnMapping,
    Record,
)
from .normalize import normalize_key, trim
from .utils import to_cell_string


LOG = logging.getLogger(__name__)

UNMATCHED_VALUES: Dict[str, str] = {
    ROUTE_COLUMN: "",
    AUTHORITY_COLUMN: "",
    JIRIFE_COLUMN: "0",
    SMAYELL_COLUMN: "0",
    APPROVAL_COLUMN: ERROR_SENTINEL,
}


@dataclass(frozen=True)
class JoinResult:
    merged_rows: List[Record] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _approval_id(record: AggregatedRecord, approval_header: Optional[str]) -> str:
    if not approval_header:
        return ERROR_SENTINEL
    value = trim(record.fields.get(approval_header))
    return value or ERROR_SENTINEL


def _derived_values(record: AggregatedRecord, field_map: ColumnMapping) -> Dict[str, str]:
    """Return the five output columns for a matched contract row."""
    return {
        ROUTE_COLUMN: to_cell_string(record.fields.get(field_map.route)),
        AUTHORITY_COLUMN: to_cell_string(record.fields.get(field_map.authority)),
        JIRIFE_COLUMN: _flag(record.jirife),
        SMAYELL_COLUMN: _flag(record.smayell),
        APPROVAL_COLUMN: _approval_id(record, field_map.approval),
    }


def join(
    contract_rows: Iterable[Record],
    contract_key_header: str,
    per_key: Dict[str, AggregatedRecord],
    field_map: ColumnMapping,
) -> JoinResult:
    """Build merged rows in contract order and collect unmatched keys.

    Unmatched rows receive empty route/authority, "0" flags and the ERROR
    approval id. Their raw key is reported only when it normalizes to a
    non-empty key; rows without a key are defaulted silently.
    """
    merged: List[Record] = []
    unmatched: List[str] = []

    for row in contract_rows:
        raw_key = row.get(contract_key_header)
        key = normalize_key(raw_key)
        record = per_key.get(key) if key else None

        out = dict(row)
        if record is not None:
            out.update(_derived_values(record, field_map))
        else:
            if key:
                unmatched.append(to_cell_string(raw_key))
            out.update(UNMATCHED_VALUES)
        merged.append(out)

    if unmatched:
        LOG.debug("%d contract rows have no data record", len(unmatched))

    return JoinResult(merged_rows=merged, unmatched=unmatched)


__all__ = ["UNMATCHED_VALUES", "JoinResult", "join"]
