"""Pipeline utilities.

Helpers shared by the reconciliation steps and by pandas callers:
- to_cell_string
- records_from_frame / headers_of
- merged_frame
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

import logging
import math

import pandas as pd

from .models import Record

LOG = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cell coercion
# ---------------------------------------------------------------------------

def to_cell_string(value: Any) -> str:
    """Coerce one cell to the text the engine works with.

    - None / NaN / NaT -> ""
    - integral floats (spreadsheet readers produce 1.0 for 1) -> "1"
    - everything else -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # list-like cells: pd.isna returns an array
        return str(value)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# DataFrame <-> records
# ---------------------------------------------------------------------------

def records_from_frame(df: pd.DataFrame) -> List[Record]:
    """Convert `df` into an ordered list of records (header -> cell text).

    Column names are coerced to strings; the index is ignored.
    """
    if df is None or df.empty:
        return []

    columns = [str(c) for c in df.columns]
    if len(set(columns)) != len(columns):
        LOG.warning("Duplicated column names collapse into one record field: %s", columns)

    records: List[Record] = []
    for values in df.itertuples(index=False, name=None):
        records.append({col: to_cell_string(v) for col, v in zip(columns, values)})
    return records


def headers_of(rows: Sequence[Record]) -> List[str]:
    """Return the header names of a parsed table (keys of its first record)."""
    if not rows:
        return []
    return list(rows[0].keys())


def _column_order(rows: Iterable[Record]) -> List[str]:
    seen: dict = {}
    for row in rows:
        for col in row:
            seen.setdefault(col, None)
    return list(seen)


def merged_frame(rows: Sequence[Record]) -> pd.DataFrame:
    """Build a DataFrame from merged records.

    Columns follow first appearance across `rows`; cells missing from a
    record become "".
    """
    columns = _column_order(rows)
    if not rows:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame.from_records(list(rows), columns=columns)
    return df.fillna("")


__all__ = [
    "to_cell_string",
    "records_from_frame",
    "headers_of",
    "merged_frame",
]
