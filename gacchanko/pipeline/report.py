"""Error report and run summary for a reconciliation result.

The error report is a flat table (`type`, `key`, `details`) with one section
per problem kind, each introduced by a heading row, ready to be handed to
whatever writes the downloadable error list.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from ..core.config import settings
from .models import CONTRACT_KEY_HEADER, ConflictEntry, ReconciliationResult


# Constants
REPORT_COLUMNS = ["type", "key", "details"]
UNMATCHED_TYPE = "未一致"
UNMATCHED_HEADING = "顧客契約データに存在しません"
CONFLICT_TYPE = "重複矛盾"
CONFLICT_HEADING = "列: 競合する値"


def _conflicts_by_key(conflicts: List[ConflictEntry]) -> Dict[str, List[ConflictEntry]]:
    grouped: Dict[str, List[ConflictEntry]] = {}
    for entry in conflicts:
        grouped.setdefault(entry.key, []).append(entry)
    return grouped


def _format_conflict_details(entries: List[ConflictEntry]) -> str:
    return "; ".join(f"{e.header}: [{', '.join(e.values)}]" for e in entries)


def error_report_rows(result: ReconciliationResult) -> List[Dict[str, str]]:
    """Return the error list rows for `result` (empty when there is nothing to report)."""
    rows: List[Dict[str, str]] = []

    if result.unmatched_keys:
        rows.append({"type": UNMATCHED_TYPE, "key": CONTRACT_KEY_HEADER, "details": UNMATCHED_HEADING})
        for raw_key in result.unmatched_keys:
            rows.append({"type": UNMATCHED_TYPE, "key": raw_key, "details": ""})

    if result.conflicts:
        rows.append({"type": CONFLICT_TYPE, "key": CONTRACT_KEY_HEADER, "details": CONFLICT_HEADING})
        for key, entries in _conflicts_by_key(result.conflicts).items():
            rows.append({"type": CONFLICT_TYPE, "key": key, "details": _format_conflict_details(entries)})

    return rows


def error_report_frame(result: ReconciliationResult) -> pd.DataFrame:
    return pd.DataFrame(error_report_rows(result), columns=REPORT_COLUMNS)


def summarize(result: ReconciliationResult) -> Dict[str, Any]:
    """Counts and short previews of the problems found in a run.

    Preview sizes come from `settings.UNMATCHED_PREVIEW_LIMIT` and
    `settings.CONFLICT_PREVIEW_LIMIT`.
    """
    grouped = _conflicts_by_key(result.conflicts)

    conflict_preview = [
        f"ID:{key} [{entries[0].header}]"
        for key, entries in list(grouped.items())[: settings.CONFLICT_PREVIEW_LIMIT]
    ]

    return {
        "rows": len(result.merged_rows),
        "unmatched_count": len(result.unmatched_keys),
        "conflict_count": len(grouped),
        "has_errors": result.has_errors,
        "unmatched_preview": list(result.unmatched_keys[: settings.UNMATCHED_PREVIEW_LIMIT]),
        "conflict_preview": conflict_preview,
    }


__all__ = ["REPORT_COLUMNS", "error_report_rows", "error_report_frame", "summarize"]
