"""Per-key aggregation of the data table.

Data rows are grouped by normalized join key in one pass:

- the first row seen for a key becomes the base record;
- tracked fields follow first-non-empty-wins: an empty field is filled by
  the first later row that has a value, a non-empty field is never replaced;
- two different non-empty values for a tracked field are reported as a
  conflict (the first value still stands);
- option flags are OR'd over every row sharing the key.

Rows whose key normalizes to "" are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .models import AggregatedRecord, ConflictEntry, Record
from .normalize import normalize_key, trim
from .options import parse_options
from .utils import to_cell_string


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class Aggregation:
    per_key: Dict[str, AggregatedRecord] = field(default_factory=dict)
    conflicts: List[ConflictEntry] = field(default_factory=list)


class _ConflictLog:
    """Collects conflicting values grouped by key, then by header."""

    def __init__(self) -> None:
        self._by_key: Dict[str, Dict[str, Dict[str, None]]] = {}

    def add(self, key: str, header: str, existing: str, incoming: str) -> None:
        headers = self._by_key.setdefault(key, {})
        values = headers.setdefault(header, {})
        values.setdefault(existing, None)
        values.setdefault(incoming, None)

    def entries(self) -> List[ConflictEntry]:
        return [
            ConflictEntry(key=key, header=header, values=tuple(values))
            for key, headers in self._by_key.items()
            for header, values in headers.items()
        ]


def _merge_field(
    record: AggregatedRecord,
    row: Record,
    key: str,
    header: str,
    conflicts: _ConflictLog,
) -> None:
    existing = trim(record.fields.get(header))
    incoming_raw = to_cell_string(row.get(header))
    incoming = trim(incoming_raw)

    if not incoming:
        return
    if not existing:
        record.fields[header] = incoming_raw
        return
    if existing != incoming:
        LOG.debug("Conflict for key %s on %s: %r != %r", key, header, existing, incoming)
        conflicts.add(key, header, existing, incoming)


def aggregate(
    data_rows: Iterable[Record],
    key_header: str,
    tracked_headers: Sequence[str],
    option_header: str,
    approval_header: Optional[str] = None,
) -> Aggregation:
    """Aggregate `data_rows` by normalized `key_header`.

    `tracked_headers` (route, authority result) and `approval_header`, when
    given, are merged with first-non-empty-wins and checked for conflicts.
    Returns the per-key records and the conflicts found, ordered by key and
    then by header.
    """
    headers: List[str] = list(tracked_headers)
    if approval_header:
        headers.append(approval_header)

    per_key: Dict[str, AggregatedRecord] = {}
    conflicts = _ConflictLog()
    skipped = 0

    for row in data_rows:
        key = normalize_key(row.get(key_header))
        if not key:
            skipped += 1
            continue

        flags = parse_options(row.get(option_header))
        record = per_key.get(key)

        if record is None:
            per_key[key] = AggregatedRecord(
                fields={str(h): to_cell_string(v) for h, v in row.items()},
                jirife=flags.jirife,
                smayell=flags.smayell,
            )
            continue

        for header in headers:
            _merge_field(record, row, key, header, conflicts)

        record.jirife = record.jirife or flags.jirife
        record.smayell = record.smayell or flags.smayell

    if skipped:
        LOG.debug("Skipped %d data rows without a usable key", skipped)

    return Aggregation(per_key=per_key, conflicts=conflicts.entries())


__all__ = ["Aggregation", "aggregate"]
