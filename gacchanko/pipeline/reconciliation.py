"""Reconciliation pipeline.

Facade over the aggregation and join steps. The engine works on in-memory
records only; reading files and validating headers happen before it runs
(see `headers`), and anomalies in the data are reported, never raised.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import pandas as pd

from .aggregation import aggregate
from .headers import resolve_column_mapping
from .join import join
from .models import ColumnMapping, ReconciliationResult, Record
from .utils import headers_of, records_from_frame


LOG = logging.getLogger(__name__)


def run_reconciliation(
    contract_rows: Iterable[Record],
    data_rows: Iterable[Record],
    mapping: Optional[ColumnMapping] = None,
) -> ReconciliationResult:
    """Merge `contract_rows` with the aggregated `data_rows`.

    Returns the merged table (contract order), the raw contract keys that
    found no data record and the conflicts seen while aggregating.
    """
    mapping = mapping or ColumnMapping()

    aggregation = aggregate(
        data_rows,
        key_header=mapping.data_key,
        tracked_headers=mapping.tracked_headers,
        option_header=mapping.options,
        approval_header=mapping.approval,
    )
    joined = join(contract_rows, mapping.contract_key, aggregation.per_key, mapping)

    LOG.info(
        "Reconciled %d contract rows against %d data keys (%d unmatched, %d conflicts)",
        len(joined.merged_rows),
        len(aggregation.per_key),
        len(joined.unmatched),
        len(aggregation.conflicts),
    )
    return ReconciliationResult(
        merged_rows=joined.merged_rows,
        unmatched_keys=joined.unmatched,
        conflicts=aggregation.conflicts,
    )


def reconcile_records(contract_rows: Sequence[Record], data_rows: Sequence[Record]) -> ReconciliationResult:
    """Resolve headers from the first record of each table and run the reconciliation.

    For callers holding parsed records (header -> cell) rather than DataFrames.
    Raises MissingHeadersError when a required header is absent, including
    when a table has no rows.
    """
    mapping = resolve_column_mapping(headers_of(contract_rows), headers_of(data_rows))
    return run_reconciliation(contract_rows, data_rows, mapping)


def reconcile_frames(contract_df: pd.DataFrame, data_df: pd.DataFrame) -> ReconciliationResult:
    """Resolve headers from two DataFrames and run the reconciliation.

    Raises MissingHeadersError when a required header is absent.
    """
    mapping = resolve_column_mapping(
        [str(c) for c in contract_df.columns],
        [str(c) for c in data_df.columns],
    )
    return run_reconciliation(records_from_frame(contract_df), records_from_frame(data_df), mapping)


__all__ = ["run_reconciliation", "reconcile_records", "reconcile_frames"]
