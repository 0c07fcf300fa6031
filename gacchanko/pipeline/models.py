"""Types shared by the reconciliation pipeline.

Records are plain dicts (header name -> cell text); header names are data,
so no class models a file's columns. The fixed header names below are part
of the output contract and must not be renamed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


Record = Dict[str, str]

# Source headers (canonical spelling)
CONTRACT_KEY_HEADER = "契約ID"
DATA_KEY_HEADER = "KeiyakuNO"
ROUTE_HEADER = "KakutokuBashoName"
OPTIONS_HEADER = "ShouhinName_OP"
AUTHORITY_HEADER = "Authority"
APPROVAL_HEADER = "ShouninIDZeus"

REQUIRED_DATA_HEADERS: Tuple[str, ...] = (
    DATA_KEY_HEADER,
    ROUTE_HEADER,
    OPTIONS_HEADER,
    AUTHORITY_HEADER,
)

# Columns appended to every merged row, in this order
ROUTE_COLUMN = "販路"
AUTHORITY_COLUMN = "オーソリー結果"
JIRIFE_COLUMN = "ジライフ安心サポート"
SMAYELL_COLUMN = "Sma-yell"
APPROVAL_COLUMN = "承認ID"
OUTPUT_COLUMNS: Tuple[str, ...] = (
    ROUTE_COLUMN,
    AUTHORITY_COLUMN,
    JIRIFE_COLUMN,
    SMAYELL_COLUMN,
    APPROVAL_COLUMN,
)

ERROR_SENTINEL = "ERROR"


class ColumnMapping(BaseModel):
    """Concrete header names used for one reconciliation run.

    Built by the caller (usually via `headers.resolve_column_mapping`); the
    engine never guesses header names on its own.
    """

    model_config = ConfigDict(frozen=True)

    contract_key: str = CONTRACT_KEY_HEADER
    data_key: str = DATA_KEY_HEADER
    route: str = ROUTE_HEADER
    authority: str = AUTHORITY_HEADER
    options: str = OPTIONS_HEADER
    approval: Optional[str] = None

    @field_validator("contract_key", "data_key", "route", "authority", "options")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("header name must not be blank")
        return value

    @field_validator("approval")
    @classmethod
    def _blank_approval_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def tracked_headers(self) -> List[str]:
        return [self.route, self.authority]


class OptionFlags(NamedTuple):
    jirife: bool = False
    smayell: bool = False


@dataclass
class AggregatedRecord:
    """Per-key state built by the aggregation pass."""

    fields: Record
    jirife: bool = False
    smayell: bool = False


@dataclass(frozen=True)
class ConflictEntry:
    """Distinct non-empty values seen for one (key, header) pair.

    `values` keeps first-observation order and never holds duplicates.
    """

    key: str
    header: str
    values: Tuple[str, ...]


@dataclass(frozen=True)
class ReconciliationResult:
    merged_rows: List[Record] = field(default_factory=list)
    unmatched_keys: List[str] = field(default_factory=list)
    conflicts: List[ConflictEntry] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.unmatched_keys or self.conflicts)


__all__ = [
    "Record",
    "CONTRACT_KEY_HEADER",
    "DATA_KEY_HEADER",
    "ROUTE_HEADER",
    "OPTIONS_HEADER",
    "AUTHORITY_HEADER",
    "APPROVAL_HEADER",
    "REQUIRED_DATA_HEADERS",
    "ROUTE_COLUMN",
    "AUTHORITY_COLUMN",
    "JIRIFE_COLUMN",
    "SMAYELL_COLUMN",
    "APPROVAL_COLUMN",
    "OUTPUT_COLUMNS",
    "ERROR_SENTINEL",
    "ColumnMapping",
    "OptionFlags",
    "AggregatedRecord",
    "ConflictEntry",
    "ReconciliationResult",
]
