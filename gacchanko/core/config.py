"""Configuration settings for the reconciliation engine.

A small Settings container used by the report helpers. Column names are
not settings: they are fixed by the output contract (see
`gacchanko.pipeline.models`).
"""
from dataclasses import dataclass


@dataclass
class Settings:
    UNMATCHED_PREVIEW_LIMIT: int = 20
    CONFLICT_PREVIEW_LIMIT: int = 5


settings = Settings()
