"""Top-level package for the GACCHANKO reconciliation engine.

Subpackages:
- `core`: settings shared by the pipeline;
- `pipeline`: normalization, option parsing, aggregation, join and reports.
"""
__all__ = ["core", "pipeline"]
__version__ = "1.6.0"
