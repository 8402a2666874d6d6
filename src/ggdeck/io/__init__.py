"""
ggdeck.io — IO layer for observation tables and summary artifacts.

## Responsibilities
- Load raw observation tables (CSV/TSV/Parquet/JSON) with Polars.
- Validate frames against ggdeck.core.tables descriptors.
- Write summary artifacts atomically (tmp → fsync → os.replace), tagging Parquet
  artifacts with SCHEMA_V, and write a manifest JSON per artifact.
- Resolve PrepSettings from environment, TOML, and defaults.

## Public API
- PrepSettings — filter selection and artifact options.
- read_table, load_summary_records — readers.
- write_summary, write_manifest — writers.

## Import DAG discipline
- Depends only on stdlib, polars/pyarrow, and ggdeck.core.*.
- MUST NOT import ggdeck.prep or ggdeck.viz.
"""

from __future__ import annotations

from .config import PrepSettings
from .read import load_summary_records, read_table
from .write import write_manifest, write_summary

__all__ = [
    "PrepSettings",
    "read_table",
    "load_summary_records",
    "write_summary",
    "write_manifest",
]
