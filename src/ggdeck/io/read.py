"""
Read utilities for observation tables and summary artifacts.

Overview
- read_table(): Load a tabular file into a Polars DataFrame, choosing the reader by suffix.
- read_artifact_version(): Return the schema version embedded in a Parquet artifact.
- load_summary_records(): Read an artifact back as SummaryRecord models for plotting.

Supported formats
- .csv, .tsv (Polars CSV reader), .parquet / .pq (Polars Parquet reader),
  .json (array of objects), .ndjson / .jsonl (one object per line).

Notes
- read_table performs no validation; the preparer validates against
  ggdeck.core.tables after filtering. Given a descriptor, CSV/TSV text and bool
  columns are read with declared dtypes rather than inferred ones.
"""

from __future__ import annotations

import os
from typing import Any

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq

from ggdeck.core.errors import VersionMismatch
from ggdeck.core.schema import SummaryRecord
from ggdeck.core.tables import SUMMARY_DESC, TableDescriptor
from ggdeck.core.versioning import SchemaVersion, is_compatible, parse_version

from .errors import IoReadError
from .validate import validate_frame

SCHEMA_VERSION_KEY = b"ggdeck_schema_version"

_PARQUET_SUFFIXES = (".parquet", ".pq")


def _suffix(path: str | os.PathLike[str]) -> str:
    return os.path.splitext(os.fspath(path))[1].lower()


def _text_overrides(p: str, separator: str, desc: TableDescriptor) -> dict[str, Any]:
    # "01" and "1" are distinct ids; a header-only file still yields a bool column.
    header = pl.scan_csv(p, separator=separator).collect_schema().names()
    wanted = {c: pl.Utf8 for c in desc.columns_of("str")}
    wanted.update({c: pl.Boolean for c in desc.columns_of("bool")})
    return {c: dtype for c, dtype in wanted.items() if c in header}


def _read_delimited(p: str, separator: str, desc: TableDescriptor | None) -> pl.DataFrame:
    overrides = _text_overrides(p, separator, desc) if desc is not None else None
    return pl.read_csv(p, separator=separator, schema_overrides=overrides)


def read_table(
    path: str | os.PathLike[str], desc: TableDescriptor | None = None
) -> pl.DataFrame:
    """
    Load a tabular file into a DataFrame.

    Args:
        path: File path; the suffix selects the reader.
        desc: Optional descriptor. For CSV/TSV its "str" columns are read as text
            and its "bool" columns as booleans instead of being inferred.

    Returns:
        pl.DataFrame: Materialized frame (possibly empty).

    Raises:
        IoReadError: If the file does not exist, its suffix is not supported, or
            the reader cannot decode it.
    """
    p = os.fspath(path)
    if not os.path.isfile(p):
        raise IoReadError(f"input table not found: {p}")
    ext = _suffix(p)
    try:
        if ext == ".csv":
            return _read_delimited(p, ",", desc)
        if ext == ".tsv":
            return _read_delimited(p, "\t", desc)
        if ext in _PARQUET_SUFFIXES:
            return pl.read_parquet(p)
        if ext == ".json":
            return pl.read_json(p)
        if ext in (".ndjson", ".jsonl"):
            return pl.read_ndjson(p)
    except (pl.exceptions.PolarsError, OSError) as exc:
        raise IoReadError(f"cannot read {p}: {exc}") from exc
    raise IoReadError(f"unsupported input format {ext!r} for {p}")


def _parquet_metadata(p: str) -> dict[bytes, bytes]:
    try:
        return pq.read_schema(p).metadata or {}
    except (pa.ArrowException, OSError) as exc:
        raise IoReadError(f"cannot read parquet schema of {p}: {exc}") from exc


def read_artifact_version(path: str | os.PathLike[str]) -> SchemaVersion | None:
    """
    Return the schema version embedded in a Parquet artifact, or None when absent.

    Notes:
        CSV artifacts carry no metadata and always return None.
    """
    p = os.fspath(path)
    if _suffix(p) not in _PARQUET_SUFFIXES:
        return None
    raw = _parquet_metadata(p).get(SCHEMA_VERSION_KEY)
    if raw is None:
        return None
    return parse_version(raw.decode("utf-8"))


def read_artifact_metadata(path: str | os.PathLike[str]) -> dict[str, str]:
    """Return the ggdeck_* key-value metadata of a Parquet artifact as a str dict."""
    p = os.fspath(path)
    if _suffix(p) not in _PARQUET_SUFFIXES:
        return {}
    meta = _parquet_metadata(p)
    return {
        k.decode("utf-8"): v.decode("utf-8") for k, v in meta.items() if k.startswith(b"ggdeck_")
    }


def load_summary_records(path: str | os.PathLike[str]) -> list[SummaryRecord]:
    """
    Read a summary artifact back as SummaryRecord models.

    Args:
        path: Artifact written by ggdeck.io.write.write_summary.

    Returns:
        list[SummaryRecord]: One record per (subject, condition group), in file order.

    Raises:
        IoReadError: If the file is missing, unreadable, or in an unsupported format.
        VersionMismatch: If the embedded schema version is incompatible with SCHEMA_V.
        IoSchemaError: If the artifact lacks summary columns.
    """
    ver = read_artifact_version(path)
    if ver is not None and not is_compatible(ver):
        raise VersionMismatch(f"artifact {os.fspath(path)} was written with schema {ver}")
    df = validate_frame(read_table(path, SUMMARY_DESC), SUMMARY_DESC)
    rows = df.select(list(SUMMARY_DESC.columns)).iter_rows(named=True)
    return [SummaryRecord.model_validate(row) for row in rows]
