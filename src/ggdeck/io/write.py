"""
Atomic writer for summary artifacts and their run manifests.

Overview
- write_summary(): Validate a summary frame and write it as Parquet (with key-value
  metadata) or CSV, choosing the format by suffix. tmp → fsync → os.replace.
- write_manifest(): Write <artifact>.manifest.json describing how the artifact was made.
- file_sha256(): Digest of an input file, recorded in manifests.

Source of truth
- Summary columns/dtypes: ggdeck.core.tables.SUMMARY_DESC.
- Schema version metadata: ggdeck.core.versioning.SCHEMA_V.

Notes
- Single-writer semantics; artifacts are written once and read thereafter.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import polars as pl
import pyarrow.parquet as pq

from ggdeck.core.constants import MANIFEST_SUFFIX
from ggdeck.core.hashing import json_dumps_canonical
from ggdeck.core.tables import SUMMARY_DESC
from ggdeck.core.versioning import SCHEMA_V, format_version

from .config import PrepSettings
from .errors import IoWriteError
from .fs import fsync_path, makedirs, open_write, remove_quietly, rename_atomic
from .read import SCHEMA_VERSION_KEY
from .validate import validate_frame


def _now_iso() -> str:
    """Return the current UTC time in ISO-8601 format with a Z suffix."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def manifest_path_for(artifact_path: str | os.PathLike[str]) -> str:
    """Return the manifest path that accompanies an artifact."""
    return os.fspath(artifact_path) + MANIFEST_SUFFIX


def file_sha256(path: str | os.PathLike[str], chunk_size: int = 1 << 20) -> str:
    """Compute the SHA-256 hex digest of a file, reading in chunks."""
    h = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def write_summary(
    df: pl.DataFrame,
    path: str | os.PathLike[str],
    settings: PrepSettings,
    *,
    metadata: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Atomically write a summary frame.

    Args:
        df (pl.DataFrame): Summary frame with SUMMARY_DESC columns.
        path: Final artifact path. ".csv" writes CSV; anything else writes Parquet.
        settings (PrepSettings): Supplies the Parquet compression codec.
        metadata: Extra key-value pairs embedded (prefixed "ggdeck_") in Parquet metadata.

    Returns:
        dict[str, Any]: {"path": str, "rows": int, "bytes": int, "format": "parquet"|"csv"}

    Raises:
        IoSchemaError: If the frame does not match SUMMARY_DESC.
        IoWriteError: If the tmp write, fsync, or rename fails.

    Notes:
        Parquet artifacts embed:
            b"ggdeck_schema_version" = "<major>.<minor>@<date>"
            b"ggdeck_<key>"          = value for each metadata item
    """
    df = validate_frame(df, SUMMARY_DESC).select(list(SUMMARY_DESC.columns))
    final = os.fspath(path)
    makedirs(os.path.dirname(final), exist_ok=True)
    tmp = final + ".tmp"
    fmt = "csv" if final.lower().endswith(".csv") else "parquet"

    try:
        if fmt == "csv":
            df.write_csv(tmp)
        else:
            arrow_table = df.to_arrow()
            meta = dict(arrow_table.schema.metadata or {})
            meta[SCHEMA_VERSION_KEY] = format_version(SCHEMA_V).encode("utf-8")
            for key, value in (metadata or {}).items():
                meta[f"ggdeck_{key}".encode()] = str(value).encode("utf-8")
            arrow_table = arrow_table.replace_schema_metadata(meta)
            pq.write_table(arrow_table, tmp, compression=settings.compression)
        fsync_path(tmp)
        rename_atomic(tmp, final)
    except Exception as exc:
        remove_quietly(tmp)
        raise IoWriteError(f"failed to write summary artifact {final}: {exc}") from exc

    return {
        "path": final,
        "rows": int(df.height),
        "bytes": int(os.path.getsize(final)),
        "format": fmt,
    }


def write_manifest(meta: Mapping[str, Any], artifact_path: str | os.PathLike[str]) -> str:
    """
    Atomically write a manifest JSON next to an artifact.

    Args:
        meta: JSON-serializable run metadata (parameters, row counts, digests).
        artifact_path: The artifact the manifest describes.

    Returns:
        str: Path of the written manifest.

    Raises:
        IoWriteError: If the manifest cannot be written.
    """
    path = manifest_path_for(artifact_path)
    payload = {
        "timestamp": _now_iso(),
        "schema_version": format_version(SCHEMA_V),
        **meta,
    }
    tmp = path + ".tmp"
    try:
        with open_write(tmp) as fh:
            fh.write(json_dumps_canonical(payload).encode("utf-8"))
        rename_atomic(tmp, path)
    except Exception as exc:
        remove_quietly(tmp)
        raise IoWriteError(f"failed to write manifest {path}: {exc}") from exc
    return path
