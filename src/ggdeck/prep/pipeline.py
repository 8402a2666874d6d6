"""
Example-data preparer: filter → derive → group → aggregate.

Overview
- summarize_observations(): Polars query over an observation frame. Retains rows of
  one region/parameter pair, derives ``difference = correlation_by_condition -
  correlation_overall`` and ``is_target_condition = stimulus_type == target``, groups
  by (is_target_condition, subject_id), and averages the difference per group.
- prepare_example_data(): Same pipeline over a sequence of ObservationRecord or
  mappings, returning SummaryRecord models.
- prepare_frame() / prepare_file(): Run the pipeline and persist the artifact plus
  its manifest.

Semantics
- Means are unweighted and computed independently per group; a one-row group
  yields that row's own difference.
- Exactly one output row per distinct group among the retained rows. Output is
  sorted by (subject_id, is_target_condition) so repeated runs write identical files.
- No retained rows → empty result and an EmptyResultWarning, never an exception.
- Rows outside the filter are never validated; retained rows with missing fields or
  non-numeric correlations raise InputError.
"""

from __future__ import annotations

import os
import warnings
from collections.abc import Iterable, Mapping
from typing import Any

import polars as pl

from ggdeck.core.errors import EmptyResultWarning, InputError
from ggdeck.core.hashing import hash_params
from ggdeck.core.schema import ObservationRecord, SummaryRecord, observation_from_value
from ggdeck.core.tables import OBSERVATIONS_DESC, SUMMARY_DESC
from ggdeck.io.config import PrepSettings
from ggdeck.io.read import read_table
from ggdeck.io.validate import check_columns, validate_frame
from ggdeck.io.write import file_sha256, write_manifest, write_summary

__all__ = [
    "summarize_observations",
    "prepare_example_data",
    "prepare_frame",
    "prepare_file",
]

_OBSERVATION_SCHEMA: dict[str, Any] = {
    "region": pl.Utf8,
    "parameter": pl.Utf8,
    "stimulus_type": pl.Utf8,
    "subject_id": pl.Utf8,
    "correlation_by_condition": pl.Float64,
    "correlation_overall": pl.Float64,
}

_SUMMARY_SCHEMA: dict[str, Any] = {
    "subject_id": pl.Utf8,
    "is_target_condition": pl.Boolean,
    "difference_metric": pl.Float64,
}


def _empty_summary() -> pl.DataFrame:
    return pl.DataFrame(schema=_SUMMARY_SCHEMA)


def summarize_observations(
    frame: pl.DataFrame | pl.LazyFrame,
    region: str,
    parameter: str,
    target_stimulus: str,
) -> pl.DataFrame:
    """
    Reduce an observation frame to one difference metric per (subject, condition group).

    Args:
        frame: Observation rows with the OBSERVATIONS_DESC columns (extra columns ignored).
        region: Region value to retain.
        parameter: Parameter value to retain.
        target_stimulus: Stimulus value that marks the target condition group.

    Returns:
        pl.DataFrame: Columns subject_id (str), is_target_condition (bool),
        difference_metric (f64); sorted by subject_id then is_target_condition.

    Raises:
        IoSchemaError: (an InputError) If a required column is absent, or a retained
            row has a null field or a non-numeric correlation.

    Warns:
        EmptyResultWarning: If no row matches region and parameter.

    Examples:
        >>> import polars as pl
        >>> df = pl.DataFrame({
        ...     "region": ["SC", "SC"], "parameter": ["flynet", "flynet"],
        ...     "stimulus_type": ["ring_expand", "other"], "subject_id": ["S1", "S1"],
        ...     "correlation_by_condition": [0.5, 0.2], "correlation_overall": [0.3, 0.25],
        ... })
        >>> summarize_observations(df, "SC", "flynet", "ring_expand").height
        2
    """
    return _summarize(frame, region, parameter, target_stimulus, stacklevel=3)


def _summarize(
    frame: pl.DataFrame | pl.LazyFrame,
    region: str,
    parameter: str,
    target_stimulus: str,
    *,
    stacklevel: int,
) -> pl.DataFrame:
    lf = frame.lazy() if isinstance(frame, pl.DataFrame) else frame
    check_columns(lf, OBSERVATIONS_DESC)

    retained = lf.filter(
        (pl.col("region").cast(pl.Utf8) == region)
        & (pl.col("parameter").cast(pl.Utf8) == parameter)
    ).collect()
    if retained.is_empty():
        warnings.warn(
            f"no observations for region={region!r}, parameter={parameter!r}",
            EmptyResultWarning,
            stacklevel=stacklevel,
        )
        return _empty_summary()

    retained = validate_frame(retained, OBSERVATIONS_DESC)

    return (
        retained.lazy()
        .with_columns(
            (pl.col("correlation_by_condition") - pl.col("correlation_overall")).alias(
                "difference"
            ),
            (pl.col("stimulus_type") == target_stimulus).alias("is_target_condition"),
        )
        .group_by(["is_target_condition", "subject_id"])
        .agg(difference_metric=pl.col("difference").mean())
        .select(list(SUMMARY_DESC.columns))
        .sort(["subject_id", "is_target_condition"])
        .collect()
    )


def _field(row: Any, name: str, index: int) -> Any:
    if isinstance(row, ObservationRecord):
        return getattr(row, name)
    if isinstance(row, Mapping):
        return row.get(name)
    raise InputError(f"row {index}: expected a mapping, got {type(row).__name__}")


def prepare_example_data(
    rows: Iterable[ObservationRecord | Mapping[str, Any]],
    region: str,
    parameter: str,
    target_stimulus: str,
) -> list[SummaryRecord]:
    """
    Filter, derive, group, and aggregate observation rows into summary records.

    Args:
        rows: ObservationRecord instances or mappings with the same field names.
        region: Region value to retain.
        parameter: Parameter value to retain.
        target_stimulus: Stimulus value that marks the target condition group.

    Returns:
        list[SummaryRecord]: One record per distinct (subject_id, is_target_condition)
        among the retained rows; empty when nothing matches.

    Raises:
        InputError: If a retained row is missing a field or has a non-numeric correlation.

    Warns:
        EmptyResultWarning: If no row matches region and parameter.
    """
    records: list[ObservationRecord] = []
    for i, row in enumerate(rows):
        if _field(row, "region", i) != region or _field(row, "parameter", i) != parameter:
            continue
        records.append(observation_from_value(row, index=i))

    frame = pl.DataFrame([r.model_dump() for r in records], schema=_OBSERVATION_SCHEMA)
    summary = _summarize(frame, region, parameter, target_stimulus, stacklevel=3)
    return [SummaryRecord.model_validate(r) for r in summary.iter_rows(named=True)]


def prepare_frame(
    frame: pl.DataFrame,
    output_path: str | os.PathLike[str] | None = None,
    settings: PrepSettings | None = None,
    *,
    source: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Run the pipeline over an in-memory frame and persist the artifact.

    Args:
        frame: Observation frame.
        output_path: Artifact path; defaults to settings.default_output_path().
        settings: Filter selection and artifact options (defaults to PrepSettings()).
        source: Provenance recorded in the manifest (e.g., input path and digest).

    Returns:
        dict[str, Any]: {"rows_in","rows_retained","groups","output_path","manifest_path"};
        manifest_path is None when settings.write_manifest is False.
    """
    return _persist(frame, output_path, settings, source=source)


def _persist(
    frame: pl.DataFrame,
    output_path: str | os.PathLike[str] | None,
    settings: PrepSettings | None,
    *,
    source: Mapping[str, Any] | None,
) -> dict[str, Any]:
    s = settings or PrepSettings()
    out = os.fspath(output_path) if output_path is not None else str(s.default_output_path())

    # Public entry point -> _persist -> _summarize; warn at the caller of the entry point.
    summary = _summarize(frame, s.region, s.parameter, s.target_stimulus, stacklevel=4)
    rows_retained = frame.filter(
        (pl.col("region").cast(pl.Utf8) == s.region)
        & (pl.col("parameter").cast(pl.Utf8) == s.parameter)
    ).height

    params = {
        "region": s.region,
        "parameter": s.parameter,
        "target_stimulus": s.target_stimulus,
    }
    written = write_summary(summary, out, s, metadata=params)

    manifest_path: str | None = None
    if s.write_manifest:
        manifest_path = write_manifest(
            {
                "params": params,
                "params_hash": hash_params(params),
                "source": dict(source or {}),
                "rows_in": int(frame.height),
                "rows_retained": int(rows_retained),
                "groups": int(summary.height),
                "artifact": {k: written[k] for k in ("rows", "bytes", "format")},
            },
            out,
        )

    return {
        "rows_in": int(frame.height),
        "rows_retained": int(rows_retained),
        "groups": int(summary.height),
        "output_path": written["path"],
        "manifest_path": manifest_path,
    }


def prepare_file(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str] | None = None,
    settings: PrepSettings | None = None,
) -> dict[str, Any]:
    """
    Read an observation table, run the pipeline, and persist the artifact.

    Raises:
        IoReadError: If the input file is missing, undecodable, or its format is unsupported.
        IoSchemaError: If the retained rows fail validation.
        IoWriteError: If the artifact or manifest cannot be written.
    """
    frame = read_table(input_path, OBSERVATIONS_DESC)
    source = {"input_path": os.fspath(input_path), "input_sha256": file_sha256(input_path)}
    return _persist(frame, output_path, settings, source=source)
