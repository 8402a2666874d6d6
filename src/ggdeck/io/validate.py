"""
Schema validation utilities for ggdeck.io.

Purpose
- Validate Polars DataFrames against table descriptors from ggdeck.core.tables.
- Normalize dtypes: "str" columns are cast to Utf8, "f64" columns to Float64,
  "bool" columns to Boolean.

Checks performed
- Required columns present (schema-level; checked on the whole frame).
- "f64" columns hold numbers: numeric dtypes cast directly; text columns are parsed
  and any value that does not parse is reported as non-numeric.
- Required columns contain no nulls.

Notes
- The preparer calls check_columns on the full input, then validate_frame on the
  rows retained by its filter, so unparsable values outside the filter never fail.
"""

from __future__ import annotations

from collections.abc import Iterable

import polars as pl

from ggdeck.core.tables import TableDescriptor

from .errors import IoSchemaError


def _ensure_columns_present(df: pl.DataFrame | pl.LazyFrame, needed: Iterable[str]) -> None:
    columns = df.collect_schema().names() if isinstance(df, pl.LazyFrame) else df.columns
    missing = [c for c in needed if c not in columns]
    if missing:
        raise IoSchemaError(f"missing required columns: {missing!r}")


def check_columns(df: pl.DataFrame | pl.LazyFrame, desc: TableDescriptor) -> None:
    """
    Ensure every required column of a descriptor is present.

    Raises:
        IoSchemaError: Listing the missing columns.
    """
    _ensure_columns_present(df, desc.required)


def _cast_numeric(df: pl.DataFrame, col: str) -> pl.DataFrame:
    actual = df.schema[col]
    if actual.is_numeric():
        return df.with_columns(pl.col(col).cast(pl.Float64))
    if actual not in (pl.Utf8, pl.Categorical, pl.Null):
        raise IoSchemaError(f"column {col!r} must be numeric; got dtype {actual}")
    parsed = pl.col(col).cast(pl.Utf8).str.strip_chars().cast(pl.Float64, strict=False)
    bad = df.filter(pl.col(col).is_not_null() & parsed.is_null())
    if bad.height:
        sample = bad.get_column(col).head(3).to_list()
        raise IoSchemaError(
            f"column {col!r} has {bad.height} non-numeric value(s), e.g. {sample!r}"
        )
    return df.with_columns(parsed.alias(col))


def _ensure_no_nulls(df: pl.DataFrame, cols: Iterable[str]) -> None:
    counts = df.select([pl.col(c).null_count() for c in cols]).row(0, named=True)
    with_nulls = {c: n for c, n in counts.items() if n}
    if with_nulls:
        raise IoSchemaError(f"missing values in required columns: {with_nulls!r}")


def validate_frame(df: pl.DataFrame, desc: TableDescriptor) -> pl.DataFrame:
    """
    Validate a DataFrame against a TableDescriptor and normalize its dtypes.

    Args:
        df (pl.DataFrame): Frame to validate. Extra columns are kept untouched.
        desc (TableDescriptor): Descriptor from ggdeck.core.tables.

    Returns:
        pl.DataFrame: Frame with descriptor columns cast to their declared dtypes.

    Raises:
        IoSchemaError: If required columns are missing, contain nulls, or an "f64"
            column holds non-numeric values.
    """
    check_columns(df, desc)
    for col, dtype_name in desc.columns.items():
        if col not in df.columns:
            continue
        if dtype_name == "f64":
            df = _cast_numeric(df, col)
        elif dtype_name == "str":
            df = df.with_columns(pl.col(col).cast(pl.Utf8))
        elif dtype_name == "bool":
            if df.schema[col] != pl.Boolean:
                raise IoSchemaError(
                    f"column {col!r} must be boolean; got dtype {df.schema[col]}"
                )
        else:  # pragma: no cover - descriptor typo
            raise IoSchemaError(f"unknown descriptor dtype {dtype_name!r} for column {col!r}")
    _ensure_no_nulls(df, desc.required)
    return df
