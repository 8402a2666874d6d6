"""
Frozen table descriptors for ggdeck datasets (Parquet/CSV-like).

Notes:
    - Descriptors declare column names/dtypes, required columns, and the pinned
      schema version.
    - Column names are lower_snake.
    - Core is zero-IO (stdlib only); ggdeck.io validates frames against these.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .versioning import SCHEMA_V, SchemaVersion

__all__ = [
    "TableName",
    "TableDescriptor",
    "OBSERVATIONS_DESC",
    "SUMMARY_DESC",
    "get_table",
    "list_tables",
]


class TableName(Enum):
    """Canonical table names."""

    OBSERVATIONS = "observations"
    SUMMARY = "summary"


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a ggdeck table.

    Attributes:
        name (TableName): Canonical table identifier.
        columns (dict[str, str]): Mapping of column_name -> dtype where
            dtype ∈ {"str","f64","bool"}.
        required (list[str]): Columns that must exist and be populated (non-null).
        version (SchemaVersion): Schema version pinned to SCHEMA_V.

    Examples:
        >>> from ggdeck.core.tables import get_table, TableName
        >>> "subject_id" in get_table(TableName.SUMMARY).columns
        True
    """

    name: TableName
    columns: dict[str, str]  # "str","f64","bool"
    required: list[str]
    version: SchemaVersion

    def columns_of(self, dtype: str) -> list[str]:
        """Return column names declared with the given dtype, in declaration order."""
        return [c for c, d in self.columns.items() if d == dtype]


OBSERVATIONS_DESC = TableDescriptor(
    name=TableName.OBSERVATIONS,
    columns={
        "region": "str",
        "parameter": "str",
        "stimulus_type": "str",
        "subject_id": "str",
        "correlation_by_condition": "f64",
        "correlation_overall": "f64",
    },
    required=[
        "region",
        "parameter",
        "stimulus_type",
        "subject_id",
        "correlation_by_condition",
        "correlation_overall",
    ],
    version=SCHEMA_V,
)

SUMMARY_DESC = TableDescriptor(
    name=TableName.SUMMARY,
    columns={
        "subject_id": "str",
        "is_target_condition": "bool",
        "difference_metric": "f64",
    },
    required=["subject_id", "is_target_condition", "difference_metric"],
    version=SCHEMA_V,
)


# Registry
_TABLES: dict[TableName, TableDescriptor] = {
    OBSERVATIONS_DESC.name: OBSERVATIONS_DESC,
    SUMMARY_DESC.name: SUMMARY_DESC,
}


def get_table(name: TableName) -> TableDescriptor:
    """Look up a table descriptor by canonical name."""
    return _TABLES[name]


def list_tables() -> list[TableDescriptor]:
    """Return all registered table descriptors in registry order."""
    return list(_TABLES.values())
