"""
Schema version metadata for ggdeck table descriptors and artifacts.

Exposes the canonical schema version (SCHEMA_V) embedded in summary artifacts and
a compatibility check used when artifacts are read back. This module is zero-IO.

Notes:
    - Writers embed ``format_version(SCHEMA_V)`` in Parquet key-value metadata.
    - Readers parse it with ``parse_version`` and refuse incompatible artifacts.
"""

from dataclasses import dataclass
from datetime import date

SCHEMA_MAJOR_VERSION = 0
SCHEMA_MINOR_VERSION = 1


@dataclass(frozen=True)
class SchemaVersion:
    """
    Immutable semantic version with ISO release date.

    Attributes:
        major (int): Non-negative major component signalling breaking changes.
        minor (int): Non-negative minor component for additive, non-breaking changes.
        date (str): ISO YYYY-MM-DD release date.

    Raises:
        ValueError: If any component is negative or the date is not ISO compliant.
    """

    major: int
    minor: int
    date: str  # ISO YYYY-MM-DD

    def __post_init__(self) -> None:
        if self.major < 0:
            raise ValueError(f"SchemaVersion major must be non-negative, got {self.major}")
        if self.minor < 0:
            raise ValueError(f"SchemaVersion minor must be non-negative, got {self.minor}")
        try:
            date.fromisoformat(self.date)
        except ValueError as exc:
            raise ValueError(
                f"SchemaVersion date must be ISO YYYY-MM-DD, got {self.date!r}"
            ) from exc


SCHEMA_V = SchemaVersion(SCHEMA_MAJOR_VERSION, SCHEMA_MINOR_VERSION, "2026-10-01")


def is_compatible(ver: SchemaVersion) -> bool:
    """
    Check whether a version matches the supported schema contract.

    Examples:
        >>> from ggdeck.core.versioning import SCHEMA_V, is_compatible
        >>> is_compatible(SCHEMA_V)
        True
    """
    return ver.major == SCHEMA_V.major and ver.minor == SCHEMA_V.minor


def format_version(ver: SchemaVersion) -> str:
    """Render a version as ``"<major>.<minor>@<date>"`` for artifact metadata."""
    return f"{ver.major}.{ver.minor}@{ver.date}"


def parse_version(text: str) -> SchemaVersion:
    """
    Parse the ``"<major>.<minor>@<date>"`` form written by format_version.

    Raises:
        ValueError: If the text does not follow the expected form.

    Examples:
        >>> from ggdeck.core.versioning import SCHEMA_V, format_version, parse_version
        >>> parse_version(format_version(SCHEMA_V)) == SCHEMA_V
        True
    """
    try:
        numbers, stamp = text.split("@", 1)
        major, minor = numbers.split(".", 1)
        return SchemaVersion(int(major), int(minor), stamp)
    except ValueError as exc:
        raise ValueError(f"malformed schema version {text!r}") from exc
