"""
Core exception and warning types for the example-data preparer.

Provides typed failures for core-domain problems:
- InputError for missing required fields or non-numeric correlation values.
- EmptyResultWarning when a region/parameter filter retains no rows.
- VersionMismatch for artifacts written under an incompatible SCHEMA_V.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - EmptyResultWarning is issued through ``warnings.warn``; the pipeline still
      returns an empty result.

Examples:
    >>> from ggdeck.core.errors import InputError
    >>> try:
    ...     raise InputError("row 3: correlation_overall is not numeric")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "row 3" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "InputError",
    "EmptyResultWarning",
    "VersionMismatch",
]


class InputError(ValueError):
    """Observation row is missing a required field or carries a non-numeric correlation."""


class EmptyResultWarning(UserWarning):
    """Region/parameter filter matched zero observation rows."""


class VersionMismatch(RuntimeError):
    """Incompatible or unexpected schema version encountered."""
