"""
Custom exceptions for the ggdeck.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in ggdeck.io.
- Keep ggdeck.core as the source of truth for input/version errors (see ggdeck.core.errors).

Boundaries
- IoConfigError: invalid or unsupported configuration.
- IoReadError: input table missing or in an unsupported format.
- IoSchemaError: frame failed validation against ggdeck.core.tables descriptors.
  Also an InputError, so callers of the preparer catch one type.
- IoWriteError: atomic write path failed (tmp write/fsync/rename).
"""

from __future__ import annotations

from ggdeck.core.errors import InputError


class IoError(Exception):
    """
    Base class for IO-related errors in ggdeck.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from ggdeck.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when IO configuration is invalid or unsupported.

    Examples:
        - Unsupported compression codec
        - Empty region/parameter filter value
    """


class IoReadError(IoError):
    """Raised when an input table cannot be located or its format is not supported."""


class IoSchemaError(IoError, InputError):
    """
    Raised when a DataFrame fails validation against a ggdeck.core.tables descriptor.

    Notes:
        Missing required columns, nulls in required columns, and non-numeric
        correlation columns all surface here.
    """


class IoWriteError(IoError):
    """
    Raised when an artifact write fails to complete atomically.

    Notes:
        The write path is tmp file → fsync → os.replace(tmp, final). Failures at any
        step surface as IoWriteError after best-effort cleanup of the tmp file.
    """
