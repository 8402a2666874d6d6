"""
Filesystem helpers for ggdeck.io (file protocol baseline).

Responsibilities
- Directory creation, safe write handles, fsync, and atomic renames.
- Establish the atomic write path: tmp write → fsync → atomic rename.

Notes
- Atomicity via os.replace is guaranteed only when src and dst reside on the same filesystem.
- All helpers are synchronous; the preparer is a single writer.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO


def makedirs(path: str, exist_ok: bool = True) -> None:
    """
    Create directories recursively.

    Args:
        path (str): Directory path to create. An empty string (current directory) is a no-op.
        exist_ok (bool): Do not error if the directory already exists.
    """
    if path:
        os.makedirs(path, exist_ok=exist_ok)


@contextmanager
def open_write(path: str) -> Iterator[BinaryIO]:
    """
    Open a file for binary write as a context manager.

    Notes:
        Used for small JSON payloads (manifests); the handle is fsynced before close
        so the caller can rename atomically.
    """
    fh = open(path, "wb")
    try:
        yield fh
        fh.flush()
        os.fsync(fh.fileno())
    finally:
        fh.close()


def fsync_path(path: str) -> None:
    """
    Open a path read-only and fsync its file descriptor.

    Notes:
        Useful when a library wrote to a path directly (e.g., pyarrow.parquet.write_table)
        and the data must reach the disk before an atomic rename.
    """
    fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def rename_atomic(src: str, dst: str) -> None:
    """
    Atomically rename src -> dst on the same filesystem.

    Notes:
        Uses os.replace, which is atomic only if src and dst reside on the same filesystem.
    """
    os.replace(src, dst)


def remove_quietly(path: str) -> None:
    """Remove a leftover tmp file if present; a missing file is not an error."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
