"""
Canonical JSON serialization and hashing helpers.

Provides a single canonical JSON policy and SHA-256 helpers so manifests can
identify a preparation run by its parameters independent of key order. This
module is zero-IO and uses only the Python standard library.

Notes:
    - Canonical JSON: sort_keys=True, separators=(",", ":"), ensure_ascii=False.
    - Hashing is performed over the UTF-8 encoded canonical JSON string.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

__all__ = [
    "json_dumps_canonical",
    "sha256_hexdigest",
    "hash_params",
]


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.

    Returns:
        str: Canonical JSON string with sorted keys and compact separators.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def sha256_hexdigest(data: bytes | str) -> str:
    """Compute the SHA-256 hex digest of bytes or a UTF-8 string."""
    h = hashlib.sha256()
    h.update(data.encode("utf-8") if isinstance(data, str) else data)
    return h.hexdigest()


def hash_params(params: Mapping[str, Any]) -> str:
    """
    Hash a parameter mapping using canonical JSON and SHA-256.

    Examples:
        >>> from ggdeck.core.hashing import hash_params
        >>> hash_params({"a": 1, "b": 2}) == hash_params({"b": 2, "a": 1})
        True
    """
    return sha256_hexdigest(json_dumps_canonical(dict(params)))
