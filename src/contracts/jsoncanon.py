"""Canonical JSON helpers for grids and storage payloads.

Objects are serialised with sorted keys, no insignificant whitespace and
UTF-8 output, so two equal payloads always produce identical bytes. Grids
keep their ``(number|null)[][]`` shape; nothing is added around them.
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any

__all__ = ["canonical_dump", "canonical_sha256", "grid_digest"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity are not permitted in canonical payloads")
        return int(obj) if obj.is_integer() else obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonical JSON: {type(obj)!r}")


def canonical_dump(obj: Any) -> bytes:
    """Return canonical UTF-8 JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def canonical_sha256(obj: Any) -> str:
    digest = hashlib.sha256(canonical_dump(obj)).hexdigest()
    return f"sha256-{digest}"


def grid_digest(grid: Any) -> str:
    """Fingerprint of a grid, stable across JSON round trips."""

    return canonical_sha256(grid)
