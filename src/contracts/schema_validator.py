"""Offline JSON Schema validation for grids and storage payloads."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from .errors import (
    SchemaValidationError,
    ValidationIssue,
    ValidationReport,
    make_error,
)

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_CATALOG_PATH = _SCHEMA_ROOT / "catalog.json"


@dataclass(frozen=True)
class SchemaDescriptor:
    """Descriptor that binds a payload kind to its active schema."""

    kind: str
    version: str
    schema_id: str
    schema_path: str


_catalog: Dict[str, SchemaDescriptor] = {}
_schema_cache: Dict[str, Dict[str, Any]] = {}
_validator_cache: Dict[str, Any] = {}


def _load_catalog() -> Dict[str, SchemaDescriptor]:
    if _catalog:
        return _catalog

    raw = json.loads(_CATALOG_PATH.read_text("utf-8"))
    for kind, data in raw.items():
        _catalog[kind] = SchemaDescriptor(
            kind=kind,
            version=data["version"],
            schema_id=data["schema_id"],
            schema_path=data["schema_path"],
        )
    return _catalog


def known_kinds() -> List[str]:
    return sorted(_load_catalog())


def get_schema_descriptor(kind: str) -> SchemaDescriptor:
    """Return the schema descriptor for ``kind``."""

    catalog = _load_catalog()
    if kind not in catalog:
        raise SchemaValidationError("schema-not-found", kind)
    return catalog[kind]


def load_schema(kind: str) -> Dict[str, Any]:
    """Load the schema registered for ``kind`` (a deep copy of the cached one)."""

    descriptor = get_schema_descriptor(kind)
    if kind not in _schema_cache:
        resolved = (_SCHEMA_ROOT / descriptor.schema_path).resolve()
        try:
            schema = json.loads(resolved.read_text("utf-8"))
        except FileNotFoundError as exc:  # pragma: no cover - packaging error
            raise SchemaValidationError("schema-not-found", descriptor.schema_path) from exc
        if schema.get("$id") != descriptor.schema_id:
            raise SchemaValidationError("schema-id-mismatch", kind)
        _schema_cache[kind] = schema
    return copy.deepcopy(_schema_cache[kind])


def _validator_for(kind: str) -> Any:
    cached = _validator_cache.get(kind)
    if cached is None:
        schema = load_schema(kind)
        cls = jsonschema.validators.validator_for(schema)
        cls.check_schema(schema)
        cached = cls(schema)
        _validator_cache[kind] = cached
    return cached


def _json_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def validate(payload: Any, kind: str) -> ValidationReport:
    """Validate ``payload`` against the schema of ``kind`` and collect every issue."""

    validator = _validator_for(kind)
    errors: List[ValidationIssue] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: list(map(str, e.absolute_path))):
        errors.append(make_error(f"schema.{error.validator}", error.message, _json_path(error)))
    return ValidationReport(ok=not errors, kind=kind, errors=errors)


def assert_valid(payload: Any, kind: str) -> None:
    """Raise :class:`SchemaValidationError` for the first issue found in ``payload``."""

    report = validate(payload, kind)
    if not report.ok:
        first = report.errors[0]
        raise SchemaValidationError(f"invalid-{kind}", f"{first.path}: {first.msg}")


__all__ = [
    "SchemaDescriptor",
    "assert_valid",
    "get_schema_descriptor",
    "known_kinds",
    "load_schema",
    "validate",
]
