"""Schema validation for response bodies.

Pure and synchronous: `validate` never performs I/O and never raises. A value
that does not match the schema comes back as `Result.err(SchemaValidationError)`
naming the schema and listing each issue as {"path": [...], "message": str}.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from fiatconnect_client.domain.errors import SchemaValidationError
from fiatconnect_client.domain.result import Result
from fiatconnect_client.domain.schemas import Schema, T

_OBJECT_ERROR_TYPES = {"model_type", "model_attributes_type", "dict_type", "mapping_type"}
_ARRAY_ERROR_TYPES = {"list_type", "tuple_type"}


def json_type_name(value: Any) -> str:
    """Name of a decoded JSON value's type, as a JSON reader would say it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _issue_message(error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    received = json_type_name(error.get("input"))
    if error_type in _OBJECT_ERROR_TYPES:
        return f"expected object, received {received}"
    if error_type in _ARRAY_ERROR_TYPES:
        return f"expected array, received {received}"
    if error_type == "string_type":
        return f"expected string, received {received}"
    if error_type == "missing":
        return "required"
    return str(error.get("msg", "invalid value"))


def issues_from(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"path": [part for part in error.get("loc", ())], "message": _issue_message(error)}
        for error in exc.errors(include_url=False)
    ]


def validate(schema: Schema[T], raw: Any) -> Result[T, SchemaValidationError]:
    try:
        value = schema.adapter.validate_python(raw)
    except ValidationError as exc:
        return Result.err(SchemaValidationError(schema.name, issues_from(exc)))
    return Result.ok(value)


def validate_json(schema: Schema[T], text: str) -> Result[T, SchemaValidationError]:
    """Decode text as JSON, then validate. Undecodable text is a validation failure."""
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError):
        return Result.err(
            SchemaValidationError(
                schema.name,
                [{"path": [], "message": "expected JSON body, received unparseable text"}],
            )
        )
    return validate(schema, raw)
