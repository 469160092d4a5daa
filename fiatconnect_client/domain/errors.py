"""Error taxonomy carried inside `Result` values.

Every failure inside the client is converted to one of these at its origin and
returned as `Result.err(...)`. They are only raised when a caller unwraps an
error result.
"""
from __future__ import annotations

import json
from typing import Any


class ResponseError(Exception):
    """Base for every error a client operation can return."""

    def __init__(self, message: str, cause: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, cause={self.cause!r})"


class TransportError(ResponseError):
    """Network-level failure: DNS, refused or reset connection, broken transport."""


class RequestTimeoutError(ResponseError):
    """The request exceeded its deadline and was aborted."""

    aborted = True


class ApiError(ResponseError):
    """Non-2xx response. `cause` is the parsed error body, e.g. {"error": "ResourceNotFound"}."""

    def __init__(self, message: str, cause: Any = None, *, status_code: int | None = None) -> None:
        super().__init__(message, cause)
        self.status_code = status_code


class SchemaValidationError(ResponseError):
    """A 2xx body did not match the expected schema."""

    def __init__(self, schema_name: str, issues: list[dict[str, Any]]) -> None:
        self.schema_name = schema_name
        self.issues = issues
        super().__init__(_validation_message(schema_name, issues), cause=issues)


class AuthError(ResponseError):
    """Signing the login message or submitting it failed."""


def _validation_message(schema_name: str, issues: list[dict[str, Any]]) -> str:
    return f"Error validating object with schema {schema_name}. {json.dumps(issues)}"
