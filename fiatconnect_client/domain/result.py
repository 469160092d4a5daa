"""Result value returned by every client operation.

A `Result` holds either a success value or a `ResponseError`, never both.
Inspect with `is_ok` before using the value; `unwrap()` on an error result
raises the carried error itself.
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from fiatconnect_client.domain.errors import ResponseError

T = TypeVar("T")
E = TypeVar("E", bound=ResponseError)

_MISSING: Any = object()


class Result(Generic[T, E]):
    __slots__ = ("_value", "_error")

    def __init__(self, value: Any = _MISSING, error: Any = _MISSING) -> None:
        if (value is _MISSING) == (error is _MISSING):
            raise ValueError("Result needs exactly one of value or error")
        if error is not _MISSING and not isinstance(error, ResponseError):
            raise TypeError("Result error must be a ResponseError")
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: T) -> "Result[T, Any]":
        return cls(value=value)

    @classmethod
    def err(cls, error: E) -> "Result[Any, E]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is _MISSING

    @property
    def is_err(self) -> bool:
        return not self.is_ok

    @property
    def error(self) -> E | None:
        return None if self.is_ok else self._error

    def unwrap(self) -> T:
        if self.is_ok:
            return self._value
        raise self._error

    def unwrap_or(self, default: T) -> T:
        return self._value if self.is_ok else default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        if self.is_ok != other.is_ok:
            return False
        if self.is_ok:
            return self._value == other._value
        return type(self._error) is type(other._error) and (
            self._error.message == other._error.message and self._error.cause == other._error.cause
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_ok:
            return f"Result.ok({self._value!r})"
        return f"Result.err({self._error!r})"
