"""Deadline utilities.

`run_with_timeout` awaits an operation under an optional wall-clock deadline.
When the deadline passes the in-flight operation is cancelled and
`asyncio.TimeoutError` is raised to the caller, which decides how to classify it.
A `None` or non-positive timeout awaits the operation without a deadline.
"""
import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


async def run_with_timeout(operation: Awaitable[T], timeout_seconds: float | None) -> T:
    if timeout_seconds is None or timeout_seconds <= 0:
        return await operation
    return await asyncio.wait_for(operation, timeout=timeout_seconds)
