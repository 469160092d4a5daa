"""Single HTTP exchange with failure classification.

Shared by the dispatcher and the session manager: performs exactly one transport
call under an optional deadline and turns every failure into a ResponseError.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any

from loguru import logger

from fiatconnect_client.constants import ABORT_ERROR_MESSAGE, API_ERROR_MESSAGE
from fiatconnect_client.core import SERVICE_NAME
from fiatconnect_client.core.timeouts import run_with_timeout
from fiatconnect_client.domain.errors import (
    ApiError,
    RequestTimeoutError,
    ResponseError,
    TransportError,
)
from fiatconnect_client.domain.result import Result
from fiatconnect_client.ports.http_transport import (
    HttpResponse,
    HttpTransport,
    HttpTransportError,
    HttpTransportTimeoutError,
)


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).debug("")


async def send_once(
    transport: HttpTransport,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None,
    json_body: Any | None = None,
    timeout_seconds: float | None = None,
) -> Result[HttpResponse, ResponseError]:
    try:
        response = await run_with_timeout(
            transport.request(method, url, headers=headers, json_body=json_body),
            timeout_seconds,
        )
    except asyncio.TimeoutError:
        _log("request_aborted", method=method, url=url, timeout_seconds=timeout_seconds)
        return Result.err(RequestTimeoutError(ABORT_ERROR_MESSAGE))
    except HttpTransportTimeoutError as exc:
        _log("request_aborted", method=method, url=url, error=str(exc))
        return Result.err(RequestTimeoutError(ABORT_ERROR_MESSAGE, cause=str(exc)))
    except HttpTransportError as exc:
        _log("transport_failed", method=method, url=url, error=str(exc))
        return Result.err(TransportError(str(exc)))
    except Exception as exc:
        logger.warning("transport raised unexpected {} for {} {}: {}", type(exc).__name__, method, url, exc)
        return Result.err(TransportError(str(exc)))
    return Result.ok(response)


def is_success(response: HttpResponse) -> bool:
    return 200 <= response.status_code < 300


def error_body(response: HttpResponse) -> Any:
    """Best-effort decode of a non-2xx body: JSON when possible, raw text otherwise."""
    text = response.text
    if not text:
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return text


def api_error(response: HttpResponse) -> ApiError:
    return ApiError(API_ERROR_MESSAGE, error_body(response), status_code=response.status_code)
