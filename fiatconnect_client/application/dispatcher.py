"""Request dispatcher: one HTTP attempt per call, classified and validated.

Outcomes:
- transport failure       -> TransportError carrying the transport's message
- deadline exceeded       -> RequestTimeoutError("AbortError"), call cancelled
- non-2xx status          -> ApiError("FiatConnect API Error", cause=parsed body)
- 2xx with a schema       -> validated model, or SchemaValidationError
- 2xx without a schema    -> ok(None)

Retries are the caller's job. Idempotency keys are passed through, never generated.
"""
from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from fiatconnect_client.application.exchange import api_error, is_success, send_once
from fiatconnect_client.core import SERVICE_NAME
from fiatconnect_client.domain.cookie_store import CookieStore
from fiatconnect_client.domain.errors import ResponseError
from fiatconnect_client.domain.models import ClientConfig
from fiatconnect_client.domain.result import Result
from fiatconnect_client.domain.schemas import Schema
from fiatconnect_client.domain.validator import validate_json
from fiatconnect_client.ports.http_transport import HttpTransport


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).debug("")


class RequestDispatcher:
    def __init__(
        self,
        config: ClientConfig,
        transport: HttpTransport,
        cookie_store: CookieStore,
    ) -> None:
        self._config = config
        self._transport = transport
        self._cookie_store = cookie_store

    async def close(self) -> None:
        await self._transport.close()

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self._config.api_root + path

    def build_headers(
        self,
        *,
        has_body: bool,
        requires_session: bool,
        extra: Mapping[str, str] | None = None,
    ) -> dict[str, str] | None:
        headers: dict[str, str] = {}
        if has_body:
            headers["Content-Type"] = "application/json"
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        headers.update(self._config.headers)
        if extra:
            headers.update(extra)
        if requires_session:
            headers = self._cookie_store.attach(headers)
        return headers or None

    async def dispatch(
        self,
        method: str,
        path: str,
        *,
        body: Any | None = None,
        schema: Schema[Any] | None = None,
        requires_session: bool = False,
        headers: Mapping[str, str] | None = None,
    ) -> Result[Any, ResponseError]:
        url = self.url_for(path)
        request_headers = self.build_headers(
            has_body=body is not None,
            requires_session=requires_session,
            extra=headers,
        )
        _log("dispatch_started", method=method, url=url, schema=schema.name if schema else None)

        sent = await send_once(
            self._transport,
            method,
            url,
            headers=request_headers,
            json_body=body,
            timeout_seconds=self._config.timeout_seconds,
        )
        if not sent.is_ok:
            _log("dispatch_failed", method=method, url=url, error=sent.error.message)
            return Result.err(sent.error)

        response = sent.unwrap()
        if response.set_cookie:
            self._cookie_store.extract_cookies(response.set_cookie)

        if not is_success(response):
            error = api_error(response)
            _log("dispatch_failed", method=method, url=url, status_code=response.status_code, cause=error.cause)
            return Result.err(error)

        _log("dispatch_completed", method=method, url=url, status_code=response.status_code)
        if schema is None:
            return Result.ok(None)

        validated = validate_json(schema, response.text)
        if not validated.is_ok:
            logger.bind(service_name=SERVICE_NAME, event="dispatch_invalid_body").warning(
                "{} {} returned a body that does not match {}", method, url, schema.name
            )
            return Result.err(validated.error)
        return validated
