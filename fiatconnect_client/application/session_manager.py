"""SIWE session manager: login handshake, session cookies and server clock skew.

Login and clock probes go straight to the HTTP transport (one attempt each);
regular endpoint calls go through the RequestDispatcher, which reads this
manager's cookie store.

Login track: LOGGED_OUT -> LOGGING_IN -> LOGGED_IN, falling back to LOGGED_OUT
on any failure. Cookies and the logged-in flag change only as the last step of
login; `is_logged_in()` keeps reporting the previous session until then.

Clock track: each probe brackets the request with local timestamps and treats
the midpoint as the local instant the server stamped its time:
    diff      = server_ms - (sent_ms + received_ms) / 2
    max_error = (received_ms - sent_ms) / 2
"""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Callable

from loguru import logger

from fiatconnect_client.application.exchange import api_error, is_success, send_once
from fiatconnect_client.constants import LOGIN_STATE
from fiatconnect_client.core import SERVICE_NAME
from fiatconnect_client.domain.cookie_store import CookieStore
from fiatconnect_client.domain.errors import AuthError, ResponseError, SchemaValidationError
from fiatconnect_client.domain.models import (
    ClockDiff,
    ClockSkew,
    SiweSessionConfig,
    datetime_to_ms,
    ms_to_datetime,
    parse_iso_timestamp,
)
from fiatconnect_client.domain.result import Result
from fiatconnect_client.domain.schemas import ClockResponse, clock_response_schema
from fiatconnect_client.domain.siwe_message import SiweMessage
from fiatconnect_client.domain.validator import validate_json
from fiatconnect_client.ports.http_transport import HttpTransport
from fiatconnect_client.ports.message_signer import MessageSigner


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _wall_clock_ms() -> float:
    return time.time() * 1000


class SessionManager:
    def __init__(
        self,
        config: SiweSessionConfig,
        signer: MessageSigner,
        transport: HttpTransport,
        *,
        cookie_store: CookieStore | None = None,
        now_ms: Callable[[], float] = _wall_clock_ms,
    ) -> None:
        self._config = config
        self._signer = signer
        self._transport = transport
        self._cookie_store = cookie_store if cookie_store is not None else CookieStore()
        self._now_ms = now_ms
        self._state = LOGIN_STATE.LOGGED_OUT
        self._session_expiry_ms: float | None = None
        self._last_clock_skew: ClockSkew | None = None

    @property
    def config(self) -> SiweSessionConfig:
        return self._config

    @property
    def state(self) -> str:
        return self._state

    @property
    def last_clock_skew(self) -> ClockSkew | None:
        return self._last_clock_skew

    def is_logged_in(self) -> bool:
        # The previous session stays live while a re-login is in flight.
        if self._session_expiry_ms is None:
            return False
        return self._session_expiry_ms > self._now_ms()

    def get_cookies(self) -> dict[str, str]:
        return self._cookie_store.cookies

    def _headers(self, *, json_body: bool = False) -> dict[str, str]:
        headers = dict(self._config.headers) if self._config.headers else {}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def login(self, issued_at: datetime | None = None) -> Result[None, ResponseError]:
        self._state = LOGIN_STATE.LOGGING_IN
        try:
            return await self._login(issued_at)
        finally:
            if self._state == LOGIN_STATE.LOGGING_IN:
                # Cancelled mid-handshake: any earlier session is left as it was.
                self._state = LOGIN_STATE.LOGGED_IN if self._session_expiry_ms is not None else LOGIN_STATE.LOGGED_OUT

    async def _login(self, issued_at: datetime | None) -> Result[None, ResponseError]:
        if issued_at is None:
            issued_at = ms_to_datetime(self._now_ms())
        elif issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        message = SiweMessage.for_session(self._config, issued_at=issued_at)
        _log("login_started", account_address=self._config.account_address, nonce=message.nonce)

        text = message.prepare()
        try:
            signature = await self._signer.sign_message(text)
        except Exception as exc:
            return self._login_failed(AuthError(str(exc) or type(exc).__name__))

        sent = await send_once(
            self._transport,
            "POST",
            self._config.login_url,
            headers=self._headers(json_body=True),
            json_body={"message": text, "signature": signature},
            timeout_seconds=self._config.timeout_seconds,
        )
        if not sent.is_ok:
            failure = sent.error
            return self._login_failed(AuthError(failure.message, failure.cause))

        response = sent.unwrap()
        if not is_success(response):
            failure = api_error(response)
            return self._login_failed(
                AuthError(f"Login request failed with status {response.status_code}", failure.cause)
            )

        self._cookie_store.extract_cookies(response.set_cookie, replace=True)
        self._session_expiry_ms = datetime_to_ms(message.expiration_time)
        self._state = LOGIN_STATE.LOGGED_IN
        _log("login_succeeded", account_address=self._config.account_address, cookies=len(self._cookie_store))
        return Result.ok(None)

    def _login_failed(self, error: AuthError) -> Result[None, ResponseError]:
        self._state = LOGIN_STATE.LOGGED_OUT
        self._session_expiry_ms = None
        logger.bind(service_name=SERVICE_NAME, event="login_failed").warning("login failed: {}", error.message)
        return Result.err(error)

    async def _probe_clock(self) -> Result[tuple[ClockResponse, float, float], ResponseError]:
        sent_ms = self._now_ms()
        sent = await send_once(
            self._transport,
            "GET",
            self._config.clock_url,
            headers=self._headers() or None,
            timeout_seconds=self._config.timeout_seconds,
        )
        received_ms = self._now_ms()
        if not sent.is_ok:
            return Result.err(sent.error)

        response = sent.unwrap()
        if not is_success(response):
            return Result.err(api_error(response))
        validated = validate_json(clock_response_schema, response.text)
        if not validated.is_ok:
            return Result.err(validated.error)
        _log("clock_probe", round_trip_ms=received_ms - sent_ms)
        return Result.ok((validated.unwrap(), sent_ms, received_ms))

    async def get_clock(self) -> Result[ClockResponse, ResponseError]:
        probed = await self._probe_clock()
        if not probed.is_ok:
            return Result.err(probed.error)
        clock, _, _ = probed.unwrap()
        return Result.ok(clock)

    async def get_clock_diff_approx(self) -> Result[ClockDiff, ResponseError]:
        probed = await self._probe_clock()
        if not probed.is_ok:
            return Result.err(probed.error)
        clock, sent_ms, received_ms = probed.unwrap()
        try:
            server_ms = datetime_to_ms(parse_iso_timestamp(clock.time))
        except ValueError:
            return Result.err(
                SchemaValidationError(
                    clock_response_schema.name,
                    [{"path": ["time"], "message": "expected ISO-8601 timestamp"}],
                )
            )
        midpoint_ms = (sent_ms + received_ms) / 2
        diff = ClockDiff(diff=server_ms - midpoint_ms, max_error=(received_ms - sent_ms) / 2)
        self._last_clock_skew = ClockSkew(
            diff_ms=diff.diff,
            max_error_ms=diff.max_error,
            measured_at_local=ms_to_datetime(received_ms),
        )
        return Result.ok(diff)

    async def get_server_time_approx(self) -> Result[datetime, ResponseError]:
        measured = await self.get_clock_diff_approx()
        if not measured.is_ok:
            return Result.err(measured.error)
        return Result.ok(ms_to_datetime(self._now_ms() + measured.unwrap().diff))
