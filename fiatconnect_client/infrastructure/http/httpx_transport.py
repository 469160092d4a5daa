"""Concrete HTTP transport using httpx (injected where HttpTransport is needed)."""
from __future__ import annotations

from typing import Any

import httpx

from fiatconnect_client.ports.http_transport import (
    HttpResponse,
    HttpTransport,
    HttpTransportError,
    HttpTransportTimeoutError,
)


class _HttpxResponseAdapter:
    """Adapts httpx.Response to the HttpResponse protocol."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def set_cookie(self) -> list[str]:
        return self._response.headers.get_list("set-cookie")

    @property
    def text(self) -> str:
        return self._response.text

    def __repr__(self) -> str:
        return f"<HttpxResponseAdapter status={self._response.status_code} url={self._response.url}>"


class HttpxTransport(HttpTransport):
    """HttpTransport implementation using httpx.AsyncClient.

    Deadlines are enforced by the caller; the client's own timeout only guards
    against a stalled connection when the caller configured none.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any | None = None,
    ) -> HttpResponse:
        try:
            response = await self._client.request(
                method,
                url,
                headers=headers or {},
                json=json_body,
            )
            return _HttpxResponseAdapter(response)
        except httpx.TimeoutException as exc:
            raise HttpTransportTimeoutError(f"timeout while requesting {url}") from exc
        except httpx.HTTPError as exc:
            raise HttpTransportError(str(exc) or f"request failed for {url}") from exc
        finally:
            # Session cookies live in the client session; keep httpx from replaying its own jar.
            self._client.cookies.clear()

    async def close(self) -> None:
        await self._client.aclose()
