"""HTTP transport factory: builds an HttpTransport (no provider logic in composition)."""
from __future__ import annotations

import httpx

from fiatconnect_client.ports.http_transport import HttpTransport
from fiatconnect_client.infrastructure.http.httpx_transport import HttpxTransport

DEFAULT_TRANSPORT_TIMEOUT_SECONDS = 30.0


def create_http_transport(
    timeout_seconds: float | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpTransport:
    """Build an httpx-backed transport. Cookies are managed by the session, not by httpx."""
    async_client = httpx.AsyncClient(
        timeout=timeout_seconds or DEFAULT_TRANSPORT_TIMEOUT_SECONDS,
        follow_redirects=False,
        transport=transport,
    )
    return HttpxTransport(async_client)
