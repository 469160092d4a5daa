"""HTTP transport port: contract for performing one HTTP exchange.

The dispatcher and session manager depend on this port; infrastructure (e.g. httpx)
implements it. TLS, proxies and connection pooling belong to the implementation.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class HttpTransportError(Exception):
    """Base for transport failures (DNS, refused or reset connection, etc.)."""


class HttpTransportTimeoutError(HttpTransportError):
    """Raised when the transport gives up waiting on the server."""


@runtime_checkable
class HttpResponse(Protocol):
    """Minimal read-only view of a completed HTTP response."""

    @property
    def status_code(self) -> int: ...

    @property
    def set_cookie(self) -> list[str]:
        """Every raw Set-Cookie header value, in order received."""
        ...

    @property
    def text(self) -> str: ...


@runtime_checkable
class HttpTransport(Protocol):
    """Port: perform a single request. Implementations live in infrastructure."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any | None = None,
    ) -> HttpResponse:
        """Perform the request once; raise HttpTransportError on failure. Never retries."""
        ...

    async def close(self) -> None:
        """Release resources (e.g. connection pool). No-op allowed if nothing to close."""
        ...
