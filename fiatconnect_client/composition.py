"""Client composition root: build and wire concrete dependencies.

Composition may: import concrete classes, call factories, hand interface types
to the application layer. The session manager and the dispatcher share one
transport and one cookie store.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from loguru import logger

from fiatconnect_client.application.client import FiatConnectClient, create_siwe_config
from fiatconnect_client.application.dispatcher import RequestDispatcher
from fiatconnect_client.application.session_manager import SessionManager
from fiatconnect_client.config.settings import Settings
from fiatconnect_client.core import SERVICE_NAME
from fiatconnect_client.domain.cookie_store import CookieStore
from fiatconnect_client.domain.models import ClientConfig
from fiatconnect_client.infrastructure.http.factory import create_http_transport
from fiatconnect_client.ports.http_transport import HttpTransport
from fiatconnect_client.ports.message_signer import MessageSigner, as_signer


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def create_fiat_connect_client(
    config: ClientConfig | Settings | None,
    signer: MessageSigner | Callable[[str], Awaitable[str]],
    *,
    transport: HttpTransport | None = None,
) -> FiatConnectClient:
    """Wire a FiatConnectClient. Without a transport an httpx one is created and owned by the client."""
    if config is None:
        config = Settings()
    if isinstance(config, Settings):
        config = config.to_client_config()

    if transport is None:
        transport = create_http_transport(config.timeout_seconds)

    cookie_store = CookieStore()
    session = SessionManager(
        create_siwe_config(config),
        as_signer(signer),
        transport,
        cookie_store=cookie_store,
    )
    dispatcher = RequestDispatcher(config, transport, cookie_store)
    _log(
        "client_created",
        base_url=config.api_root,
        network=config.network.value,
        account_address=config.account_address,
    )
    return FiatConnectClient(config, session, dispatcher)
