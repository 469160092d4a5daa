"""FiatConnect client: typed operations over the dispatcher and the SIWE session.

Every operation returns a `Result`; none raises for protocol, transport or
validation failures.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from fiatconnect_client.application.dispatcher import RequestDispatcher
from fiatconnect_client.application.session_manager import SessionManager
from fiatconnect_client.constants import (
    CHAIN_IDS,
    CLOCK_PATH,
    LOGIN_PATH,
    SESSION_DURATION_MS,
    SIWE_STATEMENT,
    SIWE_VERSION,
)
from fiatconnect_client.domain.errors import ResponseError
from fiatconnect_client.domain.models import ClientConfig, ClockDiff, QuoteRequest, SiweSessionConfig
from fiatconnect_client.domain.result import Result
from fiatconnect_client.domain.schemas import (
    ClockResponse,
    FiatAccountSchema,
    GetFiatAccountsResponse,
    KycSchema,
    KycStatusResponse,
    ObfuscatedFiatAccountData,
    QuotePreviewResponse,
    QuoteResponse,
    Schema,
    TransferResponse,
    TransferStatusResponse,
    get_fiat_accounts_response_schema,
    kyc_status_response_schema,
    obfuscated_fiat_account_data_schema,
    quote_preview_response_schema,
    quote_response_schema,
    transfer_response_schema,
    transfer_status_response_schema,
)

LOGIN_SUCCESS = "success"


def create_siwe_config(config: ClientConfig) -> SiweSessionConfig:
    """Derive the SIWE session parameters from the client config."""
    return SiweSessionConfig(
        account_address=config.account_address,
        statement=SIWE_STATEMENT,
        version=SIWE_VERSION,
        chain_id=CHAIN_IDS[config.network],
        session_duration_ms=SESSION_DURATION_MS,
        login_url=config.api_root + LOGIN_PATH,
        clock_url=config.api_root + CLOCK_PATH,
        headers={"Authorization": f"Bearer {config.api_key}"} if config.api_key else None,
        timeout_seconds=config.timeout_seconds,
    )


def _enum_value(value: Any) -> str:
    return str(getattr(value, "value", value))


class FiatConnectClient:
    def __init__(
        self,
        config: ClientConfig,
        session: SessionManager,
        dispatcher: RequestDispatcher,
    ) -> None:
        self._config = config
        self._session = session
        self._dispatcher = dispatcher

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> SessionManager:
        return self._session

    async def close(self) -> None:
        await self._dispatcher.close()

    async def __aenter__(self) -> "FiatConnectClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- session ---
    async def login(self, issued_at: datetime | None = None) -> Result[str, ResponseError]:
        result = await self._session.login(issued_at=issued_at)
        if not result.is_ok:
            return Result.err(result.error)
        return Result.ok(LOGIN_SUCCESS)

    def is_logged_in(self) -> bool:
        return self._session.is_logged_in()

    def get_cookies(self) -> dict[str, str]:
        return self._session.get_cookies()

    async def get_clock(self) -> Result[ClockResponse, ResponseError]:
        return await self._session.get_clock()

    async def get_server_time_approx(self) -> Result[datetime, ResponseError]:
        return await self._session.get_server_time_approx()

    async def get_clock_diff_approx(self) -> Result[ClockDiff, ResponseError]:
        return await self._session.get_clock_diff_approx()

    # --- quotes ---
    async def _create_quote(
        self,
        body: dict[str, Any],
        direction: str,
        schema: Schema[Any],
    ) -> Result[Any, ResponseError]:
        return await self._dispatcher.dispatch("POST", f"/quote/{direction}", body=body, schema=schema)

    async def create_quote_in(self, params: QuoteRequest) -> Result[QuoteResponse, ResponseError]:
        return await self._create_quote(params.to_body(preview=False), "in", quote_response_schema)

    async def create_quote_out(self, params: QuoteRequest) -> Result[QuoteResponse, ResponseError]:
        return await self._create_quote(params.to_body(preview=False), "out", quote_response_schema)

    async def get_quote_in_preview(self, params: QuoteRequest) -> Result[QuotePreviewResponse, ResponseError]:
        return await self._create_quote(params.to_body(preview=True), "in", quote_preview_response_schema)

    async def get_quote_out_preview(self, params: QuoteRequest) -> Result[QuotePreviewResponse, ResponseError]:
        return await self._create_quote(params.to_body(preview=True), "out", quote_preview_response_schema)

    # --- kyc ---
    async def add_kyc(
        self,
        kyc_schema: KycSchema | str,
        data: dict[str, Any],
    ) -> Result[KycStatusResponse, ResponseError]:
        return await self._dispatcher.dispatch(
            "POST",
            f"/kyc/{_enum_value(kyc_schema)}",
            body=data,
            schema=kyc_status_response_schema,
            requires_session=True,
        )

    async def delete_kyc(self, kyc_schema: KycSchema | str) -> Result[None, ResponseError]:
        return await self._dispatcher.dispatch(
            "DELETE",
            f"/kyc/{_enum_value(kyc_schema)}",
            requires_session=True,
        )

    async def get_kyc_status(self, kyc_schema: KycSchema | str) -> Result[KycStatusResponse, ResponseError]:
        return await self._dispatcher.dispatch(
            "GET",
            f"/kyc/{_enum_value(kyc_schema)}/status",
            schema=kyc_status_response_schema,
            requires_session=True,
        )

    # --- fiat accounts ---
    async def add_fiat_account(
        self,
        fiat_account_schema: FiatAccountSchema | str,
        data: dict[str, Any],
    ) -> Result[ObfuscatedFiatAccountData, ResponseError]:
        return await self._dispatcher.dispatch(
            "POST",
            "/accounts",
            body={"fiatAccountSchema": _enum_value(fiat_account_schema), "data": data},
            schema=obfuscated_fiat_account_data_schema,
            requires_session=True,
        )

    async def get_fiat_accounts(self) -> Result[GetFiatAccountsResponse, ResponseError]:
        return await self._dispatcher.dispatch(
            "GET",
            "/accounts",
            schema=get_fiat_accounts_response_schema,
            requires_session=True,
        )

    async def delete_fiat_account(self, fiat_account_id: str) -> Result[None, ResponseError]:
        return await self._dispatcher.dispatch(
            "DELETE",
            f"/accounts/{fiat_account_id}",
            requires_session=True,
        )

    # --- transfers ---
    async def _transfer(
        self,
        direction: str,
        *,
        idempotency_key: str,
        quote_id: str,
        fiat_account_id: str,
    ) -> Result[TransferResponse, ResponseError]:
        return await self._dispatcher.dispatch(
            "POST",
            f"/transfer/{direction}",
            body={"quoteId": quote_id, "fiatAccountId": fiat_account_id},
            schema=transfer_response_schema,
            requires_session=True,
            headers={"Idempotency-Key": idempotency_key},
        )

    async def transfer_in(
        self,
        *,
        idempotency_key: str,
        quote_id: str,
        fiat_account_id: str,
    ) -> Result[TransferResponse, ResponseError]:
        return await self._transfer(
            "in",
            idempotency_key=idempotency_key,
            quote_id=quote_id,
            fiat_account_id=fiat_account_id,
        )

    async def transfer_out(
        self,
        *,
        idempotency_key: str,
        quote_id: str,
        fiat_account_id: str,
    ) -> Result[TransferResponse, ResponseError]:
        return await self._transfer(
            "out",
            idempotency_key=idempotency_key,
            quote_id=quote_id,
            fiat_account_id=fiat_account_id,
        )

    async def get_transfer_status(self, transfer_id: str) -> Result[TransferStatusResponse, ResponseError]:
        return await self._dispatcher.dispatch(
            "GET",
            f"/transfer/{transfer_id}/status",
            schema=transfer_status_response_schema,
            requires_session=True,
        )
