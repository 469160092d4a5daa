"""Unit tests for RequestDispatcher outcome classification, headers and deadlines."""
from __future__ import annotations

import asyncio

import pytest

from fiatconnect_client.application.dispatcher import RequestDispatcher
from fiatconnect_client.domain.cookie_store import CookieStore
from fiatconnect_client.domain.errors import (
    ApiError,
    RequestTimeoutError,
    SchemaValidationError,
    TransportError,
)
from fiatconnect_client.domain.schemas import (
    get_fiat_accounts_response_schema,
    kyc_status_response_schema,
    transfer_response_schema,
)
from fiatconnect_client.ports.http_transport import HttpTransportError, HttpTransportTimeoutError
from tests.fakes import FakeResponse, FakeTransport, dump, json_response, make_config
from tests.test_data import API_KEY, BASE_URL, KYC_STATUS_RESPONSE, TRANSFER_RESPONSE


def _dispatcher(transport: FakeTransport, *, cookie_store: CookieStore | None = None, **config) -> RequestDispatcher:
    if cookie_store is None:
        cookie_store = CookieStore()
    return RequestDispatcher(make_config(**config), transport, cookie_store)


def test_success_with_schema_returns_validated_body():
    transport = FakeTransport(json_response(KYC_STATUS_RESPONSE))
    dispatcher = _dispatcher(transport)

    result = asyncio.run(dispatcher.dispatch("GET", "/kyc/PersonalDataAndDocuments/status", schema=kyc_status_response_schema))

    assert result.is_ok
    assert dump(kyc_status_response_schema, result.unwrap()) == KYC_STATUS_RESPONSE
    assert transport.calls[0].url == f"{BASE_URL}/kyc/PersonalDataAndDocuments/status"
    assert transport.calls[0].headers is None
    assert transport.calls[0].json_body is None


def test_success_without_schema_returns_none():
    transport = FakeTransport(json_response({}))

    result = asyncio.run(_dispatcher(transport).dispatch("DELETE", "/accounts/12358"))

    assert result.is_ok
    assert result.unwrap() is None


def test_schema_mismatch_is_validation_error_never_ok():
    transport = FakeTransport(json_response(""))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/kyc/x/status", schema=kyc_status_response_schema))

    assert result.is_err
    assert isinstance(result.error, SchemaValidationError)
    assert result.error.schema_name == "kycStatusResponseSchema"
    with pytest.raises(SchemaValidationError, match="Error validating object with schema kycStatusResponseSchema"):
        result.unwrap()


def test_non_json_success_body_with_schema_is_validation_error():
    transport = FakeTransport(FakeResponse(200, "<html></html>"))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts", schema=kyc_status_response_schema))

    assert isinstance(result.error, SchemaValidationError)


@pytest.mark.parametrize("status_code", [400, 401, 404, 409, 500])
def test_non_2xx_is_api_error_carrying_body(status_code):
    body = {"error": "ResourceNotFound"}
    transport = FakeTransport(json_response(body, status_code))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/kyc/x/status", schema=kyc_status_response_schema))

    assert isinstance(result.error, ApiError)
    assert result.error.message == "FiatConnect API Error"
    assert result.error.cause == body
    assert result.error.status_code == status_code


def test_error_body_is_not_schema_validated():
    """A non-2xx body that happens to match the success schema is still an ApiError."""
    transport = FakeTransport(json_response(KYC_STATUS_RESPONSE, 409))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/kyc/x/status", schema=kyc_status_response_schema))

    assert isinstance(result.error, ApiError)
    assert result.error.cause == KYC_STATUS_RESPONSE


def test_non_json_error_body_is_carried_as_text():
    transport = FakeTransport(FakeResponse(502, "Bad Gateway"))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert isinstance(result.error, ApiError)
    assert result.error.cause == "Bad Gateway"


DEEPLY_NESTED_BODY = "[" * 100_000 + "]" * 100_000


def test_too_deeply_nested_success_body_is_validation_error():
    transport = FakeTransport(FakeResponse(200, DEEPLY_NESTED_BODY))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts", schema=get_fiat_accounts_response_schema))

    assert isinstance(result.error, SchemaValidationError)
    assert result.error.issues == [{"path": [], "message": "expected JSON body, received unparseable text"}]


def test_too_deeply_nested_error_body_is_carried_as_text():
    transport = FakeTransport(FakeResponse(500, DEEPLY_NESTED_BODY))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert isinstance(result.error, ApiError)
    assert result.error.cause == DEEPLY_NESTED_BODY


def test_transport_failure_carries_transport_message():
    transport = FakeTransport(HttpTransportError("connection refused"))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert isinstance(result.error, TransportError)
    assert result.error.message == "connection refused"


def test_unexpected_transport_exception_is_still_a_result():
    transport = FakeTransport(OSError("fake error message"))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert isinstance(result.error, TransportError)
    assert result.error.message == "fake error message"


def test_deadline_aborts_and_cancels_in_flight_call():
    transport = FakeTransport(json_response(KYC_STATUS_RESPONSE), delay_seconds=1.0)
    dispatcher = _dispatcher(transport, timeout_seconds=0.05)

    result = asyncio.run(dispatcher.dispatch("GET", "/kyc/x/status", schema=kyc_status_response_schema))

    assert isinstance(result.error, RequestTimeoutError)
    assert result.error.message == "AbortError"
    assert result.error.aborted is True
    assert transport.cancelled is True
    # the queued response was never consumed after cancellation
    assert len(transport.outcomes) == 1


def test_transport_timeout_is_classified_as_aborted():
    transport = FakeTransport(HttpTransportTimeoutError("read timeout"))

    result = asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert isinstance(result.error, RequestTimeoutError)
    assert result.error.aborted is True


def test_fast_call_within_deadline_succeeds():
    transport = FakeTransport(json_response(KYC_STATUS_RESPONSE), delay_seconds=0.01)

    result = asyncio.run(
        _dispatcher(transport, timeout_seconds=1.0).dispatch("GET", "/x", schema=kyc_status_response_schema)
    )

    assert result.is_ok


def test_bodied_request_sets_content_type_and_bearer():
    transport = FakeTransport(json_response(TRANSFER_RESPONSE))
    dispatcher = _dispatcher(transport, api_key=API_KEY)

    asyncio.run(
        dispatcher.dispatch(
            "POST",
            "/transfer/in",
            body={"quoteId": "q", "fiatAccountId": "f"},
            schema=transfer_response_schema,
            headers={"Idempotency-Key": "key-1"},
        )
    )

    call = transport.calls[0]
    assert call.method == "POST"
    assert call.json_body == {"quoteId": "q", "fiatAccountId": "f"}
    assert call.headers == {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {API_KEY}",
        "Idempotency-Key": "key-1",
    }


def test_config_extra_headers_are_sent():
    transport = FakeTransport(json_response({}))

    asyncio.run(_dispatcher(transport, headers={"X-Client": "wallet"}).dispatch("GET", "/accounts"))

    assert transport.calls[0].headers == {"X-Client": "wallet"}


def test_session_cookies_attached_only_when_required():
    cookie_store = CookieStore()
    cookie_store.extract_cookies(["session=abc"])
    transport = FakeTransport(json_response({}), json_response({}))
    dispatcher = _dispatcher(transport, cookie_store=cookie_store)

    asyncio.run(dispatcher.dispatch("GET", "/accounts", requires_session=True))
    asyncio.run(dispatcher.dispatch("POST", "/quote/in", body={}))

    assert transport.calls[0].headers == {"Cookie": "session=abc"}
    assert "Cookie" not in transport.calls[1].headers


def test_set_cookie_on_response_merges_into_session():
    cookie_store = CookieStore()
    cookie_store.extract_cookies(["session=abc"])
    transport = FakeTransport(json_response({}, set_cookie=["session=refreshed; Path=/"]))

    asyncio.run(_dispatcher(transport, cookie_store=cookie_store).dispatch("GET", "/accounts", requires_session=True))

    assert cookie_store.cookies == {"session": "refreshed"}


def test_base_url_trailing_slash_is_normalised():
    transport = FakeTransport(json_response({}))

    asyncio.run(_dispatcher(transport, base_url=f"{BASE_URL}/").dispatch("GET", "accounts"))

    assert transport.calls[0].url == f"{BASE_URL}/accounts"


def test_exactly_one_attempt_per_dispatch():
    transport = FakeTransport(json_response({"error": "InternalError"}, 500), json_response({}))

    asyncio.run(_dispatcher(transport).dispatch("GET", "/accounts"))

    assert len(transport.calls) == 1
    assert len(transport.outcomes) == 1
