"""
Shared request parameters and API payloads for client tests.

Payloads mirror what a FiatConnect provider returns; use them as response
bodies for fake transports and as expected values for deep-equality checks.
"""
from fiatconnect_client.domain.models import QuoteRequest
from fiatconnect_client.domain.schemas import CryptoType, FiatType

BASE_URL = "https://fiat-connect-api.com"
ACCOUNT_ADDRESS = "0x0d8e461687b7d06f86ec348e0c270b0f279855f0"
API_KEY = "api-key"

QUOTE_REQUEST = QuoteRequest(
    fiat_type=FiatType.USD,
    crypto_type=CryptoType.cUSD,
    country="DE",
    fiat_amount="100",
)

QUOTE_REQUEST_BODY = {
    "fiatType": "USD",
    "cryptoType": "cUSD",
    "country": "DE",
    "fiatAmount": "100",
}

_QUOTE_KYC = {
    "kycRequired": True,
    "kycSchemas": [{"kycSchema": "PersonalDataAndDocuments", "allowedValues": {}}],
}

_QUOTE_FIAT_ACCOUNT = {
    "BankAccount": {
        "fiatAccountSchemas": [{"fiatAccountSchema": "AccountNumber", "allowedValues": {}}],
        "fee": "0.53",
        "feeType": "PlatformFee",
        "feeFrequency": "OneTime",
    }
}

QUOTE_IN_RESPONSE = {
    "quote": {
        "fiatType": "USD",
        "cryptoType": "cUSD",
        "fiatAmount": "100",
        "cryptoAmount": "100",
        "quoteId": "mock_quote_in_id",
        "guaranteedUntil": "2030-01-01T00:00:00.000Z",
        "transferType": "TransferIn",
    },
    "kyc": _QUOTE_KYC,
    "fiatAccount": _QUOTE_FIAT_ACCOUNT,
}

QUOTE_OUT_RESPONSE = {
    "quote": {
        "fiatType": "USD",
        "cryptoType": "cUSD",
        "fiatAmount": "100",
        "cryptoAmount": "100",
        "quoteId": "mock_quote_out_id",
        "guaranteedUntil": "2030-01-01T00:00:00.000Z",
        "transferType": "TransferOut",
    },
    "kyc": _QUOTE_KYC,
    "fiatAccount": _QUOTE_FIAT_ACCOUNT,
}

QUOTE_PREVIEW_RESPONSE = {
    "quote": {
        "fiatType": "USD",
        "cryptoType": "cUSD",
        "fiatAmount": "100",
        "cryptoAmount": "100",
        "transferType": "TransferIn",
    },
    "kyc": _QUOTE_KYC,
    "fiatAccount": _QUOTE_FIAT_ACCOUNT,
}

QUOTE_ERROR_RESPONSE = {
    "error": "CryptoAmountTooHigh",
    "minimumCryptoAmount": "0.5",
    "maximumCryptoAmount": "10",
}

KYC_SCHEMA_DATA = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "dateOfBirth": {"day": "10", "month": "12", "year": "1815"},
    "address": {"address1": "1 Main St", "isoCountryCode": "GB", "isoRegionCode": "LND", "city": "London"},
    "phoneNumber": "+4400000000",
    "selfieDocument": "base64selfie",
    "identificationDocument": "base64document",
}

KYC_STATUS_RESPONSE = {"kycStatus": "KycApproved"}

FIAT_ACCOUNT_SCHEMA_DATA = {
    "accountName": "Checking Account",
    "institutionName": "My Bank",
    "accountNumber": "12533986",
    "country": "NG",
    "fiatAccountType": "BankAccount",
}

ADD_FIAT_ACCOUNT_RESPONSE = {
    "fiatAccountId": "12358",
    "accountName": "Checking Account",
    "institutionName": "My Bank",
    "fiatAccountType": "BankAccount",
    "fiatAccountSchema": "AccountNumber",
}

GET_FIAT_ACCOUNTS_RESPONSE = {"BankAccount": [ADD_FIAT_ACCOUNT_RESPONSE]}

TRANSFER_REQUEST = {
    "idempotency_key": "f4b5c3e8-1d7c-4a3c-9b0e-2b3b5c1e4d2a",
    "quote_id": "mock_quote_out_id",
    "fiat_account_id": "12358",
}

TRANSFER_RESPONSE = {
    "transferId": "82938",
    "transferStatus": "TransferStarted",
    "transferAddress": "0x12345",
}

TRANSFER_STATUS_RESPONSE = {
    "status": "TransferStarted",
    "transferType": "TransferIn",
    "fiatType": "USD",
    "cryptoType": "cUSD",
    "amountProvided": "5.0",
    "amountReceived": "5.0",
    "fee": "0.01",
    "fiatAccountId": "12358",
    "transferId": "82938",
    "transferAddress": "0x12345",
}

CLOCK_RESPONSE = {"time": "2022-05-01T00:00:00.500Z"}
