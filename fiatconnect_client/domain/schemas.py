"""FiatConnect wire types and the named schemas responses are validated against."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_validator

T = TypeVar("T")


class Network(str, Enum):
    Alfajores = "Alfajores"
    Mainnet = "Mainnet"


class FiatType(str, Enum):
    USD = "USD"
    EUR = "EUR"
    REAL = "REAL"
    NGN = "NGN"
    KES = "KES"
    GHS = "GHS"
    XOF = "XOF"
    GNF = "GNF"
    COP = "COP"
    PHP = "PHP"
    UGX = "UGX"
    ZAR = "ZAR"


class CryptoType(str, Enum):
    cUSD = "cUSD"
    cEUR = "cEUR"
    cREAL = "cREAL"
    CELO = "CELO"


class KycSchema(str, Enum):
    PersonalDataAndDocuments = "PersonalDataAndDocuments"
    PersonalDataAndDocumentsDetailed = "PersonalDataAndDocumentsDetailed"


class KycStatus(str, Enum):
    KycNotCreated = "KycNotCreated"
    KycPending = "KycPending"
    KycApproved = "KycApproved"
    KycDenied = "KycDenied"
    KycExpired = "KycExpired"


_KYC_STATUS_VALUES = frozenset(
    [status.value for status in KycStatus] + [status.value.removeprefix("Kyc") for status in KycStatus]
)


class FiatAccountType(str, Enum):
    BankAccount = "BankAccount"
    MobileMoney = "MobileMoney"
    DuniaWallet = "DuniaWallet"


class FiatAccountSchema(str, Enum):
    AccountNumber = "AccountNumber"
    MobileMoney = "MobileMoney"
    DuniaWallet = "DuniaWallet"
    IBANNumber = "IBANNumber"
    IFSCAccount = "IFSCAccount"
    PIXAccount = "PIXAccount"


class TransferType(str, Enum):
    TransferIn = "TransferIn"
    TransferOut = "TransferOut"


class TransferStatus(str, Enum):
    TransferStarted = "TransferStarted"
    TransferTxPending = "TransferTxPending"
    TransferTxSettled = "TransferTxSettled"
    TransferAmlFailed = "TransferAmlFailed"
    TransferSendingFiat = "TransferSendingFiat"
    TransferReadyForUserToSendCryptoFunds = "TransferReadyForUserToSendCryptoFunds"
    TransferReceivedFiatFunds = "TransferReceivedFiatFunds"
    TransferComplete = "TransferComplete"
    TransferFailed = "TransferFailed"


class FeeType(str, Enum):
    KycFee = "KycFee"
    PlatformFee = "PlatformFee"


class FeeFrequency(str, Enum):
    OneTime = "OneTime"
    Recurring = "Recurring"


class FiatConnectError(str, Enum):
    GeoNotSupported = "GeoNotSupported"
    CryptoAmountTooLow = "CryptoAmountTooLow"
    CryptoAmountTooHigh = "CryptoAmountTooHigh"
    FiatAmountTooLow = "FiatAmountTooLow"
    FiatAmountTooHigh = "FiatAmountTooHigh"
    CryptoNotSupported = "CryptoNotSupported"
    FiatNotSupported = "FiatNotSupported"
    UnsupportedSchema = "UnsupportedSchema"
    InvalidSchema = "InvalidSchema"
    ResourceExists = "ResourceExists"
    ResourceNotFound = "ResourceNotFound"
    TransferNotAllowed = "TransferNotAllowed"
    KycExpired = "KycExpired"
    Unauthorized = "Unauthorized"
    SessionExpired = "SessionExpired"
    InvalidParameters = "InvalidParameters"
    NonceInUse = "NonceInUse"
    IssuedTooEarly = "IssuedTooEarly"
    ExpirationTooLong = "ExpirationTooLong"
    InternalError = "InternalError"


class _WireModel(BaseModel):
    """Response model: tolerates keys the server adds, rejects wrong shapes."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ClockResponse(_WireModel):
    time: str


class KycRequirement(_WireModel):
    kycSchema: KycSchema
    allowedValues: dict[str, list[str]] = {}


class QuoteKyc(_WireModel):
    kycRequired: bool
    kycSchemas: list[KycRequirement]


class FiatAccountSchemaRequirement(_WireModel):
    fiatAccountSchema: FiatAccountSchema
    allowedValues: dict[str, list[str]] = {}


class QuoteFiatAccount(_WireModel):
    fiatAccountSchemas: list[FiatAccountSchemaRequirement]
    fee: str | None = None
    feeType: FeeType | None = None
    feeFrequency: FeeFrequency | None = None
    settlementTimeLowerBound: str | None = None
    settlementTimeUpperBound: str | None = None


class QuoteDetails(_WireModel):
    fiatType: FiatType
    cryptoType: CryptoType
    fiatAmount: str
    cryptoAmount: str
    quoteId: str
    guaranteedUntil: str
    transferType: TransferType
    fiatAmountMin: str | None = None
    fiatAmountMax: str | None = None
    cryptoAmountMin: str | None = None
    cryptoAmountMax: str | None = None


class QuotePreviewDetails(QuoteDetails):
    quoteId: str | None = None  # type: ignore[assignment]
    guaranteedUntil: str | None = None  # type: ignore[assignment]


class QuoteResponse(_WireModel):
    quote: QuoteDetails
    kyc: QuoteKyc
    fiatAccount: dict[FiatAccountType, QuoteFiatAccount]


class QuotePreviewResponse(_WireModel):
    quote: QuotePreviewDetails
    kyc: QuoteKyc
    fiatAccount: dict[FiatAccountType, QuoteFiatAccount]


class KycStatusResponse(_WireModel):
    kycStatus: str

    @field_validator("kycStatus")
    @classmethod
    def _known_status(cls, value: str) -> str:
        # Some providers report the bare status ("Approved"); the value is kept as sent.
        if value not in _KYC_STATUS_VALUES:
            raise ValueError(f"unknown KYC status {value!r}")
        return value

    @property
    def status(self) -> KycStatus:
        return KycStatus(self.kycStatus if self.kycStatus.startswith("Kyc") else f"Kyc{self.kycStatus}")


class ObfuscatedFiatAccountData(_WireModel):
    fiatAccountId: str
    accountName: str
    institutionName: str
    fiatAccountType: FiatAccountType
    fiatAccountSchema: FiatAccountSchema


GetFiatAccountsResponse = dict[FiatAccountType, list[ObfuscatedFiatAccountData]]


class TransferResponse(_WireModel):
    transferId: str
    transferStatus: TransferStatus
    transferAddress: str


class TransferStatusResponse(_WireModel):
    status: TransferStatus
    transferType: TransferType
    fiatType: FiatType
    cryptoType: CryptoType
    amountProvided: str
    amountReceived: str
    fee: str | None = None
    fiatAccountId: str
    transferId: str
    transferAddress: str
    txHash: str | None = None


@dataclass(frozen=True)
class Schema(Generic[T]):
    """A named expected shape. `type` is a pydantic model or any type TypeAdapter accepts."""

    name: str
    type: Any

    @property
    def adapter(self) -> TypeAdapter:
        return _adapter_for(self.type)


_ADAPTERS: dict[Any, TypeAdapter] = {}


def _adapter_for(tp: Any) -> TypeAdapter:
    adapter = _ADAPTERS.get(tp)
    if adapter is None:
        adapter = TypeAdapter(tp)
        _ADAPTERS[tp] = adapter
    return adapter


clock_response_schema: Schema[ClockResponse] = Schema("clockResponseSchema", ClockResponse)
quote_response_schema: Schema[QuoteResponse] = Schema("quoteResponseSchema", QuoteResponse)
quote_preview_response_schema: Schema[QuotePreviewResponse] = Schema(
    "quotePreviewResponseSchema", QuotePreviewResponse
)
kyc_status_response_schema: Schema[KycStatusResponse] = Schema("kycStatusResponseSchema", KycStatusResponse)
obfuscated_fiat_account_data_schema: Schema[ObfuscatedFiatAccountData] = Schema(
    "obfuscatedFiatAccountDataSchema", ObfuscatedFiatAccountData
)
get_fiat_accounts_response_schema: Schema[GetFiatAccountsResponse] = Schema(
    "getFiatAccountsResponseSchema", GetFiatAccountsResponse
)
transfer_response_schema: Schema[TransferResponse] = Schema("transferResponseSchema", TransferResponse)
transfer_status_response_schema: Schema[TransferStatusResponse] = Schema(
    "transferStatusResponseSchema", TransferStatusResponse
)
