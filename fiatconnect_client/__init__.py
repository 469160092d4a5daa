from loguru import logger

from .application.client import FiatConnectClient, create_siwe_config
from .composition import create_fiat_connect_client
from .domain.errors import (
    ApiError,
    AuthError,
    RequestTimeoutError,
    ResponseError,
    SchemaValidationError,
    TransportError,
)
from .domain.models import ClientConfig, ClockDiff, QuoteRequest, SiweSessionConfig
from .domain.result import Result
from .domain.schemas import (
    CryptoType,
    FiatAccountSchema,
    FiatAccountType,
    FiatConnectError,
    FiatType,
    KycSchema,
    KycStatus,
    Network,
    TransferStatus,
    TransferType,
)
from .ports.message_signer import MessageSigner

# Library logging stays silent until the application opts in with logger.enable("fiatconnect_client").
logger.disable("fiatconnect_client")

__all__ = [
    "FiatConnectClient",
    "create_fiat_connect_client",
    "create_siwe_config",
    "ClientConfig",
    "SiweSessionConfig",
    "ClockDiff",
    "QuoteRequest",
    "Result",
    "MessageSigner",
    "ResponseError",
    "TransportError",
    "RequestTimeoutError",
    "ApiError",
    "SchemaValidationError",
    "AuthError",
    "Network",
    "FiatType",
    "CryptoType",
    "KycSchema",
    "KycStatus",
    "FiatAccountType",
    "FiatAccountSchema",
    "TransferType",
    "TransferStatus",
    "FiatConnectError",
]
