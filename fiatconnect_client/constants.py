"""Client-level constants shared across modules."""
from __future__ import annotations

from fiatconnect_client.domain.schemas import Network

LOGIN_PATH = "/auth/login"
CLOCK_PATH = "/clock"

SIWE_STATEMENT = "Sign in with Ethereum"
SIWE_VERSION = "1"
SESSION_DURATION_MS = 4 * 60 * 60 * 1000

CHAIN_IDS: dict[Network, int] = {
    Network.Alfajores: 44787,
    Network.Mainnet: 42220,
}

API_ERROR_MESSAGE = "FiatConnect API Error"
ABORT_ERROR_MESSAGE = "AbortError"


class LOGIN_STATE:
    LOGGED_OUT = "LOGGED_OUT"
    LOGGING_IN = "LOGGING_IN"
    LOGGED_IN = "LOGGED_IN"
