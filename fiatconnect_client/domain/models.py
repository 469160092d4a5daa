"""Domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Mapping

from pydantic import TypeAdapter

from fiatconnect_client.domain.schemas import CryptoType, FiatType, Network

_DATETIME = TypeAdapter(datetime)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ClientConfig:
    """Client construction parameters (value object, never mutated)."""

    base_url: str
    network: Network
    account_address: str
    api_key: str | None = None
    timeout_seconds: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ValueError("base_url must be a non-empty str")
        if not isinstance(self.account_address, str) or not self.account_address.strip():
            raise ValueError("account_address must be a non-empty str")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        object.__setattr__(self, "network", Network(self.network))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def api_root(self) -> str:
        return self.base_url.rstrip("/")


@dataclass(frozen=True)
class SiweSessionConfig:
    """Sign-In-With-Ethereum parameters derived from a ClientConfig."""

    account_address: str
    statement: str
    version: str
    chain_id: int
    session_duration_ms: int
    login_url: str
    clock_url: str
    headers: Mapping[str, str] | None = field(default=None, hash=False)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass(frozen=True)
class ClockDiff:
    """Server-minus-local clock offset and its uncertainty, both in milliseconds."""

    diff: float
    max_error: float


@dataclass(frozen=True)
class ClockSkew:
    """Point-in-time clock skew snapshot from one probe."""

    diff_ms: float
    max_error_ms: float
    measured_at_local: datetime


@dataclass(frozen=True)
class QuoteRequest:
    fiat_type: FiatType
    crypto_type: CryptoType
    country: str
    fiat_amount: str | None = None
    crypto_amount: str | None = None
    region: str | None = None
    address: str | None = None

    def to_body(self, *, preview: bool) -> dict[str, object]:
        body: dict[str, object] = {
            "fiatType": FiatType(self.fiat_type).value,
            "cryptoType": CryptoType(self.crypto_type).value,
            "country": self.country,
        }
        if self.fiat_amount is not None:
            body["fiatAmount"] = self.fiat_amount
        if self.crypto_amount is not None:
            body["cryptoAmount"] = self.crypto_amount
        if self.region is not None:
            body["region"] = self.region
        if self.address is not None:
            body["address"] = self.address
        body["preview"] = preview
        return body


def ms_to_datetime(ms: float) -> datetime:
    return _EPOCH + timedelta(milliseconds=ms)


def datetime_to_ms(value: datetime) -> float:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) / timedelta(milliseconds=1)


def iso_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    parsed = _DATETIME.validate_python(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
