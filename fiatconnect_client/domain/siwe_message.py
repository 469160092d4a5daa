"""EIP-4361 (Sign-In with Ethereum) message construction."""
from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from datetime import datetime, timedelta
from urllib.parse import urlparse

from fiatconnect_client.domain.models import SiweSessionConfig, iso_timestamp

_NONCE_ALPHABET = string.ascii_letters + string.digits
NONCE_LENGTH = 17


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class SiweMessage:
    domain: str
    address: str
    statement: str
    uri: str
    version: str
    chain_id: int
    nonce: str
    issued_at: datetime
    expiration_time: datetime

    @classmethod
    def for_session(
        cls,
        config: SiweSessionConfig,
        *,
        issued_at: datetime,
        nonce: str | None = None,
    ) -> "SiweMessage":
        return cls(
            domain=urlparse(config.login_url).netloc,
            address=config.account_address,
            statement=config.statement,
            uri=config.login_url,
            version=config.version,
            chain_id=config.chain_id,
            nonce=nonce or generate_nonce(),
            issued_at=issued_at,
            expiration_time=issued_at + timedelta(milliseconds=config.session_duration_ms),
        )

    def prepare(self) -> str:
        """Render the exact text the wallet signs."""
        lines = [
            f"{self.domain} wants you to sign in with your Ethereum account:",
            self.address,
            "",
        ]
        if self.statement:
            lines.extend([self.statement, ""])
        lines.extend(
            [
                f"URI: {self.uri}",
                f"Version: {self.version}",
                f"Chain ID: {self.chain_id}",
                f"Nonce: {self.nonce}",
                f"Issued At: {iso_timestamp(self.issued_at)}",
                f"Expiration Time: {iso_timestamp(self.expiration_time)}",
            ]
        )
        return "\n".join(lines)
