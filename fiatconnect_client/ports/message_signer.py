"""Message signer port: signs SIWE login messages off-core (wallet, KMS, ...)."""
from __future__ import annotations

from typing import Awaitable, Callable, Protocol, runtime_checkable


@runtime_checkable
class MessageSigner(Protocol):
    async def sign_message(self, message: str) -> str:
        """Return the signature of message. May suspend on an external signer."""
        ...


class CallableSigner:
    """Adapts a plain `async def sign(message) -> signature` function to MessageSigner."""

    def __init__(self, signing_function: Callable[[str], Awaitable[str]]) -> None:
        self._signing_function = signing_function

    async def sign_message(self, message: str) -> str:
        return await self._signing_function(message)


def as_signer(signer: MessageSigner | Callable[[str], Awaitable[str]]) -> MessageSigner:
    if isinstance(signer, MessageSigner):
        return signer
    if callable(signer):
        return CallableSigner(signer)
    raise TypeError("signer must implement sign_message or be an async callable")
