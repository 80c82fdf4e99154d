from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .value_objects import Credentials


class TokenCodec(Protocol):
    """
    Port for turning a compact token string into its claims payload.

    Implementations live in the adapters layer (e.g. PyJWT codec).
    """

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode the token body without verifying its signature.

        Raises:
          - DecodeError if the token is not well formed
        """
        ...


class SessionStore(Protocol):
    """Port for persisting a single named token string."""

    def read(self) -> Optional[str]:
        ...

    def write(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class CredentialTransport(Protocol):
    """Port for exchanging credentials for a raw token."""

    async def login(self, credentials: Credentials) -> str:
        """
        Raises:
          - AuthenticationFailedError on rejection or network failure
        """
        ...
