from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Union

from ..domain.constants import ExpirationPolicy, SessionState
from ..domain.exceptions import (
    DecodeError,
    InvalidTokenError,
    NoTokenFoundError,
)
from ..domain.ports import CredentialTransport, SessionStore, TokenCodec
from ..domain.value_objects import Credentials, expires_at


@dataclass(slots=True)
class SessionManager:
    """
    Application service owning the session lifecycle:
    - load:    validate the token already in the store
    - create:  exchange credentials for a token and store it
    - destroy: remove the stored token

    Stateless between calls: `load` always re-reads the store. Failures are
    raised to the caller as-is; nothing is logged, retried or cleared
    implicitly.
    """

    codec: TokenCodec
    store: SessionStore
    transport: CredentialTransport
    clock: Callable[[], float] = time.time
    expiration_policy: ExpirationPolicy = field(default=ExpirationPolicy.LITERAL)

    async def load(self) -> Mapping[str, Any]:
        """
        Raises:
            NoTokenFoundError
            InvalidTokenError
            StorageError
        """
        token = self.store.read()
        if not token:
            raise NoTokenFoundError("No token found")

        try:
            claims = self.codec.decode(token)
        except DecodeError as exc:
            raise InvalidTokenError("Invalid token") from exc

        if not self.is_valid(claims):
            raise InvalidTokenError("Invalid token")
        return claims

    async def create(
        self,
        credentials: Union[Credentials, Mapping[str, Any]],
    ) -> Mapping[str, Any]:
        """
        Raises:
            AuthenticationFailedError (nothing is written)
            StorageError
            InvalidTokenError (token was written but cannot be decoded)
        """
        if not isinstance(credentials, Credentials):
            credentials = Credentials.from_mapping(credentials)

        token = await self.transport.login(credentials)
        self.store.write(token)

        try:
            return self.codec.decode(token)
        except DecodeError as exc:
            raise InvalidTokenError("Server issued an undecodable token") from exc

    async def destroy(self) -> bool:
        self.store.clear()
        return True

    async def state(self) -> SessionState:
        try:
            await self.load()
        except (NoTokenFoundError, InvalidTokenError):
            return SessionState.NO_SESSION
        return SessionState.SESSION_ACTIVE

    # ------------------------------------------------------------------ #
    # Expiration policy
    # ------------------------------------------------------------------ #

    def is_valid(self, claims: Mapping[str, Any]) -> bool:
        exp = expires_at(claims)
        if exp is None:
            return False

        exp_ms = exp * 1000
        now_ms = self.clock() * 1000
        if self.expiration_policy is ExpirationPolicy.REJECT_EXPIRED:
            return exp_ms > now_ms
        return not exp_ms > now_ms

