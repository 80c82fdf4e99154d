from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from fastapi import HTTPException, Request, status

from ...adapters.jwt_codec import JWTTokenCodec
from ...adapters.memory_store import MappingSessionStore
from ...application.session_manager import SessionManager
from ...domain.exceptions import InvalidTokenError, NoTokenFoundError, StorageError
from ...domain.ports import CredentialTransport, TokenCodec
from ...settings import SessionSettings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FastAPISession:
    """
    FastAPI integration for jwt_session.

    The token lives in Starlette's `request.session`, so the app must install
    `SessionMiddleware`. One transport is shared by every request; the store
    is rebuilt per request over that request's session.
    """

    settings: SessionSettings
    transport: CredentialTransport
    codec: TokenCodec = field(default_factory=JWTTokenCodec)

    def manager(self, request: Request) -> SessionManager:
        try:
            backend = request.session
        except AssertionError as exc:
            raise StorageError("SessionMiddleware must be installed") from exc

        return SessionManager(
            codec=self.codec,
            store=MappingSessionStore(backend, key=self.settings.storage_key),
            transport=self.transport,
            expiration_policy=self.settings.expiration_policy,
        )

    # ------------------------------------------------------------------ #
    # Dependencies
    # ------------------------------------------------------------------ #

    async def get_current_session(self, request: Request) -> Mapping[str, Any]:
        """Dependency: require a valid session."""
        try:
            return await self.manager(request).load()
        except NoTokenFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="No session",
            ) from exc
        except InvalidTokenError as exc:
            logger.debug("Rejected stored session token: %s", exc.__cause__ or exc)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid session",
            ) from exc

    async def get_optional_session(self, request: Request) -> Mapping[str, Any] | None:
        """Dependency: optional session."""
        try:
            return await self.manager(request).load()
        except (NoTokenFoundError, InvalidTokenError):
            return None
