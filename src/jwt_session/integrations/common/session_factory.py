from __future__ import annotations

from typing import Any, MutableMapping, Optional

import httpx

from ...adapters.http_transport import HttpCredentialTransport
from ...adapters.jwt_codec import JWTTokenCodec
from ...adapters.memory_store import InMemorySessionStore, MappingSessionStore
from ...application.session_manager import SessionManager
from ...domain.ports import CredentialTransport, SessionStore
from ...settings import SessionSettings


def create_transport(
        settings: SessionSettings,
        *,
        client: Optional[httpx.AsyncClient] = None,
) -> HttpCredentialTransport:
    return HttpCredentialTransport(
        settings.login_url,
        body_format=settings.body_format,
        token_field=settings.token_field,
        verify_ssl=settings.verify_ssl,
        timeout=settings.timeout,
        client=client,
    )


def create_session_manager(
        settings: SessionSettings,
        *,
        backend: Optional[MutableMapping[str, Any]] = None,
        store: Optional[SessionStore] = None,
        transport: Optional[CredentialTransport] = None,
) -> SessionManager:
    """
    High-level factory: SessionSettings -> SessionManager.

    - `store` wins over `backend`; with neither, an InMemorySessionStore
      keyed by `settings.storage_key` is used
    - `transport` defaults to an HttpCredentialTransport for `login_url`
    """
    if store is None:
        if backend is not None:
            store = MappingSessionStore(backend, key=settings.storage_key)
        else:
            store = InMemorySessionStore(key=settings.storage_key)

    return SessionManager(
        codec=JWTTokenCodec(),
        store=store,
        transport=transport or create_transport(settings),
        expiration_policy=settings.expiration_policy,
    )
