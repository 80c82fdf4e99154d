from __future__ import annotations

from .deps import FastAPISession
from ..common.session_factory import create_transport
from ...settings import SessionSettings


def create_fastapi_session(settings: SessionSettings) -> FastAPISession:
    """
    High-level helper for FastAPI apps:

    - Builds an HttpCredentialTransport from the settings
    - Wraps it in FastAPISession, exposing:

        fastapi_session.manager(request)
        fastapi_session.get_current_session
        fastapi_session.get_optional_session
    """
    return FastAPISession(settings=settings, transport=create_transport(settings))


__all__ = ["FastAPISession", "create_fastapi_session"]


"""

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware
from jwt_session.integrations.fastapi import create_fastapi_session
from jwt_session.env import settings_from_env

app = FastAPI()
app.add_middleware(SessionMiddleware, secret_key="change-me", max_age=None)
fastapi_session = create_fastapi_session(settings_from_env())

get_current_session = fastapi_session.get_current_session


"""
