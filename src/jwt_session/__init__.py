"""
jwt_session

Client-side session lifecycle around a bearer JWT: validate the stored
token, log in to obtain a new one, and log out.
"""

__version__ = "0.1.0"

from .domain.constants import (
    DEFAULT_STORAGE_KEY,
    BodyFormat,
    ExpirationPolicy,
    SessionState,
)
from .domain.exceptions import (
    SessionError,
    NoTokenFoundError,
    InvalidTokenError,
    AuthenticationFailedError,
    StorageError,
    DecodeError,
)
from .domain.value_objects import Credentials, expires_at
from .domain.ports import TokenCodec, SessionStore, CredentialTransport

from .application.session_manager import SessionManager

from .adapters.jwt_codec import JWTTokenCodec
from .adapters.memory_store import InMemorySessionStore, MappingSessionStore
from .adapters.http_transport import HttpCredentialTransport

from .settings import SessionSettings
from .env import settings_from_env
from .integrations.common.session_factory import create_session_manager, create_transport

__all__ = [
    "__version__",
    # domain core
    "DEFAULT_STORAGE_KEY",
    "BodyFormat",
    "ExpirationPolicy",
    "SessionState",
    "Credentials",
    "TokenCodec",
    "SessionStore",
    "CredentialTransport",
    # exceptions
    "SessionError",
    "NoTokenFoundError",
    "InvalidTokenError",
    "AuthenticationFailedError",
    "StorageError",
    "DecodeError",
    # application
    "SessionManager",
    # adapters
    "JWTTokenCodec",
    "expires_at",
    "InMemorySessionStore",
    "MappingSessionStore",
    "HttpCredentialTransport",
    # wiring
    "SessionSettings",
    "settings_from_env",
    "create_session_manager",
    "create_transport",
]
