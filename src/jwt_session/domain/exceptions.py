from __future__ import annotations

from typing import Optional


class SessionError(Exception):
    """Base class for session lifecycle failures."""
    pass


class NoTokenFoundError(SessionError):
    """Raised when no token is persisted at load time."""
    pass


class InvalidTokenError(SessionError):
    """Raised when the stored token is malformed or fails the expiration policy."""
    pass


class AuthenticationFailedError(SessionError):
    """
    Raised when the credential transport rejects a login or the network fails.

    `detail` is the server-provided text, passed through uninterpreted.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class StorageError(SessionError):
    """Raised when the persistence medium cannot be read or written."""
    pass


class DecodeError(ValueError):
    """Raised by a token codec when a string is not a well-formed token."""
    pass
