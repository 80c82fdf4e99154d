from __future__ import annotations

import os
from enum import Enum
from typing import Type, TypeVar

from .domain.constants import BodyFormat, DEFAULT_STORAGE_KEY, ExpirationPolicy
from .settings import SessionSettings

E = TypeVar("E", bound=Enum)


def settings_from_env() -> SessionSettings:
    def _bool(key: str, default: bool = True) -> bool:
        raw = os.getenv(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _float(key: str, default: float) -> float:
        raw = os.getenv(key)
        if not raw:
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise RuntimeError(f"{key} must be a number, got {raw!r}") from exc

    def _enum(key: str, enum_type: Type[E], default: E) -> E:
        raw = os.getenv(key)
        if not raw:
            return default
        try:
            return enum_type(raw.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(m.value for m in enum_type)
            raise RuntimeError(f"{key} must be one of: {allowed}") from exc

    login_url = os.getenv("JWT_SESSION_LOGIN_URL")
    if not login_url:
        raise RuntimeError("Missing session settings: JWT_SESSION_LOGIN_URL")

    return SessionSettings(
        login_url=login_url,
        storage_key=os.getenv("JWT_SESSION_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
        verify_ssl=_bool("VERIFY_SSL", True),
        timeout=_float("JWT_SESSION_TIMEOUT", 30.0),
        body_format=_enum("JWT_SESSION_BODY_FORMAT", BodyFormat, BodyFormat.FORM),
        token_field=os.getenv("JWT_SESSION_TOKEN_FIELD") or None,
        expiration_policy=_enum(
            "JWT_SESSION_EXPIRATION_POLICY",
            ExpirationPolicy,
            ExpirationPolicy.LITERAL,
        ),
    )
