from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .domain.constants import BodyFormat, DEFAULT_STORAGE_KEY, ExpirationPolicy


@dataclass(slots=True)
class SessionSettings:
    """
    Login endpoint + session storage settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    login_url: str
    storage_key: str = DEFAULT_STORAGE_KEY
    verify_ssl: bool = True
    timeout: float = 30.0

    body_format: BodyFormat = BodyFormat.FORM
    token_field: Optional[str] = None
    expiration_policy: ExpirationPolicy = ExpirationPolicy.LITERAL
