from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Mapping, Optional


@dataclass(frozen=True, slots=True)
class Credentials:
    """
    Username/password pair handed to `SessionManager.create`.

    Transient: it is never persisted, and the password is kept out of `repr`.
    """
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Credentials":
        return cls(
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
        )

    def as_dict(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


# --- Claims helpers --------------------------------------------------------


def expires_at(claims: Mapping[str, Any]) -> Optional[float]:
    """Numeric `exp` claim in seconds, or None when missing or not a number."""
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, Real):
        return None
    return float(exp)
