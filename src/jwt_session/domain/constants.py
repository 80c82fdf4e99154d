from enum import Enum

DEFAULT_STORAGE_KEY = "session-jwt"


class SessionState(Enum):
    NO_SESSION = "no_session"
    SESSION_ACTIVE = "session_active"


class ExpirationPolicy(Enum):
    """
    How the `exp` claim is compared against the current time.

    - LITERAL: reject while `exp * 1000 > now_ms`, i.e. only tokens whose
      expiry already passed are accepted. This is the historical behaviour
      of the session loader and stays the default.
    - REJECT_EXPIRED: reject once `exp * 1000 <= now_ms`.
    """
    LITERAL = "literal"
    REJECT_EXPIRED = "reject_expired"


class BodyFormat(Enum):
    FORM = "form"
    JSON = "json"
