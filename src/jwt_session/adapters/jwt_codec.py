from typing import Any, Mapping

import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError

from ..domain.exceptions import DecodeError
from ..domain.ports import TokenCodec


class JWTTokenCodec(TokenCodec):
    """
    Adapter implementing TokenCodec port using PyJWT.

    Only the claims payload is inspected. Signature integrity is left to the
    issuing server, so every PyJWT verification is switched off.
    """

    _OPTIONS = {
        "verify_signature": False,
        "verify_exp": False,
        "verify_nbf": False,
        "verify_iat": False,
        "verify_aud": False,
        "verify_iss": False,
    }

    def decode(self, token: str) -> Mapping[str, Any]:
        if not isinstance(token, str) or not token:
            raise DecodeError("Token must be a non-empty string")

        try:
            payload = jwt.decode(token, options=self._OPTIONS)
        except JWTInvalidTokenError as exc:
            raise DecodeError(f"Malformed token: {exc}") from exc

        if not isinstance(payload, Mapping):
            raise DecodeError("Token payload is not a JSON object")
        return payload
