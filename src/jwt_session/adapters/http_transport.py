from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from ..domain.constants import BodyFormat
from ..domain.exceptions import AuthenticationFailedError
from ..domain.ports import CredentialTransport
from ..domain.value_objects import Credentials

logger = logging.getLogger(__name__)


class HttpCredentialTransport(CredentialTransport):
    """
    Adapter implementing CredentialTransport port with httpx.

    - POSTs username/password to `login_url` (form body by default)
    - a 2xx body is the raw token
    - anything else becomes AuthenticationFailedError
    """

    def __init__(
        self,
        login_url: str,
        *,
        body_format: BodyFormat = BodyFormat.FORM,
        token_field: Optional[str] = None,
        verify_ssl: bool = True,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._login_url = login_url
        self._body_format = body_format
        self._token_field = token_field
        self._verify_ssl = verify_ssl
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def login_url(self) -> str:
        return self._login_url

    async def __aenter__(self) -> "HttpCredentialTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def login(self, credentials: Credentials) -> str:
        body = credentials.as_dict()
        if self._body_format is BodyFormat.JSON:
            request_kwargs: dict[str, Any] = {"json": body}
        else:
            request_kwargs = {"data": body}

        logger.debug("POST %s for %r", self._login_url, credentials.username)
        try:
            resp = await self._get_client().post(self._login_url, **request_kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AuthenticationFailedError(
                f"Login rejected: {e.response.status_code} {e.response.text}",
                status_code=e.response.status_code,
                detail=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise AuthenticationFailedError(f"Login request failed: {e}") from e

        token = self._extract_token(resp)
        if not token:
            raise AuthenticationFailedError(
                "Login succeeded but the response carried no token",
                status_code=resp.status_code,
                detail=resp.text,
            )
        logger.debug("Login for %r succeeded", credentials.username)
        return token

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(verify=self._verify_ssl, timeout=self._timeout)
            self._owns_client = True
        return self._client

    def _extract_token(self, resp: httpx.Response) -> str:
        text = resp.text.strip()
        content_type = resp.headers.get("Content-Type", "")
        if "json" not in content_type:
            return text

        try:
            body = json.loads(text)
        except ValueError:
            return text

        # servers that answer with a JSON string literal
        if isinstance(body, str):
            return body.strip()
        if self._token_field and isinstance(body, dict):
            value = body.get(self._token_field)
            return value.strip() if isinstance(value, str) else ""
        return text
