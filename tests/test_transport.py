# tests/test_transport.py
import json
from urllib.parse import parse_qs

import httpx
import pytest

from jwt_session.adapters.http_transport import HttpCredentialTransport
from jwt_session.domain.constants import BodyFormat
from jwt_session.domain.exceptions import AuthenticationFailedError
from jwt_session.domain.value_objects import Credentials

LOGIN_URL = "https://auth.example.com/api/login"


def _transport(handler, **kwargs) -> HttpCredentialTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCredentialTransport(LOGIN_URL, client=client, **kwargs)


@pytest.mark.asyncio
async def test_login_posts_form_and_returns_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = parse_qs(request.content.decode())
        return httpx.Response(200, text="abc.def.ghi")

    token = await _transport(handler).login(Credentials("a", "b"))

    assert token == "abc.def.ghi"
    assert seen["method"] == "POST"
    assert seen["url"] == LOGIN_URL
    assert seen["body"] == {"username": ["a"], "password": ["b"]}


@pytest.mark.asyncio
async def test_login_posts_json_when_configured():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, text="tok\n")

    token = await _transport(handler, body_format=BodyFormat.JSON).login(Credentials("a", "b"))

    assert token == "tok"
    assert seen["body"] == {"username": "a", "password": "b"}


@pytest.mark.asyncio
async def test_login_unwraps_json_string_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json="x.y.z")

    assert await _transport(handler).login(Credentials("a", "b")) == "x.y.z"


@pytest.mark.asyncio
async def test_login_reads_token_field_from_json_object():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"token": "x.y.z", "user": "a"})

    transport = _transport(handler, token_field="token")
    assert await transport.login(Credentials("a", "b")) == "x.y.z"


@pytest.mark.asyncio
async def test_login_rejected_passes_detail_through():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Invalid username or password")

    with pytest.raises(AuthenticationFailedError) as exc_info:
        await _transport(handler).login(Credentials("a", "wrong"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid username or password"
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_login_network_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthenticationFailedError) as exc_info:
        await _transport(handler).login(Credentials("a", "b"))

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_login_empty_body_is_a_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="   ")

    with pytest.raises(AuthenticationFailedError):
        await _transport(handler).login(Credentials("a", "b"))


@pytest.mark.asyncio
async def test_owned_client_is_closed_on_exit():
    async with HttpCredentialTransport(LOGIN_URL) as transport:
        client = transport._get_client()
        assert not client.is_closed

    assert client.is_closed


@pytest.mark.asyncio
async def test_injected_client_is_left_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    transport = HttpCredentialTransport(LOGIN_URL, client=client)

    await transport.aclose()

    assert not client.is_closed
    await client.aclose()


def test_login_url_is_exposed_read_only():
    transport = HttpCredentialTransport(LOGIN_URL)
    assert transport.login_url == LOGIN_URL

    with pytest.raises(AttributeError):
        transport.login_url = "https://elsewhere.example.com"
