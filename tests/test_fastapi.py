# tests/test_fastapi.py
import jwt
import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from jwt_session.domain.constants import ExpirationPolicy
from jwt_session.domain.exceptions import AuthenticationFailedError, StorageError
from jwt_session.domain.value_objects import Credentials
from jwt_session.integrations.fastapi import FastAPISession, create_fastapi_session
from jwt_session.settings import SessionSettings

SECRET = "a-test-secret-that-is-long-enough-for-hs256"


class StubTransport:
    def __init__(self):
        self.tokens = {"alice": jwt.encode({"sub": "alice", "exp": 1}, SECRET, algorithm="HS256")}

    async def login(self, credentials: Credentials) -> str:
        token = self.tokens.get(credentials.username)
        if token is None:
            raise AuthenticationFailedError("Login rejected", status_code=401, detail="unknown user")
        return token


def build_app(policy: ExpirationPolicy = ExpirationPolicy.LITERAL) -> FastAPI:
    settings = SessionSettings(login_url="http://auth.test/api/login", expiration_policy=policy)
    fastapi_session = FastAPISession(settings=settings, transport=StubTransport())

    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test", max_age=None)

    @app.post("/login")
    async def login(request: Request, username: str, password: str):
        try:
            claims = await fastapi_session.manager(request).create(Credentials(username, password))
        except AuthenticationFailedError as exc:
            return {"ok": False, "detail": exc.detail}
        return {"ok": True, "claims": dict(claims)}

    @app.post("/logout")
    async def logout(request: Request):
        return {"ok": await fastapi_session.manager(request).destroy()}

    @app.get("/me")
    async def me(claims=Depends(fastapi_session.get_current_session)):
        return dict(claims)

    @app.get("/maybe")
    async def maybe(claims=Depends(fastapi_session.get_optional_session)):
        return {"claims": dict(claims) if claims is not None else None}

    return app


def test_current_session_requires_login():
    client = TestClient(build_app())

    resp = client.get("/me")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "No session"}

    assert client.get("/maybe").json() == {"claims": None}


def test_login_me_logout_flow():
    client = TestClient(build_app())

    resp = client.post("/login", params={"username": "alice", "password": "pw"})
    assert resp.json() == {"ok": True, "claims": {"sub": "alice", "exp": 1}}

    assert client.get("/me").json() == {"sub": "alice", "exp": 1}
    assert client.get("/maybe").json() == {"claims": {"sub": "alice", "exp": 1}}

    assert client.post("/logout").json() == {"ok": True}
    assert client.get("/me").status_code == 401


def test_failed_login_reports_detail():
    client = TestClient(build_app())

    resp = client.post("/login", params={"username": "mallory", "password": "pw"})

    assert resp.json() == {"ok": False, "detail": "unknown user"}
    assert client.get("/me").status_code == 401


def test_invalid_session_under_reject_expired_policy():
    client = TestClient(build_app(ExpirationPolicy.REJECT_EXPIRED))

    client.post("/login", params={"username": "alice", "password": "pw"})
    resp = client.get("/me")

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid session"}
    assert client.get("/maybe").json() == {"claims": None}


def test_manager_requires_session_middleware():
    settings = SessionSettings(login_url="http://auth.test/api/login")
    fastapi_session = FastAPISession(settings=settings, transport=StubTransport())
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})

    with pytest.raises(StorageError):
        fastapi_session.manager(request)


def test_create_fastapi_session_uses_settings():
    settings = SessionSettings(login_url="http://auth.test/api/login", storage_key="custom")
    fastapi_session = create_fastapi_session(settings)

    assert fastapi_session.settings is settings
    assert fastapi_session.transport.login_url == "http://auth.test/api/login"
