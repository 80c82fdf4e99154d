from __future__ import annotations

import argparse
import asyncio
import getpass
import json
import sys
from typing import Any, Sequence

from .domain.constants import ExpirationPolicy
from .domain.exceptions import DecodeError, InvalidTokenError
from .domain.value_objects import Credentials, expires_at
from .env import settings_from_env
from .settings import SessionSettings
from .integrations.common.session_factory import create_session_manager, create_transport


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwt-session",
        description="Inspect session tokens and log in against the configured endpoint",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser(
        "inspect",
        help="Decode a token and report whether the session loader would accept it.",
    )
    inspect.add_argument("token", help="Compact JWT string")
    inspect.add_argument(
        "--policy",
        choices=[p.value for p in ExpirationPolicy],
        default=ExpirationPolicy.LITERAL.value,
        help="Expiration policy to evaluate the token under.",
    )

    login = sub.add_parser(
        "login",
        help="Exchange credentials for a token via JWT_SESSION_LOGIN_URL.",
    )
    login.add_argument("--username", "-u", required=True)
    login.add_argument(
        "--password",
        "-p",
        help="Password (prompted for when omitted).",
    )

    return parser.parse_args(args=argv)


async def _inspect(args: argparse.Namespace) -> dict[str, Any]:
    # nothing is sent over the wire, so no login URL is needed
    settings = SessionSettings(login_url="", expiration_policy=ExpirationPolicy(args.policy))
    manager = create_session_manager(settings)
    manager.store.write(args.token)

    try:
        claims = await manager.load()
    except InvalidTokenError as exc:
        cause = exc.__cause__
        claims = None
        if not isinstance(cause, DecodeError):
            claims = manager.codec.decode(args.token)
        return {
            "valid": False,
            "policy": settings.expiration_policy.value,
            "error": str(cause or exc),
            "claims": dict(claims) if claims is not None else None,
        }

    return {
        "valid": True,
        "policy": settings.expiration_policy.value,
        "expires_at": expires_at(claims),
        "claims": dict(claims),
    }


async def _login(args: argparse.Namespace) -> dict[str, Any]:
    settings = settings_from_env()
    password = args.password if args.password is not None else getpass.getpass("Password: ")

    async with create_transport(settings) as transport:
        manager = create_session_manager(settings, transport=transport)
        claims = await manager.create(Credentials(args.username, password))
        token = manager.store.read()

    return {"claims": dict(claims), "token": token}


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        if args.command == "inspect":
            summary = asyncio.run(_inspect(args))
        else:
            summary = asyncio.run(_login(args))
        json.dump({"ok": True, **summary}, sys.stdout, indent=2, default=str)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
