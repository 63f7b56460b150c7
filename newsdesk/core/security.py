from __future__ import annotations

import base64
import binascii
import secrets
from typing import Optional, Protocol

from loguru import logger
from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from newsdesk.core.config import Settings

class CredentialChecker(Protocol):
    def check(self, username: str, password: str) -> bool: ...

class StaticCredentialChecker:
    """Single configured username/password pair."""

    def __init__(self, username: str, password: str):
        self._username = username.encode("utf-8")
        self._password = password.encode("utf-8")

    @classmethod
    def from_settings(cls, settings: Settings) -> "StaticCredentialChecker":
        return cls(settings.basic_user, settings.basic_pass.get_secret_value())

    def check(self, username: str, password: str) -> bool:
        # Evaluate both comparisons so timing does not reveal which one failed
        user_ok = secrets.compare_digest(username.encode("utf-8"), self._username)
        pass_ok = secrets.compare_digest(password.encode("utf-8"), self._password)
        return user_ok and pass_ok

def parse_basic_authorization(header: str | None) -> Optional[tuple[str, str]]:
    if not header:
        return None
    scheme, _, param = header.strip().partition(" ")
    param = param.strip()
    if scheme.lower() != "basic" or not param:
        return None
    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password

def is_under_prefix(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")

class BasicAuthGate:
    """
    Requires HTTP Basic credentials for every request below ``prefix``.

    Requests that pass are forwarded untouched. Everything else gets the same
    401 challenge whatever the cause.
    """

    def __init__(self, app: ASGIApp, checker: CredentialChecker, prefix: str = "/admin", realm: str = "Secure Area"):
        self.app = app
        self.checker = checker
        self.prefix = prefix
        self.realm = realm

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not is_under_prefix(scope["path"], self.prefix):
            await self.app(scope, receive, send)
            return

        credentials = parse_basic_authorization(Headers(scope=scope).get("authorization"))
        if credentials is not None and self.checker.check(*credentials):
            await self.app(scope, receive, send)
            return

        logger.info(f"Rejected unauthenticated request to {scope['path']}")
        response = PlainTextResponse(
            "Authentication required",
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
        )
        await response(scope, receive, send)
