from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from app.bizdash.core.config import settings
from app.bizdash.core.logging import log_json
from app.bizdash.core.security import verify_session_token

logger = logging.getLogger("bizdash.auth_gate")


def is_protected_path(path: str, protected_paths: Iterable[str]) -> bool:
    for prefix in protected_paths:
        normalized = prefix.rstrip("/") or "/"
        if path == normalized or path.startswith(f"{normalized}/"):
            return True
    return False


def extract_session_token(request: Request, cookie_name: str) -> str | None:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Redirects unauthenticated requests for protected paths to the login page.

    The check is stateless: every request is judged on the token it carries.
    Valid claims are exposed on ``request.state.session`` for the handler.
    """

    def __init__(
        self,
        app: ASGIApp,
        protected_paths: Iterable[str] | None = None,
        login_path: str | None = None,
        cookie_name: str | None = None,
    ) -> None:
        super().__init__(app)
        self.protected_paths = tuple(protected_paths if protected_paths is not None else settings.PROTECTED_PATHS)
        self.login_path = login_path or settings.LOGIN_PATH
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME

    async def dispatch(self, request: Request, call_next):
        request.state.session = None
        if not is_protected_path(request.url.path, self.protected_paths):
            return await call_next(request)

        validation = verify_session_token(extract_session_token(request, self.cookie_name))
        if not validation.valid:
            request.state.auth_gate_reason = validation.reason
            log_json(
                logger,
                {
                    "event": "auth_gate_redirect",
                    "trace_id": getattr(request.state, "trace_id", ""),
                    "path": request.url.path,
                    "reason": validation.reason,
                },
            )
            return RedirectResponse(url=self._login_url(request), status_code=307)

        request.state.session = validation.claims
        return await call_next(request)

    def _login_url(self, request: Request) -> str:
        return f"{self.login_path}?{urlencode({'callbackUrl': request.url.path})}"
