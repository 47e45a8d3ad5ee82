from __future__ import annotations

import secrets

from fastapi import Form, HTTPException, Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from student_registry.core.settings import settings

CSRF_SESSION_KEY = "csrf_token"


def get_csrf_token(request: Request) -> str:
    """Anti-forgery token bound to the session; created on first use."""
    token = request.session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        request.session[CSRF_SESSION_KEY] = token
    return token


def verify_csrf(request: Request, csrf_token: str | None = Form(None)) -> None:
    """Dependency for every mutating form POST."""
    if not settings.CSRF_ENABLED:
        return
    expected = request.session.get(CSRF_SESSION_KEY)
    if not expected or not csrf_token or not secrets.compare_digest(
        expected, csrf_token
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Invalid anti-forgery token"
        )


CSP_DIRECTIVES: dict[str, str] = {
    "default-src": "'self'",
    "script-src": "'self'",
    "img-src": "'self' data:",
    "font-src": "'self' data:",
    "connect-src": "'self'",
    "object-src": "'none'",
    "base-uri": "'self'",
    "frame-ancestors": "'none'",
    "form-action": "'self'",
}


def content_security_policy(nonce: str) -> str:
    directives = {**CSP_DIRECTIVES, "style-src": f"'self' 'nonce-{nonce}'"}
    return "; ".join(f"{name} {value}" for name, value in directives.items())


class CSPMiddleware(BaseHTTPMiddleware):
    """Per-request nonce in ``request.state.csp_nonce`` plus the CSP header."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request, call_next):
        nonce = secrets.token_urlsafe(16)
        request.state.csp_nonce = nonce

        response: Response = await call_next(request)
        response.headers["Content-Security-Policy"] = content_security_policy(nonce)
        return response
