"""
CSRF Protection Middleware

Double-submit cookie pattern for the cookie-authenticated admin API:
- a CSRF token is issued as a cookie (and by GET /csrf-token)
- state-changing /api/admin requests must echo it in the X-CSRF-Token header
- login and init are exempt, they run before a session exists
"""
import logging
import secrets
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import SESSION_COOKIE_SECURE

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"

PROTECTED_METHODS = {"POST", "PUT", "PATCH", "DELETE"}
PROTECTED_PREFIX = "/api/admin/"
EXEMPT_PATHS = {"/api/admin/login", "/api/admin/init"}


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def requires_csrf(method: str, path: str) -> bool:
    return (
        method in PROTECTED_METHODS
        and path.startswith(PROTECTED_PREFIX)
        and path.rstrip("/") not in EXEMPT_PATHS
    )


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="strict",
        max_age=86400,
        path="/",
    )


class CSRFMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        csrf_cookie = request.cookies.get(CSRF_COOKIE_NAME)

        if requires_csrf(request.method, request.url.path):
            csrf_header = request.headers.get(CSRF_HEADER_NAME)

            if not csrf_cookie or not csrf_header:
                logger.warning(f"🚫 CSRF: Missing token for {request.method} {request.url.path}")
                return JSONResponse(
                    status_code=403,
                    content={"detail": "CSRF token missing. Please refresh the page and try again."},
                )

            if not secrets.compare_digest(csrf_cookie, csrf_header):
                logger.warning(f"🚫 CSRF: Token mismatch for {request.method} {request.url.path}")
                return JSONResponse(
                    status_code=403,
                    content={"detail": "CSRF token invalid. Please refresh the page and try again."},
                )

        response = await call_next(request)

        already_set = any(
            value.startswith(f"{CSRF_COOKIE_NAME}=") for value in response.headers.getlist("set-cookie")
        )
        if not csrf_cookie and not already_set:
            set_csrf_cookie(response, generate_csrf_token())

        return response
