"""API middleware for authentication."""

import logging
import secrets
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from docvault.core.config import DOCVAULT_ALLOW_NO_AUTH, DOCVAULT_API_KEY

logger = logging.getLogger(__name__)

# Paths that don't require authentication
PUBLIC_PATHS = {"/api/v1/health", "/docs", "/openapi.json", "/redoc"}


async def api_key_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Middleware to validate API key authentication.

    Checks the X-API-Key header (or a Bearer token) against DOCVAULT_API_KEY.
    Public paths are exempt from authentication.
    """
    path = request.url.path

    # Allow public paths without authentication
    if path in PUBLIC_PATHS or path.startswith("/docs") or path.startswith("/redoc"):
        response = await call_next(request)
        return response

    # If no API key is configured, fail closed unless explicitly allowed
    if not DOCVAULT_API_KEY:
        if not DOCVAULT_ALLOW_NO_AUTH:
            logger.error("DOCVAULT_API_KEY not set - refusing unauthenticated access")
            return JSONResponse(
                status_code=503,
                content={"detail": "API key not configured"},
            )
        response = await call_next(request)
        return response

    api_key = request.headers.get("X-API-Key")
    authorization = request.headers.get("Authorization", "")
    if not api_key and authorization.startswith("Bearer "):
        api_key = authorization[7:]

    if not api_key:
        return JSONResponse(
            status_code=401,
            content={"detail": "Missing X-API-Key header"},
        )

    if not secrets.compare_digest(api_key, DOCVAULT_API_KEY):
        return JSONResponse(
            status_code=401,
            content={"detail": "Invalid API key"},
        )

    response = await call_next(request)
    return response
