"""Shared admin key check for the HTTP admin routers and the MCP mount."""

from __future__ import annotations

import logging
import secrets
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


def admin_key_matches(settings: Settings, provided: Optional[str]) -> bool:
    """True when no key is configured or ``provided`` equals the configured key."""

    expected = settings.admin_api_key
    if not expected:
        return True
    if provided is None:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


class AdminKeyMiddleware(BaseHTTPMiddleware):
    """Refuse every request that lacks the admin key when one is configured."""

    def __init__(self, app, settings_provider: Callable[[], Settings] = get_settings) -> None:
        super().__init__(app)
        self._settings_provider = settings_provider

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not admin_key_matches(self._settings_provider(), request.headers.get(API_KEY_HEADER)):
            logger.warning("Rejected %s %s without a valid API key", request.method, request.url.path)
            return JSONResponse({"detail": "Invalid or missing API key"}, status_code=401)
        return await call_next(request)
