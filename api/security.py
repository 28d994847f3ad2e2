"""
Logpush shared-secret authentication.
"""

from __future__ import annotations

import logging
from hmac import compare_digest

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from config import LOGPUSH_SECRET_HEADER, settings

log = logging.getLogger(__name__)


def authenticate_logpush_request(request: Request) -> None:
    expected = settings.logpush_secret
    if not expected:
        log.error("Logpush secret is not configured; rejecting %s %s", request.method, request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    provided = request.headers.get(LOGPUSH_SECRET_HEADER, "")
    if not provided or not compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def _requires_logpush_auth(method: str) -> bool:
    return method.upper() not in {"GET", "HEAD", "OPTIONS"}


class LogpushSecretMiddleware:
    def __init__(self, app) -> None:
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        if not _requires_logpush_auth(str(scope.get("method", ""))):
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        try:
            authenticate_logpush_request(request)
        except HTTPException as exc:
            response = JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
