"""
Unauthenticated banner and health check routes.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from api.responses import HealthResponse
from api.routes.exception import handle_exceptions
from config import BANNER
from store.client import get_redis, is_using_fallback

router = APIRouter(tags=["Health"])

@router.get("/", response_class=PlainTextResponse)
async def banner() -> str:
    return BANNER

@router.get("/health", response_model=HealthResponse)
@handle_exceptions
async def health() -> HealthResponse:
    await get_redis()
    return HealthResponse(
        status="ok",
        store="fallback" if is_using_fallback() else "redis",
    )
