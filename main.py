"""
Entry point for the dni-list Logpush endpoint.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routes import router
from api.routes.common import close_engine
from api.security import LogpushSecretMiddleware
from config import settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log.info(
        "Correlation window %ds, sentinel %s",
        settings.pending_ttl_seconds,
        settings.failure_sentinel,
    )
    try:
        yield
    finally:
        await close_engine()


app = FastAPI(
    title="dni-list",
    description="Correlates Zero Trust TLS errors with Gateway SNI logs and maintains a do-not-inspect list.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(LogpushSecretMiddleware)
app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
        access_log=True,
    )
