"""
Shared dependencies for the Logpush route modules.

Builds the correlation engine once from settings, reads and decodes request
bodies, and closes outbound resources on shutdown. Keeps the individual
route files thin.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request, status

from config import settings
from connectors.gateway import GatewayListConnector
from datasources.data_config import AllowListSettings
from engine.correlation import CorrelationEngine, EngineSettings
from engine.decoder import BatchDecodeError, decode_batch
from store.client import close_redis

log = logging.getLogger(__name__)

_engine: Optional[CorrelationEngine] = None


def get_engine() -> CorrelationEngine:
    global _engine
    if _engine is None:
        connector = GatewayListConnector.from_settings(AllowListSettings())
        _engine = CorrelationEngine(connector, EngineSettings.from_settings(settings))
    return _engine


async def close_engine() -> None:
    global _engine
    engine, _engine = _engine, None
    if engine is not None:
        await engine.allowlist.aclose()
    await close_redis()


async def read_records(request: Request) -> List[Dict[str, Any]]:
    body = await request.body()
    try:
        return decode_batch(body, request.headers.get("content-encoding"))
    except BatchDecodeError as exc:
        log.error("read body failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Bad Request") from exc
