"""
Logpush destinations for the two correlated datasets.

``POST /`` receives zero_trust_network_sessions batches and ``POST /gateway``
receives gateway_network batches. Both respond 200 when every session was
handled, 207 when some sessions failed, and 200 with ``ok`` false when a
dependency aborted the batch.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.responses import GatewayIngestResponse, SessionIngestResponse
from api.routes.common import get_engine, read_records
from api.routes.exception import handle_exceptions
from engine.correlation import CorrelationEngine
from engine.records import ResolutionRecord, SessionErrorRecord, parse_records

router = APIRouter(tags=["Logpush"])

@router.post("/", response_model=SessionIngestResponse, responses={207: {"model": SessionIngestResponse}})
@handle_exceptions
async def ingest_sessions(request: Request, engine: CorrelationEngine = Depends(get_engine)) -> JSONResponse:
    records = parse_records(await read_records(request), SessionErrorRecord)
    result = await engine.ingest_session_errors(records)
    body = SessionIngestResponse.from_result(result)
    return JSONResponse(status_code=result.status_code, content=body.payload())

@router.post("/gateway", response_model=GatewayIngestResponse, responses={207: {"model": GatewayIngestResponse}})
@handle_exceptions
async def ingest_gateway(request: Request, engine: CorrelationEngine = Depends(get_engine)) -> JSONResponse:
    records = parse_records(await read_records(request), ResolutionRecord)
    result = await engine.ingest_resolutions(records)
    body = GatewayIngestResponse.from_result(result)
    return JSONResponse(status_code=result.status_code, content=body.payload())
