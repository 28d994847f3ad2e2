"""
Response models for the Logpush ingestion endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from engine.results import ResolutionBatchResult, SessionBatchResult


class IngestResponse(BaseModel):
    ok: bool
    added_hostnames: List[str] = []
    errors: Optional[List[str]] = None
    error: Optional[str] = None

    def payload(self) -> Dict[str, Any]:
        # errors and error are only present when set
        return self.model_dump(exclude_none=True)


class SessionIngestResponse(IngestResponse):
    pending_session_ids: int = 0
    matched_session_ids: int = 0
    skipped_existing: int = 0

    @classmethod
    def from_result(cls, result: SessionBatchResult) -> "SessionIngestResponse":
        return cls(
            ok=result.ok,
            pending_session_ids=len(result.pending_session_ids),
            matched_session_ids=len(result.matched_session_ids),
            added_hostnames=list(result.added_hostnames),
            skipped_existing=len(result.skipped_hostnames),
            errors=list(result.errors) or None,
            error=result.error,
        )


class GatewayIngestResponse(IngestResponse):
    added: int = 0
    skipped_existing: int = 0
    stored_for_later: int = 0

    @classmethod
    def from_result(cls, result: ResolutionBatchResult) -> "GatewayIngestResponse":
        return cls(
            ok=result.ok,
            added=len(result.added_hostnames),
            added_hostnames=list(result.added_hostnames),
            skipped_existing=len(result.skipped_hostnames),
            stored_for_later=len(result.stored_for_later),
            errors=list(result.errors) or None,
            error=result.error,
        )


class FailureResponse(BaseModel):
    ok: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    store: str
