"""
Typed views over the two Logpush datasets joined by the correlation engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

log = logging.getLogger(__name__)

R = TypeVar("R", bound="LogRecord")


class LogRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    session_id: str = Field(
        default="",
        validation_alias=AliasChoices("SessionID", "sessionID", "session_id"),
    )

    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v


class SessionErrorRecord(LogRecord):
    """zero_trust_network_sessions entry."""

    failure_reason: str = Field(
        default="",
        validation_alias=AliasChoices("ConnectionCloseReason", "failureReason", "failure_reason"),
    )


class ResolutionRecord(LogRecord):
    """gateway_network entry."""

    hostname: str = Field(
        default="",
        validation_alias=AliasChoices("SNI", "hostname"),
    )


def parse_records(raw: Iterable[Dict[str, Any]], model: Type[R]) -> List[R]:
    out: List[R] = []
    for item in raw:
        try:
            out.append(model.model_validate(item))
        except ValidationError as exc:
            log.debug("Skipping %s record: %s", model.__name__, exc.errors()[0].get("msg"))
    return out
