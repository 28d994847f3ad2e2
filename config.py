"""
Constants and configuration for dni-list.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
PENDING_TTL: int = int(os.getenv("PENDING_TTL", "300"))

# Zero Trust sessions closed with this reason are eligible for correlation
CLIENT_TLS_ERROR = "CLIENT_TLS_ERROR"

LOGPUSH_SECRET_HEADER = "X-Logpush-Secret"

DNILIST_LOGPUSH_SECRET = os.getenv("DNILIST_LOGPUSH_SECRET", "")
DNILIST_FAILURE_SENTINEL = os.getenv("DNILIST_FAILURE_SENTINEL", CLIENT_TLS_ERROR)
DNILIST_LIST_ITEM_DESCRIPTION = os.getenv("DNILIST_LIST_ITEM_DESCRIPTION", CLIENT_TLS_ERROR)

BANNER = (
    "cf-dni-list Logpush endpoint\n"
    "  POST / = zero_trust_network_sessions\n"
    "  POST /gateway = gateway_network\n"
)


class Settings(BaseSettings):
    logpush_secret: str = DNILIST_LOGPUSH_SECRET

    # correlation window; both pending key shapes expire after this many seconds
    pending_ttl_seconds: int = PENDING_TTL
    failure_sentinel: str = DNILIST_FAILURE_SENTINEL
    list_item_description: str = DNILIST_LIST_ITEM_DESCRIPTION

    # store
    # single-process dict for local runs; must stay off when more than one worker shares the window
    store_fallback_enabled: bool = False
    store_redis_retry_cooldown_seconds: float = 10.0
    store_redis_op_timeout_seconds: float = 0.5
    store_fallback_max_items: int = 10_000

    host: str = "0.0.0.0"
    port: int = 8787

    @field_validator("pending_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"pending_ttl_seconds must be positive, got {v}")
        return v

    model_config = {
        "env_prefix": "DNILIST_",
        "extra": "ignore",
    }


settings = Settings()
