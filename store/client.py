"""
Client code for Redis access, with in-memory fallback if Redis is unavailable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional

from config import REDIS_URL, settings
from datasources.exceptions import StoreUnavailable

log = logging.getLogger(__name__)

_redis_client: Any = None
# key -> (value, monotonic expiry or None)
_fallback: dict[str, tuple[str, Optional[float]]] = {}
_using_fallback = False
_init_lock = asyncio.Lock()
_retry_after_monotonic: float = 0.0
_clock = time.monotonic

_MAX_FALLBACK_SIZE = int(settings.store_fallback_max_items)
_REDIS_RETRY_COOLDOWN_SECONDS = float(settings.store_redis_retry_cooldown_seconds)
_REDIS_OP_TIMEOUT_SECONDS = float(settings.store_redis_op_timeout_seconds)


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _retry_after_monotonic

    if _redis_client is not None:
        return _redis_client
    if time.monotonic() < _retry_after_monotonic:
        return _unavailable("Redis unavailable (cooling down)")

    async with _init_lock:
        if _redis_client is not None:
            return _redis_client
        if time.monotonic() < _retry_after_monotonic:
            return _unavailable("Redis unavailable (cooling down)")
        try:
            import redis.asyncio as aioredis

            client = aioredis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=0.5,
                socket_timeout=0.5,
            )
            await asyncio.wait_for(client.ping(), timeout=0.5)
            _redis_client = client
            _retry_after_monotonic = 0.0
            _using_fallback = False
            log.info("Redis connected: %s", REDIS_URL)
            return _redis_client
        except Exception as exc:
            _retry_after_monotonic = time.monotonic() + max(0.0, _REDIS_RETRY_COOLDOWN_SECONDS)
            return _unavailable(f"Redis unavailable ({exc})")


def _unavailable(reason: str) -> None:
    global _using_fallback
    if not settings.store_fallback_enabled:
        raise StoreUnavailable(reason)
    if not _using_fallback:
        log.warning("%s, using in-memory fallback", reason)
        _using_fallback = True
    return None


def _fallback_get(key: str) -> Optional[str]:
    entry = _fallback.get(key)
    if entry is None:
        return None
    value, expires_at = entry
    if expires_at is not None and _clock() >= expires_at:
        _fallback.pop(key, None)
        return None
    return value


def _fallback_set(key: str, value: str, ttl: Optional[int]) -> None:
    if key not in _fallback and len(_fallback) >= _MAX_FALLBACK_SIZE:
        _evict_expired()
        if len(_fallback) >= _MAX_FALLBACK_SIZE:
            raise StoreUnavailable(f"in-memory store full ({_MAX_FALLBACK_SIZE} keys), cannot write {key}")
    expires_at = _clock() + ttl if ttl else None
    _fallback[key] = (value, expires_at)


def _evict_expired() -> None:
    now = _clock()
    for key in [k for k, (_, exp) in _fallback.items() if exp is not None and now >= exp]:
        _fallback.pop(key, None)


async def redis_get(key: str) -> Optional[str]:
    client = await get_redis()
    if client is None:
        return _fallback_get(key)
    try:
        return await asyncio.wait_for(client.get(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        raise StoreUnavailable(f"Redis GET {key} failed: {exc}") from exc


async def redis_set(key: str, value: str, ttl: Optional[int] = None) -> None:
    client = await get_redis()
    if client is None:
        _fallback_set(key, value, ttl)
        return
    try:
        if ttl:
            await asyncio.wait_for(client.setex(key, ttl, value), timeout=_REDIS_OP_TIMEOUT_SECONDS)
        else:
            await asyncio.wait_for(client.set(key, value), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        raise StoreUnavailable(f"Redis SET {key} failed: {exc}") from exc


async def redis_getdel(key: str) -> Optional[str]:
    """Read and remove ``key`` in one step."""
    client = await get_redis()
    if client is None:
        value = _fallback_get(key)
        _fallback.pop(key, None)
        return value
    try:
        return await asyncio.wait_for(client.getdel(key), timeout=_REDIS_OP_TIMEOUT_SECONDS)
    except Exception as exc:
        raise StoreUnavailable(f"Redis GETDEL {key} failed: {exc}") from exc


async def close_redis() -> None:
    global _redis_client
    client, _redis_client = _redis_client, None
    if client is not None:
        await client.aclose()


def is_using_fallback() -> bool:
    return _using_fallback
