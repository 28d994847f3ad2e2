"""
Pending correlation state for session ids awaiting their counterpart event.

A session id has at most one pending entry, in one of two shapes:

* ``AWAITING_RESOLUTION``: the Zero Trust error event arrived first. The entry
  is a presence marker stored under ``pending:<session_id>``.
* ``AWAITING_ERROR``: the Gateway event arrived first. The entry holds the SNI
  hostname under ``sni:<session_id>``.

Entries expire after the correlation window; expiry is the only cleanup.
Claiming an entry reads and deletes it in one store operation, so a retried
batch can never match the same entry twice.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from store import client, keys

log = logging.getLogger(__name__)

_MARKER = "1"


class PendingKind(str, Enum):
    AWAITING_RESOLUTION = "awaiting_resolution"
    AWAITING_ERROR = "awaiting_error"

    def key(self, session_id: str) -> str:
        if self is PendingKind.AWAITING_RESOLUTION:
            return keys.pending(session_id)
        return keys.sni(session_id)


class PendingStore:
    def __init__(self, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds

    async def claim(self, kind: PendingKind, session_id: str) -> Optional[str]:
        """Remove and return the ``kind`` entry for ``session_id``, if any."""
        value = await client.redis_getdel(kind.key(session_id))
        if value:
            log.debug("Claimed %s entry for session %s", kind.value, session_id)
            return value
        return None

    async def await_resolution(self, session_id: str) -> None:
        await self._put(PendingKind.AWAITING_RESOLUTION, session_id, _MARKER)

    async def await_error(self, session_id: str, hostname: str) -> None:
        await self._put(PendingKind.AWAITING_ERROR, session_id, hostname)

    async def _put(self, kind: PendingKind, session_id: str, value: str) -> None:
        # callers write only after a failed claim of the opposite kind
        await client.redis_set(kind.key(session_id), value, ttl=self.ttl_seconds)
