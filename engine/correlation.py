"""
Bidirectional correlation of Zero Trust session errors with Gateway SNI logs.

Zero Trust ``CLIENT_TLS_ERROR`` sessions carry no hostname; Gateway network
logs carry the SNI for the same session id. Whichever side arrives first
leaves a pending entry in the correlation store, the other side claims it and
the resolved hostname is appended to the allow-list unless already present.

The allow-list is read once per batch and appends are checked against that
snapshot, updated in memory as the batch appends. Concurrent batches may
still race and append the same value twice; the list tolerates duplicates.
Likewise the two sides of one session arriving in truly concurrent requests
can both write their own pending entry and miss each other until expiry.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from config import CLIENT_TLS_ERROR, PENDING_TTL, Settings
from datasources.base import AllowListConnector
from datasources.exceptions import AllowListError, StoreUnavailable
from engine.hostname import is_valid_hostname
from engine.records import ResolutionRecord, SessionErrorRecord
from engine.results import BatchResult, ResolutionBatchResult, SessionBatchResult
from store.pending import PendingKind, PendingStore

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    failure_sentinel: str = CLIENT_TLS_ERROR
    pending_ttl_seconds: int = PENDING_TTL
    list_item_description: str = CLIENT_TLS_ERROR

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineSettings":
        return cls(
            failure_sentinel=settings.failure_sentinel,
            pending_ttl_seconds=settings.pending_ttl_seconds,
            list_item_description=settings.list_item_description,
        )


class _AllowListBatch:
    """Allow-list snapshot shared by every match within one batch."""

    def __init__(self, allowlist: AllowListConnector, description: str) -> None:
        self._allowlist = allowlist
        self._description = description
        self._existing: Optional[Set[str]] = None

    async def load(self) -> Set[str]:
        if self._existing is None:
            self._existing = set(await self._allowlist.list_values())
        return self._existing

    async def resolve(self, session_id: str, hostname: str, result: BatchResult) -> None:
        existing = await self.load()
        if hostname in existing:
            result.skipped_hostnames.append(hostname)
            return
        try:
            await self._allowlist.append_value(hostname, self._description)
        except AllowListError as exc:
            log.warning("Append of %s for session %s failed: %s", hostname, session_id, exc)
            result.errors.append(f"{session_id} ({hostname}): {exc}")
            return
        existing.add(hostname)
        result.added_hostnames.append(hostname)
        log.info("Added %s to allow-list (session %s)", hostname, session_id)


class CorrelationEngine:
    def __init__(
        self,
        allowlist: AllowListConnector,
        settings: Optional[EngineSettings] = None,
        pending: Optional[PendingStore] = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.allowlist = allowlist
        self.pending = pending or PendingStore(self.settings.pending_ttl_seconds)

    def eligible_session_ids(self, records: Iterable[SessionErrorRecord]) -> List[str]:
        seen: dict[str, None] = {}
        for record in records:
            if record.failure_reason == self.settings.failure_sentinel and record.session_id:
                seen.setdefault(record.session_id, None)
        return list(seen)

    async def ingest_session_errors(self, records: Iterable[SessionErrorRecord]) -> SessionBatchResult:
        result = SessionBatchResult()
        batch = _AllowListBatch(self.allowlist, self.settings.list_item_description)

        try:
            for session_id in self.eligible_session_ids(records):
                hostname = await self.pending.claim(PendingKind.AWAITING_ERROR, session_id)
                if hostname is None:
                    await self.pending.await_resolution(session_id)
                    result.pending_session_ids.append(session_id)
                    continue

                result.matched_session_ids.append(session_id)
                if not is_valid_hostname(hostname):
                    result.errors.append(f"{session_id}: invalid hostname {hostname}")
                    continue
                await batch.resolve(session_id, hostname, result)
        except (StoreUnavailable, AllowListError) as exc:
            log.error("Session batch aborted: %s", exc)
            result.abort(str(exc))

        log.info(
            "Session batch: pending=%d matched=%d added=%d skipped=%d errors=%d%s",
            len(result.pending_session_ids),
            len(result.matched_session_ids),
            len(result.added_hostnames),
            len(result.skipped_hostnames),
            len(result.errors),
            " (aborted)" if result.aborted else "",
        )
        return result

    async def ingest_resolutions(self, records: Iterable[ResolutionRecord]) -> ResolutionBatchResult:
        result = ResolutionBatchResult()
        matches: List[Tuple[str, str]] = []

        try:
            for record in records:
                session_id, hostname = record.session_id, record.hostname
                if not session_id or not hostname:
                    continue
                if not is_valid_hostname(hostname):
                    log.debug("Ignoring invalid SNI %r for session %s", hostname, session_id)
                    continue

                if await self.pending.claim(PendingKind.AWAITING_RESOLUTION, session_id) is not None:
                    matches.append((session_id, hostname))
                    result.matched_session_ids.append(session_id)
                else:
                    await self.pending.await_error(session_id, hostname)
                    result.stored_for_later.append(session_id)
        except StoreUnavailable as exc:
            # matches already claimed are still resolved below; their markers are gone
            log.error("Resolution batch aborted: %s", exc)
            result.abort(str(exc))

        if matches:
            await self._resolve_all(matches, result)

        log.info(
            "Resolution batch: matched=%d added=%d skipped=%d stored_for_later=%d errors=%d%s",
            len(result.matched_session_ids),
            len(result.added_hostnames),
            len(result.skipped_hostnames),
            len(result.stored_for_later),
            len(result.errors),
            " (aborted)" if result.aborted else "",
        )
        return result

    async def _resolve_all(self, matches: List[Tuple[str, str]], result: ResolutionBatchResult) -> None:
        batch = _AllowListBatch(self.allowlist, self.settings.list_item_description)
        try:
            await batch.load()
        except AllowListError as exc:
            log.error("Allow-list read failed, %d matches unresolved: %s", len(matches), exc)
            if not result.aborted:
                result.abort(str(exc))
            return

        for session_id, hostname in matches:
            await batch.resolve(session_id, hostname, result)
