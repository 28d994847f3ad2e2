"""
Per-batch aggregates produced by the correlation engine.

A batch either completes (possibly with per-session errors, reported as a
partial success) or is aborted by a dependency failure, in which case
``error`` carries the triggering message and the counters hold whatever was
gathered before the abort.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

HTTP_OK = 200
HTTP_MULTI_STATUS = 207


@dataclass
class BatchResult:
    added_hostnames: List[str] = field(default_factory=list)
    skipped_hostnames: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def ok(self) -> bool:
        return not self.aborted and not self.errors

    @property
    def status_code(self) -> int:
        # aborted batches are still acknowledged so the sender does not retry
        if self.aborted or not self.errors:
            return HTTP_OK
        return HTTP_MULTI_STATUS

    def abort(self, message: str) -> None:
        self.error = message


@dataclass
class SessionBatchResult(BatchResult):
    pending_session_ids: List[str] = field(default_factory=list)
    matched_session_ids: List[str] = field(default_factory=list)


@dataclass
class ResolutionBatchResult(BatchResult):
    matched_session_ids: List[str] = field(default_factory=list)
    stored_for_later: List[str] = field(default_factory=list)
