"""
Correlation store key layout.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

PENDING_PREFIX = "pending"
SNI_PREFIX = "sni"


def pending(session_id: str) -> str:
    return f"{PENDING_PREFIX}:{session_id}"


def sni(session_id: str) -> str:
    return f"{SNI_PREFIX}:{session_id}"
