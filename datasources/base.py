"""
Base connector for the external allow-list service

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set


class BaseConnector(ABC):
    def __init__(self, base_url: str, timeout: float = 10.0, headers: Optional[Dict[str, str]] = None):
        self.base_url = str(base_url).rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}

    def _headers(self) -> Dict[str, str]:
        """Basic header set applied to every outbound request."""
        return dict(self.headers)

    async def aclose(self) -> None:
        return None


class AllowListConnector(BaseConnector):
    """Named set of hostnames that this service only ever reads and appends to.

    ``append_value`` is not required to be idempotent; callers check
    membership against a ``list_values`` snapshot first.
    """

    @abstractmethod
    async def list_values(self) -> Set[str]: ...

    @abstractmethod
    async def append_value(self, value: str, description: str) -> None: ...
