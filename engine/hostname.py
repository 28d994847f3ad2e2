"""
Hostname validation for SNI values before they reach the allow-list.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re

MAX_HOSTNAME_LENGTH = 253

_HOSTNAME = re.compile(
    r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)*\.?$",
    re.I,
)


def is_valid_hostname(value: str) -> bool:
    if not isinstance(value, str) or len(value) > MAX_HOSTNAME_LENGTH:
        return False
    return bool(_HOSTNAME.match(value)) and not value.startswith("-") and not value.endswith(".")
