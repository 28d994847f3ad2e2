"""
Test Suite for Store Keys

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from store import keys
from store.pending import PendingKind


def test_keys_format():
    assert keys.pending("s1") == "pending:s1"
    assert keys.sni("s1") == "sni:s1"


def test_pending_kind_keys():
    assert PendingKind.AWAITING_RESOLUTION.key("abc") == "pending:abc"
    assert PendingKind.AWAITING_ERROR.key("abc") == "sni:abc"
