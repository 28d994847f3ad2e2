"""
Test Suite for Logpush Record Parsing

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.records import ResolutionRecord, SessionErrorRecord, parse_records


def test_logpush_field_names():
    [rec] = parse_records([{"SessionID": " s1 ", "ConnectionCloseReason": "CLIENT_TLS_ERROR"}], SessionErrorRecord)
    assert rec.session_id == "s1"
    assert rec.failure_reason == "CLIENT_TLS_ERROR"

    [gw] = parse_records([{"SessionID": "s1", "SNI": "example.com ", "Action": "allow"}], ResolutionRecord)
    assert gw.hostname == "example.com"


def test_short_field_names():
    [rec] = parse_records([{"sessionID": "s1", "failureReason": "X"}], SessionErrorRecord)
    assert (rec.session_id, rec.failure_reason) == ("s1", "X")
    [gw] = parse_records([{"sessionID": "s1", "hostname": "example.com"}], ResolutionRecord)
    assert gw.hostname == "example.com"


def test_missing_and_null_fields_default_empty():
    [rec] = parse_records([{"SessionID": None}], ResolutionRecord)
    assert rec.session_id == ""
    assert rec.hostname == ""


def test_wrong_types_skipped():
    records = parse_records(
        [{"SessionID": 42, "SNI": "example.com"}, {"SessionID": "ok", "SNI": "example.com"}],
        ResolutionRecord,
    )
    assert [r.session_id for r in records] == ["ok"]
