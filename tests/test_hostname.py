"""
Test Suite for Hostname Validation

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.hostname import MAX_HOSTNAME_LENGTH, is_valid_hostname


@pytest.mark.parametrize("value", [
    "example.com",
    "EXAMPLE.com",
    "a.b-c.d",
    "localhost",
    "xn--bcher-kva.example",
    "1.2.3.4",
])
def test_valid_hostnames(value):
    assert is_valid_hostname(value)


@pytest.mark.parametrize("value", [
    "",
    "-example.com",
    "example-.com",
    "example.com.",
    "exa mple.com",
    "exa_mple.com",
    "example..com",
    "*.example.com",
    ".example.com",
])
def test_invalid_hostnames(value):
    assert not is_valid_hostname(value)


def test_length_limit():
    label = "a" * 63
    at_limit = ".".join([label, label, label, "a" * 61])
    assert len(at_limit) == MAX_HOSTNAME_LENGTH
    assert is_valid_hostname(at_limit)
    assert not is_valid_hostname(at_limit + "a")


def test_non_string_rejected():
    assert not is_valid_hostname(None)
