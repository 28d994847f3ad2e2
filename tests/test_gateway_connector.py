"""
Test Suite for the Gateway List Connector

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json

import httpx
import pytest

from connectors.gateway import GatewayListConnector
from datasources.data_config import AllowListSettings
from datasources.exceptions import AllowListRequestFailed, AllowListUnavailable


def _connector(handler):
    return GatewayListConnector(
        base_url="https://api.example.test/client/v4/",
        account_id="acc",
        list_id="lst",
        api_token="tok",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_list_values_flattens_and_trims():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(200, json={
            "success": True,
            "result": [
                [{"value": " a.example "}, {"value": "b.example"}],
                {"value": "c.example"},
                {"value": ""},
                {"description": "no value"},
            ],
        })

    values = await _connector(handler).list_values()
    assert values == {"a.example", "b.example", "c.example"}
    assert seen["url"] == "https://api.example.test/client/v4/accounts/acc/gateway/lists/lst/items"
    assert seen["auth"] == "Bearer tok"


@pytest.mark.asyncio
async def test_list_values_empty_result():
    values = await _connector(lambda r: httpx.Response(200, json={"result": None})).list_values()
    assert values == set()


@pytest.mark.asyncio
async def test_list_values_api_error_message():
    def handler(request):
        return httpx.Response(403, json={"errors": [{"code": 10000, "message": "Authentication error"}]})

    with pytest.raises(AllowListRequestFailed, match="List items: Authentication error"):
        await _connector(handler).list_values()


@pytest.mark.asyncio
async def test_list_values_falls_back_to_reason_phrase():
    with pytest.raises(AllowListRequestFailed, match="List items: Bad Gateway"):
        await _connector(lambda r: httpx.Response(502, text="<html>")).list_values()


@pytest.mark.asyncio
async def test_list_values_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(AllowListUnavailable):
        await _connector(handler).list_values()


@pytest.mark.asyncio
async def test_append_value_sends_patch():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "result": {}})

    await _connector(handler).append_value("example.com", "CLIENT_TLS_ERROR")
    assert seen["method"] == "PATCH"
    assert seen["url"] == "https://api.example.test/client/v4/accounts/acc/gateway/lists/lst"
    assert seen["body"] == {"append": [{"value": "example.com", "description": "CLIENT_TLS_ERROR"}]}


@pytest.mark.asyncio
async def test_append_value_error():
    def handler(request):
        return httpx.Response(400, json={"errors": [{"message": "item already exists"}]})

    with pytest.raises(AllowListRequestFailed, match="^item already exists$"):
        await _connector(handler).append_value("example.com", "x")


def test_from_settings():
    settings = AllowListSettings(
        cloudflare_api_base="https://api.example.test/v4/",
        cloudflare_account_id=" acc ",
        cloudflare_list_id="lst",
        cloudflare_api_token="tok",
        allowlist_timeout=3,
    )
    connector = GatewayListConnector.from_settings(settings)
    assert connector.list_url == "https://api.example.test/v4/accounts/acc/gateway/lists/lst"
    assert connector.timeout == 3


def test_settings_reject_non_positive_timeout():
    with pytest.raises(ValueError):
        AllowListSettings(allowlist_timeout=0)
