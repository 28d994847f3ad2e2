# connectors/gateway.py

import logging
from typing import Any, Dict, Iterable, Optional, Set

import httpx

from datasources.base import AllowListConnector
from datasources.data_config import AllowListSettings
from datasources.exceptions import AllowListRequestFailed, AllowListUnavailable

log = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        errors = body.get("errors") or []
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return str(errors[0]["message"])
    return resp.reason_phrase or f"HTTP {resp.status_code}"


def _iter_items(result: Any) -> Iterable[Dict[str, Any]]:
    # the items endpoint returns either a flat list or a list of pages
    for entry in result or []:
        if isinstance(entry, list):
            yield from (item for item in entry if isinstance(item, dict))
        elif isinstance(entry, dict):
            yield entry


class GatewayListConnector(AllowListConnector):
    """Cloudflare Zero Trust Gateway list, used as the do-not-inspect allow-list."""

    def __init__(
        self,
        base_url: str,
        account_id: str,
        list_id: str,
        api_token: str,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, timeout=timeout, headers=headers)
        self.account_id = account_id
        self.list_id = list_id
        self.api_token = api_token
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: AllowListSettings) -> "GatewayListConnector":
        return cls(
            base_url=settings.cloudflare_api_base,
            account_id=settings.cloudflare_account_id,
            list_id=settings.cloudflare_list_id,
            api_token=settings.cloudflare_api_token,
            timeout=settings.allowlist_timeout,
        )

    @property
    def list_url(self) -> str:
        return f"{self.base_url}/accounts/{self.account_id}/gateway/lists/{self.list_id}"

    def _headers(self) -> Dict[str, str]:
        return {**self.headers, "Authorization": f"Bearer {self.api_token}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def list_values(self) -> Set[str]:
        url = f"{self.list_url}/items"
        try:
            async with self._client() as client:
                resp = await client.get(url, headers=self._headers())
        except httpx.TimeoutException as e:
            raise AllowListUnavailable("List items: request timed out") from e
        except httpx.RequestError as e:
            raise AllowListUnavailable(f"List items: cannot reach {url}") from e

        if resp.is_error:
            raise AllowListRequestFailed(f"List items: {_error_message(resp)}")

        try:
            data = resp.json()
        except ValueError as e:
            raise AllowListRequestFailed("List items: response is not JSON") from e
        if not isinstance(data, dict):
            raise AllowListRequestFailed("List items: unexpected response shape")

        values: Set[str] = set()
        for item in _iter_items(data.get("result")):
            value = str(item.get("value") or "").strip()
            if value:
                values.add(value)
        log.debug("Allow-list %s holds %d values", self.list_id, len(values))
        return values

    async def append_value(self, value: str, description: str) -> None:
        payload = {"append": [{"value": value, "description": description}]}
        try:
            async with self._client() as client:
                resp = await client.patch(self.list_url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise AllowListUnavailable("request timed out") from e
        except httpx.RequestError as e:
            raise AllowListUnavailable(f"cannot reach {self.list_url}") from e

        if resp.is_error:
            raise AllowListRequestFailed(_error_message(resp))
