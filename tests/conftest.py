import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from store import client as store_client

REAL_GET_REDIS = store_client.get_redis


class FakeAllowList:
    """In-memory stand-in for the Gateway list connector."""

    def __init__(self, values=(), fail_list=None, fail_append=()):
        self.values = list(values)
        self.fail_list = fail_list
        self.fail_append = set(fail_append)
        self.list_calls = 0
        self.appended = []

    async def list_values(self):
        self.list_calls += 1
        if self.fail_list is not None:
            raise self.fail_list
        return set(self.values)

    async def append_value(self, value, description):
        from datasources.exceptions import AllowListRequestFailed

        if value in self.fail_append:
            raise AllowListRequestFailed("rate limited")
        self.appended.append((value, description))
        self.values.append(value)

    async def aclose(self):
        return None


@pytest.fixture(autouse=True)
def in_memory_store(monkeypatch):
    """Opt into the in-memory fallback, keep Redis out of reach, and wipe it around each test."""
    from config import settings

    store_client._fallback.clear()

    async def no_redis():
        return store_client._unavailable("Redis disabled in tests")

    monkeypatch.setattr(settings, "store_fallback_enabled", True)
    monkeypatch.setattr(store_client, "get_redis", no_redis)
    monkeypatch.setattr(store_client, "_redis_client", None)

    yield

    store_client._fallback.clear()


@pytest.fixture
def unreachable_redis(monkeypatch):
    """Real connection logic against a closed port, with the shipped store settings."""
    from config import Settings, settings

    monkeypatch.setattr(settings, "store_fallback_enabled", Settings().store_fallback_enabled)
    monkeypatch.setattr(store_client, "get_redis", REAL_GET_REDIS)
    monkeypatch.setattr(store_client, "REDIS_URL", "redis://127.0.0.1:1/0")
    monkeypatch.setattr(store_client, "_retry_after_monotonic", 0.0)
    monkeypatch.setattr(store_client, "_using_fallback", False)


@pytest.fixture
def clock(monkeypatch):
    """Controllable monotonic clock for the in-memory store."""
    now = [1000.0]
    monkeypatch.setattr(store_client, "_clock", lambda: now[0])
    return now


@pytest.fixture
def allowlist():
    return FakeAllowList()
