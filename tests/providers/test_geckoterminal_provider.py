"""Tests for the GeckoTerminal provider against a mocked transport."""

import httpx
import pytest

from app.config import settings
from app.providers.geckoterminal import GeckoTerminalProvider

BASE_URL = "https://gt.test/api/v2"


def make_provider(handler):
    return GeckoTerminalProvider(base_url=BASE_URL, timeout_s=2.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_token_hits_lowercased_address():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["accept"] = request.headers.get("accept")
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"data": {"id": "ronin_0xabc", "attributes": {"price_usd": "0.05"}}})

    provider = make_provider(handler)
    data = await provider.get_token("ronin", "0xABC")

    assert data["attributes"]["price_usd"] == "0.05"
    assert seen["path"] == "/api/v2/networks/ronin/tokens/0xabc"
    assert seen["accept"] == "application/json"
    assert seen["user_agent"] == settings.user_agent


@pytest.mark.asyncio
async def test_get_token_not_found():
    provider = make_provider(lambda request: httpx.Response(404, json={"errors": [{"status": "404"}]}))
    assert await provider.get_token("ronin", "0xabc") is None


@pytest.mark.asyncio
async def test_get_token_without_attributes():
    provider = make_provider(lambda request: httpx.Response(200, json={"data": {"id": "x"}}))
    assert await provider.get_token("ronin", "0xabc") is None


@pytest.mark.asyncio
async def test_get_token_server_error_raises():
    provider = make_provider(lambda request: httpx.Response(503))
    with pytest.raises(httpx.HTTPStatusError):
        await provider.get_token("ronin", "0xabc")


@pytest.mark.asyncio
async def test_search_pools_sends_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["query"] = request.url.params.get("query")
        return httpx.Response(200, json={"data": [{"id": "ronin_pool"}]})

    provider = make_provider(handler)

    assert await provider.search_pools("COIN") == [{"id": "ronin_pool"}]
    assert seen["query"] == "COIN"
    assert await provider.search_pools("") == []


@pytest.mark.asyncio
async def test_list_networks_tolerates_odd_payloads():
    provider = make_provider(lambda request: httpx.Response(200, json={"data": {"not": "a list"}}))
    assert await provider.list_networks() == []


@pytest.mark.asyncio
async def test_health_check():
    provider = make_provider(lambda request: httpx.Response(200, json={"data": []}))
    health = await provider.health_check()
    assert health["status"] == "healthy"
    assert isinstance(health["latency_ms"], int)
    assert health["latency_ms"] >= 0

    failing = make_provider(lambda request: httpx.Response(500))
    assert (await failing.health_check())["status"] == "error"


@pytest.mark.asyncio
async def test_disabled_provider(monkeypatch):
    monkeypatch.setattr(settings, "enable_geckoterminal", False)
    provider = make_provider(lambda request: httpx.Response(200, json={"data": []}))

    assert await provider.ready() is False
    assert (await provider.health_check())["status"] == "unavailable"
