"""
Tests for live price resolution and the network probe.

Covers:
- Strategy order (primary slug, alternate slug, pool search)
- Rejection of zero, negative and non-finite prices
- Upstream failures degrading to "no data"
- Network probe matching by id and display name
"""

import asyncio

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.services.price_resolution import (
    NetworkProbe,
    PriceResolver,
    Provenance,
    fact_from_pool_payload,
    matches_network,
    parse_number,
    parse_price,
)

NETWORKS = ["ronin", "ron"]


def pool(network_id, base_price, *, name="A / WRON", h24="3.5", base_token_id="ronin_0xaaaa"):
    return {
        "id": f"{network_id}_pool",
        "type": "pool",
        "attributes": {
            "name": name,
            "base_token_price_usd": base_price,
            "price_change_percentage": {"h24": h24},
            "volume_usd": {"h24": "250.5"},
            "reserve_in_usd": "1234.5",
            "fdv_usd": None,
        },
        "relationships": {
            "network": {"data": {"id": network_id, "type": "network"}},
            "base_token": {"data": {"id": base_token_id, "type": "token"}},
        },
    }


class TestParsing:

    @pytest.mark.parametrize(
        "raw,expected",
        [("0.05", 0.05), ("$1,234.5", 1234.5), (3, 3.0), ("", None), ("NaN", None), ("inf", None), (None, None), (True, None)],
    )
    def test_parse_number(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-1", "0.0", "nan", None, "abc"])
    def test_parse_price_rejects_unusable(self, raw):
        assert parse_price(raw) is None

    def test_matches_network(self):
        assert matches_network("ronin", candidate_id="ronin")
        assert matches_network("ronin", candidate_name="Ronin Mainnet")
        assert not matches_network("ronin", candidate_id="eth", candidate_name="Ethereum")

    def test_pool_fact_uses_base_token_side(self):
        fact = fact_from_pool_payload(pool("ronin", "0.02"), network="ronin")

        assert fact.price_usd == 0.02
        assert fact.change_24h == 3.5
        assert fact.volume_24h == 250.5
        assert fact.liquidity == 1234.5
        assert fact.fdv == 0.0
        assert fact.provenance == Provenance.LIVE_SEARCH
        assert fact.upstream_id == "ronin_0xaaaa"


class TestPriceResolver:

    @pytest.fixture
    def alpha(self, registry):
        return registry[0]

    @pytest.mark.asyncio
    async def test_primary_lookup_wins(self, alpha, make_provider, make_token_payload):
        provider = make_provider(
            tokens={("ronin", alpha.address): make_token_payload("0.05", "12.5", coingecko_coin_id="alpha")}
        )

        fact = await PriceResolver(provider, NETWORKS).resolve(alpha)

        assert fact.price_usd == 0.05
        assert fact.change_24h == 12.5
        assert fact.volume_24h == 1000.0
        assert fact.liquidity == 5000.0
        assert fact.market_cap == 0.0
        assert fact.provenance == Provenance.LIVE_LOOKUP
        assert fact.network == "ronin"
        assert fact.upstream_id == "alpha"
        assert provider.calls == [("token", "ronin", alpha.address)]

    @pytest.mark.asyncio
    async def test_lowercases_address(self, alpha, make_provider):
        provider = make_provider()
        await PriceResolver(provider, NETWORKS).resolve(alpha)

        addresses = [call[2] for call in provider.calls if call[0] == "token"]
        assert addresses == [alpha.contract.lower(), alpha.contract.lower()]

    @pytest.mark.asyncio
    async def test_alternate_slug_after_primary_miss(self, alpha, make_provider, make_token_payload):
        provider = make_provider(tokens={("ron", alpha.address): make_token_payload("0.07")})

        fact = await PriceResolver(provider, NETWORKS).resolve(alpha)

        assert fact.price_usd == 0.07
        assert fact.network == "ron"
        assert provider.count("search") == 0

    @pytest.mark.asyncio
    async def test_zero_price_falls_through_to_search(self, alpha, make_provider, make_token_payload):
        provider = make_provider(
            tokens={
                ("ronin", alpha.address): make_token_payload("0"),
                ("ron", alpha.address): make_token_payload("NaN"),
            },
            pools={"A": [pool("ronin", "0.03")]},
        )

        fact = await PriceResolver(provider, NETWORKS).resolve(alpha)

        assert fact.price_usd == 0.03
        assert fact.provenance == Provenance.LIVE_SEARCH

    @pytest.mark.asyncio
    async def test_search_ignores_other_networks(self, alpha, make_provider):
        provider = make_provider(
            pools={"A": [pool("eth", "9.99", name="A / WETH"), pool("ronin", "0.04")]},
        )

        fact = await PriceResolver(provider, NETWORKS).resolve(alpha)

        assert fact.price_usd == 0.04

    @pytest.mark.asyncio
    async def test_first_matching_pool_decides(self, alpha, make_provider):
        provider = make_provider(pools={"A": [pool("ronin", "0"), pool("ronin", "0.04")]})

        assert await PriceResolver(provider, NETWORKS).resolve(alpha) is None

    @pytest.mark.asyncio
    async def test_upstream_errors_yield_none(self, alpha, make_provider):
        request = httpx.Request("GET", "https://example.test")
        provider = make_provider(
            tokens={
                ("ronin", alpha.address): httpx.ConnectTimeout("timed out", request=request),
                ("ron", alpha.address): asyncio.TimeoutError(),
            },
            pools={"A": ValueError("bad json")},
        )

        assert await PriceResolver(provider, NETWORKS).resolve(alpha) is None
        assert provider.count("token") == 2
        assert provider.count("search") == 1

    @pytest.mark.asyncio
    async def test_malformed_payload_is_discarded(self, alpha):
        provider = MagicMock()
        provider.get_token = AsyncMock(return_value={"attributes": "nope"})
        provider.search_pools = AsyncMock(return_value=["not-a-pool", {"relationships": None}])

        assert await PriceResolver(provider, NETWORKS).resolve(alpha) is None

    def test_requires_network_ids(self, make_provider):
        with pytest.raises(ValueError):
            PriceResolver(make_provider(), [])


class TestNetworkProbe:

    @pytest.mark.asyncio
    async def test_found_by_id(self, make_provider):
        provider = make_provider(networks=[{"id": "eth", "attributes": {"name": "Ethereum"}}, {"id": "ronin"}])
        assert await NetworkProbe(provider, "ronin").is_available() is True

    @pytest.mark.asyncio
    async def test_found_by_display_name(self, make_provider):
        provider = make_provider(networks=[{"id": "ron", "attributes": {"name": "Ronin"}}])
        assert await NetworkProbe(provider, "ronin").is_available() is True

    @pytest.mark.asyncio
    async def test_missing_network(self, make_provider):
        provider = make_provider(networks=[{"id": "eth", "attributes": {"name": "Ethereum"}}])
        assert await NetworkProbe(provider, "ronin").is_available() is False

    @pytest.mark.asyncio
    async def test_failure_reports_unavailable(self):
        provider = MagicMock()
        provider.list_networks = AsyncMock(side_effect=asyncio.TimeoutError())
        assert await NetworkProbe(provider, "ronin").is_available() is False
