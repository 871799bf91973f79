import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from app.providers.base import MarketDataProvider
from app.services.token_registry import TokenCategory, TokenDescriptor

ALPHA = TokenDescriptor(
    name="ALPHA",
    symbol="A",
    contract="0xAAAA000000000000000000000000000000000001",
    category=TokenCategory.METAL,
)
BRAVO = TokenDescriptor(
    name="BRAVO",
    symbol="B",
    contract="0xBBBB000000000000000000000000000000000002",
    category=TokenCategory.GAS,
)

FIXED_NOW = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = FIXED_NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMarketProvider(MarketDataProvider):
    """In-memory aggregator; entries that are exceptions get raised."""

    name = "fake"

    def __init__(
        self,
        *,
        networks: Optional[List[Dict[str, Any]]] = None,
        tokens: Optional[Dict[Tuple[str, str], Any]] = None,
        pools: Optional[Dict[str, Any]] = None,
        enabled: bool = True,
    ):
        self.networks = networks if networks is not None else []
        self.tokens = tokens or {}
        self.pools = pools or {}
        self.enabled = enabled
        self.calls: List[Tuple[Any, ...]] = []

    async def ready(self) -> bool:
        return self.enabled

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy" if self.enabled else "unavailable"}

    async def list_networks(self) -> List[Dict[str, Any]]:
        self.calls.append(("networks",))
        await asyncio.sleep(0)
        if isinstance(self.networks, Exception):
            raise self.networks
        return list(self.networks)

    async def get_token(self, network: str, address: str) -> Optional[Dict[str, Any]]:
        self.calls.append(("token", network, address))
        await asyncio.sleep(0)
        value = self.tokens.get((network, address))
        if isinstance(value, Exception):
            raise value
        return value

    async def search_pools(self, query: str) -> List[Dict[str, Any]]:
        self.calls.append(("search", query))
        await asyncio.sleep(0)
        value = self.pools.get(query, [])
        if isinstance(value, Exception):
            raise value
        return value

    def count(self, kind: str) -> int:
        return sum(1 for call in self.calls if call[0] == kind)


def token_payload(price_usd: Any, h24: Any = "0", **extra: Any) -> Dict[str, Any]:
    attributes = {
        "price_usd": price_usd,
        "price_change_percentage": {"h24": h24},
        "volume_usd": {"h24": extra.pop("volume", "1000")},
        "total_reserve_in_usd": extra.pop("liquidity", "5000"),
        "market_cap_usd": extra.pop("market_cap", None),
        "fdv_usd": extra.pop("fdv", "20000"),
    }
    attributes.update(extra)
    return {"id": "ronin_token", "type": "token", "attributes": attributes}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry():
    return (ALPHA, BRAVO)


@pytest.fixture
def make_provider():
    return FakeMarketProvider


@pytest.fixture
def make_token_payload():
    return token_payload
