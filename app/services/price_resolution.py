"""
Best-effort live price resolution against the DEX aggregator.

Each token is tried through an ordered chain of strategies (address lookup on
the primary network slug, address lookup on alternate slugs, then a pool search
by symbol). The first strategy yielding a strictly positive, finite USD price
wins. Nothing in this module raises to its caller: upstream failures are
logged and reported as "no data".
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..providers.base import MarketDataProvider
from .token_registry import TokenDescriptor

logger = logging.getLogger(__name__)

# Failures that mean "this strategy produced nothing"
UPSTREAM_ERRORS = (
    httpx.HTTPError,
    asyncio.TimeoutError,
    OSError,
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
)


class Provenance(str, Enum):
    """Which strategy produced a record's numbers."""

    LIVE_LOOKUP = "live-lookup"
    LIVE_SEARCH = "live-search"
    SYNTHETIC = "synthetic"
    MANUAL = "manual"

    @property
    def is_live(self) -> bool:
        return self in (Provenance.LIVE_LOOKUP, Provenance.LIVE_SEARCH)


@dataclass(frozen=True)
class ResolvedPriceFact:
    """Market figures obtained from the live aggregator."""

    price_usd: float
    change_24h: float
    volume_24h: float
    liquidity: float
    market_cap: float
    fdv: float
    provenance: Provenance
    network: Optional[str] = None
    upstream_id: Optional[str] = None


def parse_number(value: Any) -> Optional[float]:
    """Parse the aggregator's stringly-typed numbers; None when not finite."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.replace("$", "").replace(",", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_price(value: Any) -> Optional[float]:
    """A usable price is finite and strictly positive."""
    price = parse_number(value)
    if price is None or price <= 0:
        return None
    return price


def _number_or_zero(value: Any) -> float:
    number = parse_number(value)
    return number if number is not None else 0.0


def _h24(value: Any) -> Any:
    return value.get("h24") if isinstance(value, dict) else None


def matches_network(network_id: str, *, candidate_id: Any = None, candidate_name: Any = None) -> bool:
    """True when an aggregator entity belongs to ``network_id``.

    Matches the exact id, or a case-insensitive substring of a display name.
    """
    if candidate_id is not None and str(candidate_id) == network_id:
        return True
    if isinstance(candidate_name, str) and network_id.lower() in candidate_name.lower():
        return True
    return False


def fact_from_token_payload(
    payload: Dict[str, Any],
    *,
    provenance: Provenance = Provenance.LIVE_LOOKUP,
    network: Optional[str] = None,
) -> Optional[ResolvedPriceFact]:
    """Build a fact from a ``/networks/{id}/tokens/{address}`` payload."""
    attributes = payload.get("attributes") if isinstance(payload, dict) else None
    if not isinstance(attributes, dict):
        return None

    price = parse_price(attributes.get("price_usd"))
    if price is None:
        return None

    return ResolvedPriceFact(
        price_usd=price,
        change_24h=_number_or_zero(_h24(attributes.get("price_change_percentage"))),
        volume_24h=_number_or_zero(_h24(attributes.get("volume_usd"))),
        liquidity=_number_or_zero(attributes.get("total_reserve_in_usd")),
        market_cap=_number_or_zero(attributes.get("market_cap_usd")),
        fdv=_number_or_zero(attributes.get("fdv_usd")),
        provenance=provenance,
        network=network,
        upstream_id=attributes.get("coingecko_coin_id") or None,
    )


def fact_from_pool_payload(pool: Dict[str, Any], *, network: Optional[str] = None) -> Optional[ResolvedPriceFact]:
    """Build a fact from the base-token side of a ``/search/pools`` entry."""
    attributes = pool.get("attributes") if isinstance(pool, dict) else None
    if not isinstance(attributes, dict):
        return None

    price = parse_price(attributes.get("base_token_price_usd"))
    if price is None:
        return None

    base_token = ((pool.get("relationships") or {}).get("base_token") or {}).get("data") or {}
    return ResolvedPriceFact(
        price_usd=price,
        change_24h=_number_or_zero(_h24(attributes.get("price_change_percentage"))),
        volume_24h=_number_or_zero(_h24(attributes.get("volume_usd"))),
        liquidity=_number_or_zero(attributes.get("reserve_in_usd")),
        market_cap=_number_or_zero(attributes.get("market_cap_usd")),
        fdv=_number_or_zero(attributes.get("fdv_usd")),
        provenance=Provenance.LIVE_SEARCH,
        network=network,
        upstream_id=base_token.get("id") or None,
    )


class NetworkProbe:
    """Reports whether the aggregator indexes the target chain at all."""

    def __init__(self, provider: MarketDataProvider, network_id: str) -> None:
        self._provider = provider
        self._network_id = network_id

    async def is_available(self) -> bool:
        try:
            networks = await self._provider.list_networks()
        except UPSTREAM_ERRORS as exc:
            logger.warning("Network listing failed for %s: %s", self._network_id, exc)
            return False

        for network in networks:
            if not isinstance(network, dict):
                continue
            attributes = network.get("attributes") or {}
            if matches_network(
                self._network_id,
                candidate_id=network.get("id"),
                candidate_name=attributes.get("name") if isinstance(attributes, dict) else None,
            ):
                logger.debug("Network %s indexed upstream", self._network_id)
                return True

        logger.info("Network %s not found among %d upstream networks", self._network_id, len(networks))
        return False


class PriceResolver:
    """Resolve one token's live market data through ordered fallbacks."""

    def __init__(self, provider: MarketDataProvider, network_ids: Sequence[str]) -> None:
        if not network_ids:
            raise ValueError("at least one network id is required")
        self._provider = provider
        self._network_ids: List[str] = list(network_ids)

    @property
    def primary_network(self) -> str:
        return self._network_ids[0]

    async def resolve(self, token: TokenDescriptor) -> Optional[ResolvedPriceFact]:
        for network in self._network_ids:
            fact = await self._lookup_by_address(token, network)
            if fact is not None:
                return fact

        fact = await self._search_by_symbol(token)
        if fact is not None:
            return fact

        logger.info("No live data for %s, falling back to synthetic pricing", token.symbol)
        return None

    async def _lookup_by_address(self, token: TokenDescriptor, network: str) -> Optional[ResolvedPriceFact]:
        try:
            payload = await self._provider.get_token(network, token.address)
        except UPSTREAM_ERRORS as exc:
            logger.info("Address lookup failed for %s on %s: %s", token.symbol, network, exc)
            return None

        if not payload:
            return None

        fact = fact_from_token_payload(payload, provenance=Provenance.LIVE_LOOKUP, network=network)
        if fact is None:
            logger.info("Discarding %s payload from %s: no usable price", token.symbol, network)
        return fact

    async def _search_by_symbol(self, token: TokenDescriptor) -> Optional[ResolvedPriceFact]:
        try:
            pools = await self._provider.search_pools(token.symbol)
        except UPSTREAM_ERRORS as exc:
            logger.info("Pool search failed for %s: %s", token.symbol, exc)
            return None

        network = self.primary_network
        for pool in pools:
            if not isinstance(pool, dict):
                continue
            relationships = pool.get("relationships") or {}
            network_ref = (relationships.get("network") or {}).get("data") or {}
            attributes = pool.get("attributes") or {}
            if not matches_network(
                network,
                candidate_id=network_ref.get("id"),
                candidate_name=attributes.get("name"),
            ):
                continue
            # first pool on the target chain decides
            return fact_from_pool_payload(pool, network=network)

        return None


__all__ = [
    "Provenance",
    "ResolvedPriceFact",
    "NetworkProbe",
    "PriceResolver",
    "parse_number",
    "parse_price",
    "matches_network",
    "fact_from_token_payload",
    "fact_from_pool_payload",
]
