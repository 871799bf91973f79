"""Record merging and cross-token enrichment for token snapshots."""

from __future__ import annotations

import math
import random
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from ..types.tokens import (
    NO_SWAP,
    BestSwapSet,
    DataSource,
    PriceChangeSet,
    Recommendation,
    TokenRecord,
)
from .price_resolution import Provenance, ResolvedPriceFact
from .synthetic import Horizon, PriceChanges, SyntheticPriceGenerator
from .token_registry import TokenDescriptor

RECOMMENDATION_THRESHOLD = 10.0


def iso_timestamp(ts: float) -> str:
    """Epoch seconds to ``2024-01-01T00:00:00.000Z``."""
    moment = datetime.fromtimestamp(ts, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def recommend(change: Optional[float], threshold: float = RECOMMENDATION_THRESHOLD) -> Recommendation:
    if change is None:
        return Recommendation.HOLD
    if change > threshold:
        return Recommendation.BUY
    if change < -threshold:
        return Recommendation.SELL
    return Recommendation.HOLD


def estimate_txns(volume_24h: float, price_usd: float) -> int:
    """Naive transaction count: one trade per hundred units of volume."""
    if price_usd <= 0:
        return 0
    estimate = math.floor(volume_24h / (price_usd * 100))
    return max(0, estimate)


class RecordMerger:
    """Turn a resolved (or missing) live fact into a token record."""

    def __init__(self, generator: SyntheticPriceGenerator, *, rng: Optional[random.Random] = None) -> None:
        self._generator = generator
        self._rng = rng or random.Random()

    def merge(
        self,
        token: TokenDescriptor,
        fact: Optional[ResolvedPriceFact],
        *,
        refreshed_at: float,
    ) -> TokenRecord:
        if fact is not None and fact.provenance.is_live:
            return self.live_record(token, fact, refreshed_at=refreshed_at)
        return self.synthetic_record(token, refreshed_at=refreshed_at)

    def live_record(self, token: TokenDescriptor, fact: ResolvedPriceFact, *, refreshed_at: float) -> TokenRecord:
        # upstream only reports 24h, longer horizons stay synthetic
        synthetic = self._generator.changes(token.category, token.name)
        changes = PriceChanges(h24=fact.change_24h, d7=synthetic.d7, d30=synthetic.d30)
        return build_record(
            token,
            price_usd=fact.price_usd,
            changes=changes,
            volume_24h=fact.volume_24h,
            liquidity=fact.liquidity,
            market_cap=fact.market_cap,
            fdv=fact.fdv,
            txns_24h=estimate_txns(fact.volume_24h, fact.price_usd),
            refreshed_at=refreshed_at,
            is_simulated=False,
            source=DataSource.GECKOTERMINAL,
            provenance=fact.provenance,
            gecko_id=fact.upstream_id,
        )

    def synthetic_record(
        self,
        token: TokenDescriptor,
        *,
        refreshed_at: float,
        source: DataSource = DataSource.SIMULATION,
    ) -> TokenRecord:
        fact = self._generator.generate(token.category, token.name)
        rng = self._rng
        # cosmetic placeholders, intentionally not reproducible
        return build_record(
            token,
            price_usd=fact.price_usd,
            changes=fact.changes,
            volume_24h=rng.random() * 10000 + 1000,
            liquidity=rng.random() * 50000 + 5000,
            market_cap=fact.price_usd * (rng.random() * 500000 + 50000),
            fdv=0.0,
            txns_24h=rng.randint(5, 54),
            refreshed_at=refreshed_at,
            is_simulated=True,
            source=source,
            provenance=Provenance.SYNTHETIC,
        )


def build_record(
    token: TokenDescriptor,
    *,
    price_usd: float,
    changes: PriceChanges,
    volume_24h: float,
    liquidity: float,
    market_cap: float,
    fdv: float,
    txns_24h: int,
    refreshed_at: float,
    is_simulated: bool,
    source: DataSource,
    provenance: Provenance,
    gecko_id: Optional[str] = None,
    best_swap: Optional[BestSwapSet] = None,
) -> TokenRecord:
    h24 = changes.h24
    return TokenRecord(
        name=token.name,
        symbol=token.symbol,
        contract=token.contract,
        category=token.category.value,
        decimals=token.decimals,
        price_usd=price_usd,
        price_changes=PriceChangeSet(h24=changes.h24, d7=changes.d7, d30=changes.d30),
        best_swap=best_swap or BestSwapSet(),
        volume_24h=volume_24h,
        liquidity=liquidity,
        market_cap=market_cap,
        fdv=fdv,
        txns_24h=txns_24h,
        last_updated=iso_timestamp(refreshed_at),
        is_simulated=is_simulated,
        source=source,
        provenance=provenance.value,
        gecko_id=gecko_id,
        price_change_24h=h24,
        diff_percent=h24,
        conversion_rate=1 + h24 / 100,
        recommendation=recommend(h24),
    )


def apply_manual_price(record: TokenRecord, price_usd: float, *, refreshed_at: float) -> TokenRecord:
    """Replace a record's price with a user-supplied one."""
    return record.model_copy(
        update={
            "price_usd": price_usd,
            "is_simulated": False,
            "source": DataSource.MANUAL,
            "provenance": Provenance.MANUAL.value,
            "last_updated": iso_timestamp(refreshed_at),
        }
    )


def best_swap(records: Sequence[TokenRecord], current: TokenRecord, horizon: Horizon) -> str:
    """Symbol of the other record with the highest change at ``horizon``.

    Ties keep the earliest record; no candidate yields ``NO_SWAP``.
    """
    best_symbol = NO_SWAP
    best_value: Optional[float] = None
    for candidate in records:
        if candidate.contract == current.contract:
            continue
        value = getattr(candidate.price_changes, horizon.value, None)
        if value is None:
            continue
        if best_value is None or value > best_value:
            best_value = value
            best_symbol = candidate.symbol
    return best_symbol


def enrich_best_swaps(records: Sequence[TokenRecord], horizons: Iterable[Horizon] = tuple(Horizon)) -> List[TokenRecord]:
    """Return copies of ``records`` with ``best_swap`` filled for each horizon."""
    horizon_list = list(horizons)
    enriched: List[TokenRecord] = []
    for record in records:
        swaps: Dict[str, str] = {h.value: best_swap(records, record, h) for h in horizon_list}
        enriched.append(record.model_copy(update={"best_swap": BestSwapSet(**swaps)}))
    return enriched


__all__ = [
    "RecordMerger",
    "build_record",
    "apply_manual_price",
    "best_swap",
    "enrich_best_swaps",
    "estimate_txns",
    "iso_timestamp",
    "recommend",
]
