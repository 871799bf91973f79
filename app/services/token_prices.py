"""Service that resolves, enriches and caches the token price snapshot."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from ..cache import SnapshotCache
from ..config import Settings
from ..providers.base import MarketDataProvider
from ..providers.geckoterminal import GeckoTerminalProvider
from ..types.tokens import (
    ApiStatus,
    DataSource,
    SnapshotMetadata,
    TokenRecord,
    TokenSnapshot,
)
from .enrichment import RecordMerger, apply_manual_price, enrich_best_swaps, iso_timestamp
from .manual_prices import ManualPriceBook
from .price_alerts import PriceAlertMonitor
from .price_resolution import NetworkProbe, PriceResolver
from .synthetic import SUPPORTED_PERIODS, Clock, SyntheticPriceGenerator
from .token_registry import TOKEN_REGISTRY, TokenDescriptor

logger = logging.getLogger(__name__)

LIVE_DATA_SOURCE = "geckoterminal-api-v2"

Sleep = Callable[[float], Awaitable[None]]


def api_status_for(real: int, total: int) -> ApiStatus:
    if total > 0 and real == total:
        return ApiStatus.FULL_SUCCESS
    if real > 0:
        return ApiStatus.PARTIAL_SUCCESS
    return ApiStatus.FALLBACK_MODE


def success_rate(real: int, total: int) -> str:
    if total <= 0:
        return "0.0%"
    return f"{real / total * 100:.1f}%"


class TokenPriceService:
    """Fetch live prices, fall back to synthetic ones and cache the result.

    Refreshes are single-flight: the lock covers the cache check and the
    refresh, so callers arriving during a miss wait and reuse the new snapshot.
    """

    def __init__(
        self,
        *,
        provider: MarketDataProvider,
        network_ids: Sequence[str],
        registry: Sequence[TokenDescriptor] = TOKEN_REGISTRY,
        cache: Optional[SnapshotCache] = None,
        generator: Optional[SyntheticPriceGenerator] = None,
        overrides: Optional[ManualPriceBook] = None,
        alerts: Optional[PriceAlertMonitor] = None,
        clock: Optional[Clock] = None,
        request_delay_seconds: float = 0.0,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._clock = clock or time.time
        self._registry = tuple(registry)
        self._provider = provider
        self._probe = NetworkProbe(provider, network_ids[0])
        self._resolver = PriceResolver(provider, network_ids)
        self._generator = generator or SyntheticPriceGenerator(clock=self._clock)
        self._merger = RecordMerger(self._generator, rng=rng)
        self._cache = cache or SnapshotCache(clock=self._clock)
        self.overrides = overrides if overrides is not None else ManualPriceBook(self._registry)
        self.alerts = alerts or PriceAlertMonitor(clock=self._clock)
        self._delay = max(0.0, request_delay_seconds)
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._generation = 0

    @classmethod
    def from_settings(cls, config: Settings, *, provider: Optional[MarketDataProvider] = None) -> "TokenPriceService":
        clock = time.time
        return cls(
            provider=provider or GeckoTerminalProvider(
                base_url=config.geckoterminal_base_url,
                timeout_s=config.request_timeout_seconds,
            ),
            network_ids=config.all_network_ids,
            cache=SnapshotCache(ttl_seconds=config.cache_ttl_seconds, clock=clock),
            generator=SyntheticPriceGenerator(clock=clock, time_bucket_ms=config.synthetic_time_bucket_ms),
            alerts=PriceAlertMonitor(max_alerts=config.alert_history_size, clock=clock),
            clock=clock,
            request_delay_seconds=config.request_delay_seconds,
        )

    @property
    def provider(self) -> MarketDataProvider:
        return self._provider

    @property
    def cache(self) -> SnapshotCache:
        return self._cache

    @property
    def registry(self) -> Sequence[TokenDescriptor]:
        return self._registry

    async def get_snapshot(self) -> TokenSnapshot:
        """Return the cached snapshot or build a fresh one.

        Never raises for upstream problems: a failing pipeline yields an
        all-synthetic snapshot flagged with ``apiStatus = "error"``.
        """
        async with self._lock:
            cached = self._cache.get()
            if cached is not None:
                logger.debug("Serving cached token snapshot")
                return cached

            generation = self._generation
            try:
                snapshot = await self._build_snapshot()
            except Exception as exc:  # noqa: BLE001
                logger.exception("Token price pipeline failed, serving error fallback")
                return self.error_snapshot(exc)

            # invalidated mid-build: serve it once, the next call rebuilds
            if generation != self._generation:
                logger.info("Token snapshot invalidated during refresh, not caching")
                return snapshot

            self._cache.put(snapshot)
            self.alerts.observe(snapshot.tokens)
            return snapshot

    async def refresh(self) -> TokenSnapshot:
        """Drop the cached snapshot and rebuild it."""
        self.invalidate()
        return await self.get_snapshot()

    def invalidate(self) -> None:
        """Drop the cached snapshot and keep any in-flight build out of the cache."""
        self._generation += 1
        self._cache.clear()

    async def _build_snapshot(self) -> TokenSnapshot:
        logger.info("Fetching fresh token data for %d tokens", len(self._registry))
        live_enabled = await self._provider.ready()
        network_available = await self._probe.is_available() if live_enabled else False

        records: List[TokenRecord] = []
        attempted = 0

        for token in self._registry:
            attempted += 1
            fact = None
            if live_enabled:
                fact = await self._resolver.resolve(token)
                if self._delay:
                    await self._sleep(self._delay)

            record = self._merger.merge(token, fact, refreshed_at=self._clock())
            if not record.is_simulated:
                logger.debug("Live price for %s: %.6f", token.symbol, record.price_usd)

            manual_price = self.overrides.price_for(token)
            if manual_price is not None:
                record = apply_manual_price(record, manual_price, refreshed_at=self._clock())
            records.append(record)

        enriched = enrich_best_swaps(records)
        total = len(enriched)
        real_count = sum(1 for r in enriched if r.source == DataSource.GECKOTERMINAL)
        manual_count = sum(1 for r in enriched if r.source == DataSource.MANUAL)
        now = self._clock()
        metadata = SnapshotMetadata(
            total_tokens=total,
            real_data_tokens=real_count,
            simulated_tokens=sum(1 for r in enriched if r.is_simulated),
            manual_tokens=manual_count,
            attempted_fetches=attempted,
            last_update=iso_timestamp(now),
            cache_expiry=iso_timestamp(now + self._cache.ttl_seconds),
            data_source=LIVE_DATA_SOURCE,
            network_available=network_available,
            success_rate=success_rate(real_count, total),
            api_status=api_status_for(real_count, total),
            supported_periods=list(SUPPORTED_PERIODS),
        )
        logger.info("Token snapshot ready: %d/%d live prices", real_count, total)
        return TokenSnapshot(tokens=enriched, metadata=metadata)

    def error_snapshot(self, error: BaseException) -> TokenSnapshot:
        """All-synthetic snapshot used when the pipeline itself blows up."""
        now = self._clock()
        tokens = [
            self._merger.synthetic_record(token, refreshed_at=now, source=DataSource.ERROR_FALLBACK)
            for token in self._registry
        ]
        metadata = SnapshotMetadata(
            total_tokens=len(tokens),
            real_data_tokens=0,
            simulated_tokens=len(tokens),
            attempted_fetches=0,
            last_update=iso_timestamp(now),
            data_source=DataSource.ERROR_FALLBACK.value,
            success_rate=success_rate(0, len(tokens)),
            api_status=ApiStatus.ERROR,
            supported_periods=list(SUPPORTED_PERIODS),
            error=str(error) or error.__class__.__name__,
        )
        return TokenSnapshot(tokens=tokens, metadata=metadata)


__all__ = ["TokenPriceService", "api_status_for", "success_rate", "LIVE_DATA_SOURCE"]
