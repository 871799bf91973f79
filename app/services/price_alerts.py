"""Price-rise alerts derived from consecutive token snapshots."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from ..types.responses import AlertType, PriceAlert
from ..types.tokens import TokenRecord

logger = logging.getLogger(__name__)

SPIKE_THRESHOLD = 10.0
SURGE_THRESHOLD = 25.0
MOON_THRESHOLD = 50.0


def classify_rise(change_percent: float) -> Optional[AlertType]:
    if change_percent >= MOON_THRESHOLD:
        return AlertType.MOON
    if change_percent >= SURGE_THRESHOLD:
        return AlertType.SURGE
    if change_percent >= SPIKE_THRESHOLD:
        return AlertType.SPIKE
    return None


class PriceAlertMonitor:
    """Remembers the last price per symbol and flags significant rises."""

    def __init__(self, *, max_alerts: int = 10, clock: Optional[Callable[[], float]] = None) -> None:
        self._max_alerts = max(1, max_alerts)
        self._clock = clock or time.time
        self._previous: Dict[str, float] = {}
        self._alerts: List[PriceAlert] = []

    def observe(self, records: Sequence[TokenRecord]) -> List[PriceAlert]:
        """Compare ``records`` with the previous observation; returns new alerts."""
        now = self._clock()
        stamp = datetime.fromtimestamp(now, tz=timezone.utc)
        fresh: List[PriceAlert] = []

        for record in records:
            previous = self._previous.get(record.symbol)
            if not previous or previous <= 0:
                continue
            change = (record.price_usd - previous) / previous * 100
            alert_type = classify_rise(change)
            if alert_type is None:
                continue
            fresh.append(
                PriceAlert(
                    id=f"{record.symbol}-{int(now * 1000)}",
                    token_symbol=record.symbol,
                    token_name=record.name,
                    category=record.category,
                    previous_price=previous,
                    current_price=record.price_usd,
                    change_percent=change,
                    timestamp=stamp,
                    type=alert_type,
                )
            )

        if fresh:
            logger.info("Raised %d price alerts: %s", len(fresh), ", ".join(a.token_symbol for a in fresh))
            self._alerts = (fresh + self._alerts)[: self._max_alerts]

        self._previous = {record.symbol: record.price_usd for record in records}
        return fresh

    def alerts(self) -> List[PriceAlert]:
        return list(self._alerts)

    def dismiss(self, alert_id: str) -> bool:
        remaining = [alert for alert in self._alerts if alert.id != alert_id]
        removed = len(remaining) != len(self._alerts)
        self._alerts = remaining
        return removed


__all__ = ["PriceAlertMonitor", "classify_rise", "SPIKE_THRESHOLD", "SURGE_THRESHOLD", "MOON_THRESHOLD"]
