"""
Deterministic synthetic pricing used when no live market data is available.

Prices and percent changes are derived from a 32-bit polynomial hash of the
token name, a per-category band/volatility table and slow trigonometric
oscillators driven by the clock. Two calls for the same ``(category, name)``
inside the same time bucket return identical values.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

from .token_registry import TokenCategory

Clock = Callable[[], float]

INT32_MAX = 2_147_483_647
DAY_MS = 86_400_000
PRICE_OSCILLATION_PERIOD_MS = 100_000
PRICE_OSCILLATION_AMPLITUDE = 0.1

PRICE_BANDS: Dict[TokenCategory, Tuple[float, float]] = {
    TokenCategory.UTILITY: (0.001, 0.01),
    TokenCategory.RESOURCE: (0.0001, 0.005),
    TokenCategory.METAL: (0.0005, 0.008),
    TokenCategory.ORGANIC: (0.0002, 0.003),
    TokenCategory.CRAFTED: (0.001, 0.015),
    TokenCategory.GAS: (0.0003, 0.006),
    TokenCategory.ENERGY: (0.0008, 0.012),
    TokenCategory.CHEMICAL: (0.0004, 0.007),
    TokenCategory.EXPLOSIVE: (0.002, 0.025),
}

# Maximum percent swing per category
VOLATILITY: Dict[TokenCategory, float] = {
    TokenCategory.UTILITY: 8,
    TokenCategory.RESOURCE: 15,
    TokenCategory.METAL: 12,
    TokenCategory.ORGANIC: 20,
    TokenCategory.CRAFTED: 10,
    TokenCategory.GAS: 18,
    TokenCategory.ENERGY: 16,
    TokenCategory.CHEMICAL: 14,
    TokenCategory.EXPLOSIVE: 25,
}
DEFAULT_VOLATILITY = 15.0


class Horizon(str, Enum):
    """Look-back windows for percent-change reporting."""

    H24 = "h24"
    D7 = "d7"
    D30 = "d30"

    @property
    def label(self) -> str:
        return HORIZON_LABELS[self]


HORIZON_LABELS: Dict[Horizon, str] = {Horizon.H24: "24h", Horizon.D7: "7d", Horizon.D30: "30d"}
SUPPORTED_PERIODS: List[str] = [HORIZON_LABELS[h] for h in Horizon]


@dataclass(frozen=True)
class PriceChanges:
    """Percent change per horizon."""

    h24: float
    d7: float
    d30: float


@dataclass(frozen=True)
class SyntheticPriceFact:
    price_usd: float
    changes: PriceChanges


def _coerce_category(category: Union[TokenCategory, str]) -> Optional[TokenCategory]:
    if isinstance(category, TokenCategory):
        return category
    try:
        return TokenCategory(str(category).lower())
    except ValueError:
        return None


def name_hash(name: str) -> int:
    """Java-style ``h = h*31 + c`` string hash with signed 32-bit wraparound.

    Iterates UTF-16 code units so non-BMP characters hash the same way a
    browser-side consumer computing the same seed would.
    """
    raw = name.encode("utf-16-le")
    value = 0
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def name_seed(name: str) -> float:
    """Normalise the name hash to roughly ``[0, 1]``."""
    return abs(name_hash(name)) / INT32_MAX


def price_band(category: Union[TokenCategory, str]) -> Tuple[float, float]:
    resolved = _coerce_category(category)
    return PRICE_BANDS.get(resolved, PRICE_BANDS[TokenCategory.RESOURCE])


def max_volatility(category: Union[TokenCategory, str]) -> float:
    resolved = _coerce_category(category)
    return float(VOLATILITY.get(resolved, DEFAULT_VOLATILITY))


class SyntheticPriceGenerator:
    """Pseudo-random but reproducible price oracle."""

    def __init__(self, *, clock: Optional[Clock] = None, time_bucket_ms: int = 1000) -> None:
        self._clock = clock or time.time
        self._bucket_ms = max(1, int(time_bucket_ms))

    def now_ms(self) -> int:
        """Current clock reading in milliseconds, floored to the time bucket."""
        raw = int(self._clock() * 1000)
        return raw - (raw % self._bucket_ms)

    def base_price(self, category: Union[TokenCategory, str], name: str) -> float:
        """Band-bounded price before the time oscillation is applied."""
        low, high = price_band(category)
        return low + name_seed(name) * (high - low)

    def price(self, category: Union[TokenCategory, str], name: str, *, now_ms: Optional[int] = None) -> float:
        now = self.now_ms() if now_ms is None else now_ms
        variation = 1 + math.sin(now / PRICE_OSCILLATION_PERIOD_MS) * PRICE_OSCILLATION_AMPLITUDE
        return self.base_price(category, name) * variation

    def changes(self, category: Union[TokenCategory, str], name: str, *, now_ms: Optional[int] = None) -> PriceChanges:
        now = self.now_ms() if now_ms is None else now_ms
        seed = name_seed(name)
        vol = max_volatility(category)

        change_24h = (
            math.sin(seed * 1000 + now / DAY_MS) * vol * 0.8
            + math.cos(seed * 1500 + now / (DAY_MS * 0.5)) * vol * 0.3
        )
        change_7d = (
            math.sin(seed * 2000 + now / (DAY_MS * 7)) * vol * 1.2
            + math.cos(seed * 2500 + now / (DAY_MS * 3)) * vol * 0.4
        )
        change_30d = (
            math.sin(seed * 3000 + now / (DAY_MS * 30)) * vol * 1.8
            + math.cos(seed * 3500 + now / (DAY_MS * 15)) * vol * 0.6
        )
        return PriceChanges(
            h24=round(change_24h, 2),
            d7=round(change_7d, 2),
            d30=round(change_30d, 2),
        )

    def generate(self, category: Union[TokenCategory, str], name: str) -> SyntheticPriceFact:
        """Price and change vector read from a single clock sample."""
        now = self.now_ms()
        return SyntheticPriceFact(
            price_usd=self.price(category, name, now_ms=now),
            changes=self.changes(category, name, now_ms=now),
        )


__all__ = [
    "Clock",
    "Horizon",
    "HORIZON_LABELS",
    "SUPPORTED_PERIODS",
    "PriceChanges",
    "SyntheticPriceFact",
    "SyntheticPriceGenerator",
    "PRICE_BANDS",
    "VOLATILITY",
    "DEFAULT_VOLATILITY",
    "name_hash",
    "name_seed",
    "price_band",
    "max_volatility",
]
