"""In-memory book of user-entered token prices."""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional, Sequence

from .token_registry import TOKEN_REGISTRY, TokenDescriptor, find_token


class UnknownTokenError(KeyError):
    """Raised when a symbol or address is not in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown token '{self.key}'"


class ManualPriceBook:
    """Manual USD prices keyed by lowercase contract address."""

    def __init__(self, registry: Sequence[TokenDescriptor] = TOKEN_REGISTRY) -> None:
        self._registry = tuple(registry)
        self._prices: Dict[str, float] = {}

    def _resolve(self, key: str) -> TokenDescriptor:
        token = find_token(key, self._registry)
        if token is None:
            raise UnknownTokenError(key)
        return token

    def set_prices(self, prices: Mapping[str, float]) -> Dict[str, float]:
        """Validate every entry first so a bad key leaves the book unchanged."""
        staged: Dict[str, float] = {}
        for key, price in prices.items():
            token = self._resolve(key)
            value = float(price)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"price for {token.symbol} must be a positive finite number")
            staged[token.address] = value
        self._prices.update(staged)
        return self.by_symbol()

    def remove(self, key: str) -> bool:
        token = self._resolve(key)
        return self._prices.pop(token.address, None) is not None

    def clear(self) -> None:
        self._prices.clear()

    def price_for(self, token: TokenDescriptor) -> Optional[float]:
        return self._prices.get(token.address)

    def by_symbol(self) -> Dict[str, float]:
        return {
            token.symbol: self._prices[token.address]
            for token in self._registry
            if token.address in self._prices
        }

    def __len__(self) -> int:
        return len(self._prices)


__all__ = ["ManualPriceBook", "UnknownTokenError"]
