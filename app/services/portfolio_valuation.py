"""Value user-entered token quantities against a price snapshot."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from ..types.portfolio import HoldingValuation, PortfolioValuation
from ..types.tokens import Recommendation, TokenRecord
from .enrichment import recommend
from .manual_prices import UnknownTokenError
from .synthetic import Horizon
from .token_registry import COIN_SYMBOL, find_token

# Used when COIN is missing from the snapshot
DEFAULT_COIN_PRICE_USD = 0.001

PERIOD_THRESHOLDS: Dict[Horizon, float] = {
    Horizon.H24: 5.0,
    Horizon.D7: 15.0,
    Horizon.D30: 25.0,
}


def coin_price(records: Sequence[TokenRecord]) -> float:
    for record in records:
        if record.symbol == COIN_SYMBOL:
            return record.price_usd or DEFAULT_COIN_PRICE_USD
    return DEFAULT_COIN_PRICE_USD


def price_in_coin(price_usd: float, coin_price_usd: float) -> float:
    if coin_price_usd == 0:
        return 0.0
    return price_usd / coin_price_usd


def period_recommendation(change: Optional[float], period: Horizon) -> Recommendation:
    return recommend(change, PERIOD_THRESHOLDS[period])


def value_portfolio(
    records: Sequence[TokenRecord],
    holdings: Mapping[str, float],
    period: Horizon = Horizon.H24,
) -> PortfolioValuation:
    """Price every record, attaching the caller's quantity (0 when not held).

    Raises:
        UnknownTokenError: a holdings key matches no registry token
    """
    quantities: Dict[str, float] = {}
    for key, quantity in holdings.items():
        token = find_token(key)
        if token is None:
            raise UnknownTokenError(key)
        quantities[token.contract.lower()] = float(quantity)

    coin_usd = coin_price(records)
    rows: List[HoldingValuation] = []
    for record in records:
        quantity = quantities.get(record.contract.lower(), 0.0)
        change = getattr(record.price_changes, period.value)
        rows.append(
            HoldingValuation(
                symbol=record.symbol,
                name=record.name,
                contract=record.contract,
                quantity=quantity,
                price_usd=record.price_usd,
                total_value=quantity * record.price_usd,
                price_in_coin=price_in_coin(record.price_usd, coin_usd),
                change_percent=change,
                recommendation=period_recommendation(change, period),
                is_simulated=record.is_simulated,
            )
        )

    return PortfolioValuation(
        period=period.label,
        coin_price_usd=coin_usd,
        total_value_usd=sum(row.total_value for row in rows),
        tokens_held=sum(1 for row in rows if row.quantity > 0),
        holdings=rows,
    )


__all__ = [
    "value_portfolio",
    "coin_price",
    "price_in_coin",
    "period_recommendation",
    "PERIOD_THRESHOLDS",
    "DEFAULT_COIN_PRICE_USD",
]
