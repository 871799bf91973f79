from typing import Dict

from pydantic import BaseModel, Field, field_validator

from ..services.synthetic import Horizon


class PriceOverrideRequest(BaseModel):
    prices: Dict[str, float] = Field(description="Manual USD prices keyed by symbol or contract address")

    @field_validator("prices")
    @classmethod
    def _positive_prices(cls, value: Dict[str, float]) -> Dict[str, float]:
        for key, price in value.items():
            if not (price > 0 and price != float("inf")):
                raise ValueError(f"price for {key} must be a positive finite number")
        return value


class PortfolioValuationRequest(BaseModel):
    holdings: Dict[str, float] = Field(description="Quantities held, keyed by symbol or contract address")
    period: Horizon = Field(default=Horizon.H24, description="Horizon driving the recommendation")

    @field_validator("holdings")
    @classmethod
    def _non_negative(cls, value: Dict[str, float]) -> Dict[str, float]:
        for key, quantity in value.items():
            if not (quantity >= 0 and quantity != float("inf")):
                raise ValueError(f"quantity for {key} must be a non-negative finite number")
        return value
