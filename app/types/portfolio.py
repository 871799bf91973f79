from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .tokens import Recommendation


class HoldingValuation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(description="Token symbol")
    name: str = Field(description="Token display name")
    contract: str = Field(description="Contract address")
    quantity: float = Field(description="Units held")
    price_usd: float = Field(alias="priceUsd", description="Price per unit in USD")
    total_value: float = Field(alias="totalValue", description="quantity * priceUsd")
    price_in_coin: float = Field(alias="priceInCoin", description="Unit price expressed in COIN")
    change_percent: float = Field(alias="changePercent", description="Percent change over the requested period")
    recommendation: Recommendation = Field(description="Period-specific buy/sell/hold hint")
    is_simulated: bool = Field(alias="isSimulated", description="True when the price is synthetic")


class PortfolioValuation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period: str = Field(description="Horizon used for recommendations")
    coin_price_usd: float = Field(alias="coinPriceUsd", description="COIN price used for conversions")
    total_value_usd: float = Field(alias="totalValueUsd", description="Sum of holding values")
    tokens_held: int = Field(alias="tokensHeld", description="Number of tokens with a positive quantity")
    holdings: List[HoldingValuation] = Field(description="Per-token valuations in registry order")
