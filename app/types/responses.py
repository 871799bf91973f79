from datetime import datetime
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class AlertType(str, Enum):
    SPIKE = "spike"
    SURGE = "surge"
    MOON = "moon"


class PriceAlert(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(description="Alert identifier: SYMBOL-<epoch ms>")
    token_symbol: str = Field(alias="tokenSymbol")
    token_name: str = Field(alias="tokenName")
    category: str = Field(description="Token classification")
    previous_price: float = Field(alias="previousPrice")
    current_price: float = Field(alias="currentPrice")
    change_percent: float = Field(alias="changePercent")
    timestamp: datetime = Field(description="When the rise was observed")
    type: AlertType = Field(description="Severity bucket of the rise")


class AlertsResponse(BaseModel):
    alerts: List[PriceAlert] = Field(default_factory=list, description="Most recent alerts first")


class OverridesResponse(BaseModel):
    prices: Dict[str, float] = Field(default_factory=dict, description="Active manual prices keyed by symbol")
