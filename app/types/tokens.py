from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DataSource(str, Enum):
    GECKOTERMINAL = "geckoterminal"
    SIMULATION = "realistic-simulation"
    MANUAL = "manual-input"
    ERROR_FALLBACK = "error-fallback"


class ApiStatus(str, Enum):
    FULL_SUCCESS = "full-success"
    PARTIAL_SUCCESS = "partial-success"
    FALLBACK_MODE = "fallback-mode"
    ERROR = "error"


class Recommendation(str, Enum):
    # Wire values are the ones the dashboard already renders
    BUY = "comprar"
    SELL = "vender"
    HOLD = "mantener"


NO_SWAP = "N/A"


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PriceChangeSet(WireModel):
    h24: float = Field(description="24 hour percent change")
    d7: float = Field(description="7 day percent change")
    d30: float = Field(description="30 day percent change")


class BestSwapSet(WireModel):
    h24: str = Field(default=NO_SWAP, description="Best counterpart symbol over 24 hours")
    d7: str = Field(default=NO_SWAP, description="Best counterpart symbol over 7 days")
    d30: str = Field(default=NO_SWAP, description="Best counterpart symbol over 30 days")


class TokenRecord(WireModel):
    name: str = Field(description="Token display name")
    symbol: str = Field(description="Ticker symbol")
    contract: str = Field(description="Contract address as registered")
    category: str = Field(description="Token classification")
    decimals: int = Field(description="Token decimal places")
    price_usd: float = Field(alias="priceUsd", description="Current USD price")
    price_changes: PriceChangeSet = Field(alias="priceChanges", description="Percent change per horizon")
    best_swap: BestSwapSet = Field(
        default_factory=BestSwapSet, alias="bestSwap", description="Best swap counterpart per horizon"
    )
    volume_24h: float = Field(default=0.0, alias="volume24h", description="24h traded volume in USD")
    liquidity: float = Field(default=0.0, description="Liquidity reserve in USD")
    market_cap: float = Field(default=0.0, alias="marketCap", description="Market capitalisation in USD")
    fdv: float = Field(default=0.0, description="Fully diluted valuation in USD")
    txns_24h: int = Field(default=0, alias="txns24h", description="Estimated 24h transaction count")
    last_updated: str = Field(alias="lastUpdated", description="ISO-8601 refresh timestamp")
    is_simulated: bool = Field(alias="isSimulated", description="True when prices are synthetic")
    source: DataSource = Field(description="Where the price came from")
    provenance: str = Field(description="Resolution strategy that produced the numbers")
    gecko_id: Optional[str] = Field(default=None, alias="geckoId", description="Upstream coin identifier")

    # Legacy scalar mirrors of the 24h horizon
    price_change_24h: float = Field(alias="priceChange24h", description="Mirror of priceChanges.h24")
    diff_percent: float = Field(alias="diffPercent", description="Mirror of priceChanges.h24")
    conversion_rate: float = Field(alias="conversionRate", description="1 + h24 / 100")
    recommendation: Recommendation = Field(description="Buy/sell/hold hint from the 24h change")


class SnapshotMetadata(WireModel):
    total_tokens: int = Field(alias="totalTokens")
    real_data_tokens: int = Field(alias="realDataTokens")
    simulated_tokens: int = Field(alias="simulatedTokens")
    manual_tokens: int = Field(default=0, alias="manualTokens", description="Records priced from manual overrides")
    attempted_fetches: int = Field(default=0, alias="attemptedFetches")
    last_update: str = Field(alias="lastUpdate")
    cache_expiry: Optional[str] = Field(default=None, alias="cacheExpiry")
    data_source: str = Field(alias="dataSource")
    network_available: bool = Field(default=False, alias="roninNetworkAvailable")
    success_rate: str = Field(default="0.0%", alias="successRate")
    api_status: ApiStatus = Field(alias="apiStatus")
    supported_periods: List[str] = Field(alias="supportedPeriods")
    error: Optional[str] = Field(default=None, description="Failure message when apiStatus is error")


class TokenSnapshot(WireModel):
    tokens: List[TokenRecord] = Field(description="One record per registry token, in registry order")
    metadata: SnapshotMetadata
