from .portfolio import HoldingValuation, PortfolioValuation
from .requests import PortfolioValuationRequest, PriceOverrideRequest
from .responses import AlertsResponse, AlertType, OverridesResponse, PriceAlert
from .tokens import (
    NO_SWAP,
    ApiStatus,
    BestSwapSet,
    DataSource,
    PriceChangeSet,
    Recommendation,
    SnapshotMetadata,
    TokenRecord,
    TokenSnapshot,
)

__all__ = [
    "NO_SWAP",
    "ApiStatus",
    "BestSwapSet",
    "DataSource",
    "PriceChangeSet",
    "Recommendation",
    "SnapshotMetadata",
    "TokenRecord",
    "TokenSnapshot",
    "HoldingValuation",
    "PortfolioValuation",
    "PortfolioValuationRequest",
    "PriceOverrideRequest",
    "AlertsResponse",
    "AlertType",
    "OverridesResponse",
    "PriceAlert",
]
