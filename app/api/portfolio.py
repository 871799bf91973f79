from fastapi import APIRouter, Depends, HTTPException

from ..services.manual_prices import UnknownTokenError
from ..services.portfolio_valuation import value_portfolio
from ..services.token_prices import TokenPriceService
from ..types import PortfolioValuation, PortfolioValuationRequest
from .tokens import get_token_price_service

router = APIRouter(prefix="/api/portfolio")


@router.post("/valuation", response_model=PortfolioValuation)
async def portfolio_valuation(
    payload: PortfolioValuationRequest,
    service: TokenPriceService = Depends(get_token_price_service),
) -> PortfolioValuation:
    """Value the given quantities against the current snapshot."""
    snapshot = await service.get_snapshot()
    try:
        return value_portfolio(snapshot.tokens, payload.holdings, payload.period)
    except UnknownTokenError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
