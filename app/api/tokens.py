import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ..services.manual_prices import UnknownTokenError
from ..services.token_prices import TokenPriceService
from ..types import OverridesResponse, PriceOverrideRequest, TokenSnapshot

router = APIRouter(prefix="/api/tokens")
_logger = logging.getLogger(__name__)


def get_token_price_service(request: Request) -> TokenPriceService:
    """Service instance owned by the application (see ``app.main``)."""
    return request.app.state.token_prices


@router.get("", response_model=TokenSnapshot, response_model_exclude_none=True)
async def get_tokens(service: TokenPriceService = Depends(get_token_price_service)) -> TokenSnapshot:
    """Current price snapshot for every tracked token.

    Always answers 200; upstream trouble only degrades the payload
    (see ``metadata.apiStatus``).
    """
    return await service.get_snapshot()


@router.post("/refresh", response_model=TokenSnapshot, response_model_exclude_none=True)
async def refresh_tokens(service: TokenPriceService = Depends(get_token_price_service)) -> TokenSnapshot:
    """Discard the cached snapshot and rebuild it."""
    return await service.refresh()


@router.get("/overrides", response_model=OverridesResponse)
async def list_overrides(service: TokenPriceService = Depends(get_token_price_service)) -> OverridesResponse:
    return OverridesResponse(prices=service.overrides.by_symbol())


@router.put("/overrides", response_model=OverridesResponse)
async def set_overrides(
    payload: PriceOverrideRequest,
    service: TokenPriceService = Depends(get_token_price_service),
) -> OverridesResponse:
    """Pin manual USD prices; the next snapshot reflects them."""
    try:
        prices = service.overrides.set_prices(payload.prices)
    except UnknownTokenError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    _logger.info("Manual prices set for %s", ", ".join(sorted(payload.prices)))
    service.invalidate()
    return OverridesResponse(prices=prices)


@router.delete("/overrides", response_model=OverridesResponse)
async def clear_overrides(service: TokenPriceService = Depends(get_token_price_service)) -> OverridesResponse:
    service.overrides.clear()
    service.invalidate()
    return OverridesResponse(prices={})


@router.delete("/overrides/{key}", response_model=OverridesResponse)
async def remove_override(
    key: str,
    service: TokenPriceService = Depends(get_token_price_service),
) -> OverridesResponse:
    try:
        removed = service.overrides.remove(key)
    except UnknownTokenError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    if removed:
        service.invalidate()
    return OverridesResponse(prices=service.overrides.by_symbol())
