from fastapi import APIRouter, Depends, HTTPException

from ..services.token_prices import TokenPriceService
from ..types import AlertsResponse
from .tokens import get_token_price_service

router = APIRouter(prefix="/api/alerts")


@router.get("", response_model=AlertsResponse)
async def list_alerts(service: TokenPriceService = Depends(get_token_price_service)) -> AlertsResponse:
    """Recent price-rise alerts, newest first."""
    return AlertsResponse(alerts=service.alerts.alerts())


@router.delete("/{alert_id}", response_model=AlertsResponse)
async def dismiss_alert(
    alert_id: str,
    service: TokenPriceService = Depends(get_token_price_service),
) -> AlertsResponse:
    if not service.alerts.dismiss(alert_id):
        raise HTTPException(status_code=404, detail=f"Alert '{alert_id}' not found")
    return AlertsResponse(alerts=service.alerts.alerts())
