from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..services.enrichment import iso_timestamp
from ..services.token_prices import TokenPriceService
from .tokens import get_token_price_service

router = APIRouter()


@router.get("/healthz")
async def health_check(service: TokenPriceService = Depends(get_token_price_service)) -> Dict[str, Any]:
    """Upstream provider status plus the state of the snapshot cache.

    A disabled provider is not a failure: prices degrade to synthetic ones.
    """
    provider = service.provider
    upstream = await provider.health_check()

    cache = service.cache
    has_snapshot = cache.has_entry
    age = cache.age()
    expires_at = cache.expires_at()
    return {
        "status": "healthy" if upstream.get("status") in ("healthy", "unavailable") else "degraded",
        "providers": {provider.name: upstream},
        "cache": {
            "ttl_seconds": cache.ttl_seconds,
            "has_snapshot": has_snapshot,
            "age_seconds": round(age, 3) if age is not None else None,
            "expires_at": iso_timestamp(expires_at) if expires_at is not None else None,
        },
        "manual_overrides": len(service.overrides),
    }
