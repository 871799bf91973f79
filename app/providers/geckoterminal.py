import time
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .base import MarketDataProvider


class GeckoTerminalProvider(MarketDataProvider):
    """GeckoTerminal public API v2 provider for DEX token data"""

    name = "geckoterminal"

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.geckoterminal_base_url).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_seconds
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": settings.user_agent,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._build_headers(),
            timeout=self.timeout_s,
            transport=self._transport,
        )

    async def ready(self) -> bool:
        return settings.enable_geckoterminal  # public API, no key required

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "Provider disabled"
            }

        started = time.perf_counter()
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/networks", params={"page": 1})
                response.raise_for_status()
            return {"status": "healthy", "latency_ms": int((time.perf_counter() - started) * 1000)}
        except Exception as e:
            return {"status": "error", "reason": str(e)}

    async def list_networks(self) -> List[Dict[str, Any]]:
        """Get the first page of networks indexed by GeckoTerminal"""
        async with self._client() as client:
            response = await client.get(f"{self.base_url}/networks")
            response.raise_for_status()
            payload = response.json()

        networks = payload.get("data") if isinstance(payload, dict) else None
        return networks if isinstance(networks, list) else []

    async def get_token(self, network: str, address: str) -> Optional[Dict[str, Any]]:
        """Get token market data by contract address on a network"""
        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/networks/{network}/tokens/{address.lower()}"
            )

            if response.status_code == 404:
                return None  # Token not indexed on this network

            response.raise_for_status()
            payload = response.json()

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not isinstance(data.get("attributes"), dict):
            return None
        return data

    async def search_pools(self, query: str) -> List[Dict[str, Any]]:
        if not query:
            return []

        async with self._client() as client:
            response = await client.get(
                f"{self.base_url}/search/pools",
                params={"query": query},
            )
            response.raise_for_status()
            payload = response.json()

        pools = payload.get("data") if isinstance(payload, dict) else None
        return pools if isinstance(pools, list) else []
