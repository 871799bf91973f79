from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class MarketDataProvider(Provider):
    """Provider for DEX market data (networks, tokens, pools)"""

    @abstractmethod
    async def list_networks(self) -> List[Dict[str, Any]]:
        """Get the networks indexed by the aggregator"""
        pass

    @abstractmethod
    async def get_token(self, network: str, address: str) -> Optional[Dict[str, Any]]:
        """Get token market data by contract address, None when unknown"""
        pass

    @abstractmethod
    async def search_pools(self, query: str) -> List[Dict[str, Any]]:
        """Full-text pool search"""
        pass
