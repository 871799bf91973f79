"""Service layer helpers"""

from .synthetic import Horizon, PriceChanges, SyntheticPriceGenerator
from .token_registry import TOKEN_REGISTRY, TokenCategory, TokenDescriptor, find_token

__all__ = [
    "Horizon",
    "PriceChanges",
    "SyntheticPriceGenerator",
    "TOKEN_REGISTRY",
    "TokenCategory",
    "TokenDescriptor",
    "find_token",
]
