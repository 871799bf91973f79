"""
Static registry of the tracked Ronin game tokens.

The order of ``TOKEN_REGISTRY`` is significant: responses preserve it and the
best-swap tie break relies on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class TokenCategory(str, Enum):
    """Closed set of token classifications."""

    UTILITY = "utility"
    RESOURCE = "resource"
    METAL = "metal"
    ORGANIC = "organic"
    CRAFTED = "crafted"
    GAS = "gas"
    ENERGY = "energy"
    CHEMICAL = "chemical"
    EXPLOSIVE = "explosive"


@dataclass(frozen=True)
class TokenDescriptor:
    """Identity and classification of a tracked token."""

    name: str
    symbol: str
    contract: str
    category: TokenCategory
    decimals: int = 18

    @property
    def address(self) -> str:
        """Contract address in the lowercase form the aggregator expects."""
        return self.contract.lower()


def _token(name: str, symbol: str, contract: str, category: TokenCategory) -> TokenDescriptor:
    return TokenDescriptor(name=name, symbol=symbol, contract=contract, category=category)


TOKEN_REGISTRY: Tuple[TokenDescriptor, ...] = (
    _token("COIN", "COIN", "0x7DC167E270D5EF683CEAF4AFCDF2EFBDD667A9A7", TokenCategory.UTILITY),
    _token("EARTH", "EARTH", "0xC89384CD2970C916DC75DA8E11524EBE6D77FA07", TokenCategory.RESOURCE),
    _token("WATER", "WATER", "0x57A8EB80D6813AEEEB9C8E770011C016F980D581", TokenCategory.RESOURCE),
    _token("FIRE", "FIRE", "0x0E8EDC6F5CAC5DCAE036AD77FC0DE4E72404E2FB", TokenCategory.RESOURCE),
    _token("MUD", "MUD", "0x1CC30B8FC5D4480B1740B1676E3636FB1270C524", TokenCategory.RESOURCE),
    _token("CLAY", "CLAY", "0xA1AF0DFA0884C7433F82BBA89CB36E5B7B90A5C1", TokenCategory.RESOURCE),
    _token("SAND", "SAND", "0xAC861E0D31080E3B491747A968DF567F81BC8605", TokenCategory.RESOURCE),
    _token("COPPER", "COPPER", "0x64AC88024E1BCC49E3EE145C165914F58998EC9B", TokenCategory.METAL),
    _token("SEAWATER", "SEAWATER", "0x84A162DFA5D818151BD8C8E804DAE8CD96A0E15D", TokenCategory.RESOURCE),
    _token("ALGAE", "ALGAE", "0x9ACDDDE6564924042E8ACFD5BD137374AF9DFAE5", TokenCategory.ORGANIC),
    _token("CERAMICS", "CERAMICS", "0x581E54C7A521519E98D256D39852E4C214CAD697", TokenCategory.CRAFTED),
    _token("OXYGEN", "O2", "0xCF2BD4CDDCE432090D6A9725BEC7A6AED77B41F0", TokenCategory.GAS),
    _token("STONE", "STONE", "0xE7AD0FD3C832769437CC1240BFFE5DFF94FC9CF1", TokenCategory.RESOURCE),
    _token("HEAT", "HEAT", "0x415363B5C4600AA776B6C39FED866DEE15179AB8", TokenCategory.ENERGY),
    _token("LAVA", "LAVA", "0x78EB25B148995A4EE373E65E93474EF0ED0FCC9A", TokenCategory.RESOURCE),
    _token("GAS", "GAS", "0x91720484FC3569AF94D5049835048C83A1D32FA2", TokenCategory.GAS),
    _token("CEMENT", "CEMENT", "0x04A581CF47CCC244A5AB715C7A105D63BBCB57CA", TokenCategory.CRAFTED),
    _token("GLASS", "GLASS", "0xF7604075A0ED6B4F6537BA2BAB19F1F44F5E7AA4", TokenCategory.CRAFTED),
    _token("STEAM", "STEAM", "0x5F146DFF3B6A3E89188A3953D621637452BA4407", TokenCategory.GAS),
    _token("STEEL", "STEEL", "0x798239FEE069E2B5B3C58978AEA92A3D0E16950C", TokenCategory.METAL),
    _token("FUEL", "FUEL", "0x677203F3FCC63FE85A5ABC8E6479A88DEB86717B", TokenCategory.ENERGY),
    _token("ACID", "ACID", "0xCD0C9F170E395CA1ADC16AE9AE8107D50273E2E8", TokenCategory.CHEMICAL),
    _token("SULFUR", "SULFUR", "0x85120A3D815E95FB8D68129593084BF97905F543", TokenCategory.CHEMICAL),
    _token("ENERGY", "ENERGY", "0xA3F0F293AEE7CE8B4A3807BF9CC07942DA4E51E8", TokenCategory.ENERGY),
    _token("SCREWS", "SCREWS", "0xCC34D8E6A6F61358219D8E8A967ED7F191638449", TokenCategory.CRAFTED),
    _token("OIL", "OIL", "0x27908A7052980B7537BCB72757CD59B57D5FAE0B", TokenCategory.ENERGY),
    _token("PLASTICS", "PLASTICS", "0x8EABB6A3A05AF9FB514482A677B12008A2ED6422", TokenCategory.CRAFTED),
    _token("FIBERGLASS", "FIBERGLASS", "0xAB6B550C661862E637249D55207125EE6AFE0AAA", TokenCategory.CRAFTED),
    _token("HYDROGEN", "H2", "0xB7D11863D0D9C39764F981A95AB8AF0AED714C48", TokenCategory.GAS),
    _token("DYNAMITE", "DYNAMITE", "0x2918938CFDE254CC76B68A4F6992927EE779104A", TokenCategory.EXPLOSIVE),
)

# Denomination token for "price in COIN" conversions
COIN_SYMBOL = "COIN"

_BY_SYMBOL: Dict[str, TokenDescriptor] = {token.symbol.upper(): token for token in TOKEN_REGISTRY}
_BY_CONTRACT: Dict[str, TokenDescriptor] = {token.contract.lower(): token for token in TOKEN_REGISTRY}


def find_token(key: str, registry: Optional[Tuple[TokenDescriptor, ...]] = None) -> Optional[TokenDescriptor]:
    """Look up a token by symbol or contract address (both case-insensitive)."""

    if not key:
        return None
    cleaned = key.strip()
    if registry is None:
        return _BY_CONTRACT.get(cleaned.lower()) or _BY_SYMBOL.get(cleaned.upper())

    for token in registry:
        if token.contract.lower() == cleaned.lower() or token.symbol.upper() == cleaned.upper():
            return token
    return None


__all__ = [
    "TokenCategory",
    "TokenDescriptor",
    "TOKEN_REGISTRY",
    "COIN_SYMBOL",
    "find_token",
]
