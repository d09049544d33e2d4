"""
Token Info POJO - Token metadata from the OKX DEX market API
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TokenInfo:
    """POJO for token basic info"""

    tokenAddress: str
    symbol: str
    name: str
    decimals: Optional[int] = None

    @classmethod
    def fromRawData(cls, rawInfo: dict, tokenAddress: str) -> 'TokenInfo':
        decimals = rawInfo.get('decimal')
        return cls(
            tokenAddress=rawInfo.get('tokenContractAddress') or tokenAddress,
            symbol=rawInfo.get('tokenSymbol') or '',
            name=rawInfo.get('tokenName') or '',
            decimals=int(decimals) if decimals not in (None, '') else None
        )

    @classmethod
    def unknown(cls, tokenAddress: str) -> 'TokenInfo':
        """Fallback when the metadata lookup fails"""
        shortAddress = f"{tokenAddress[:6]}...{tokenAddress[-4:]}" if len(tokenAddress) > 12 else tokenAddress
        return cls(tokenAddress=tokenAddress, symbol=shortAddress, name='Unknown')
