"""
CandleResponse - Result of one market-data candle fetch
"""
from dataclasses import dataclass, field
from typing import List, Optional
from .Candle import Candle


@dataclass
class CandleResponse:
    """Closed candles in ascending unixTime order, or the reason the fetch failed"""

    success: bool
    candles: List[Candle] = field(default_factory=list)
    latestTime: Optional[int] = None
    candleCount: int = 0
    error: Optional[str] = None

    @property
    def oldestTime(self) -> Optional[int]:
        return self.candles[0].unixTime if self.candles else None

    def isEmpty(self) -> bool:
        return not self.candles

    def hasError(self) -> bool:
        return not self.success or self.error is not None

    @classmethod
    def successResponse(cls, candles: List[Candle]) -> 'CandleResponse':
        # Callers hand over already normalized candles
        return cls(
            success=True,
            candles=list(candles),
            latestTime=candles[-1].unixTime if candles else None,
            candleCount=len(candles)
        )

    @classmethod
    def errorResponse(cls, error: str) -> 'CandleResponse':
        return cls(success=False, error=error)
