"""
Signal POJO - Emitted when a token newly enters bullish EMA alignment
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class BullishAlignmentSignal:
    """EMA21 > EMA55 > EMA144 formed on the candle at candleTimestamp (ms)"""

    tokenAddress: str
    currentPrice: float
    ema21: float
    ema55: float
    ema144: float
    candleTimestamp: int
    detectedAt: int  # unix seconds
