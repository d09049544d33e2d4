"""
Candle POJO class representing a single candle data point
"""
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Candle:
    """Represents a single candle/OHLCV data point. unixTime is the candle open time in ms."""

    tokenAddress: str
    unixTime: int
    openPrice: float
    highPrice: float
    lowPrice: float
    closePrice: float
    volume: float
    volumeUsd: float
    timeframe: str
    confirmed: bool = True

    @classmethod
    def fromRawData(cls, rawCandle: List, tokenAddress: str, timeframe: str) -> 'Candle':
        """
        Create Candle from an OKX DEX candle row

        Row layout: [ts, open, high, low, close, volume, volumeUsd, confirm]

        Raises:
            ValueError, TypeError, IndexError, KeyError: if the row is malformed
        """
        confirmed = True
        if len(rawCandle) > 7:
            confirmed = str(rawCandle[7]) == '1'

        return cls(
            tokenAddress=tokenAddress,
            unixTime=int(rawCandle[0]),
            openPrice=float(rawCandle[1]),
            highPrice=float(rawCandle[2]),
            lowPrice=float(rawCandle[3]),
            closePrice=float(rawCandle[4]),
            volume=float(rawCandle[5]),
            volumeUsd=float(rawCandle[6]),
            timeframe=timeframe,
            confirmed=confirmed
        )
