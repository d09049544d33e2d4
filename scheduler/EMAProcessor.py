"""
EMAProcessor - Exponential moving average calculations

EMA CALCULATION:
- First (period - 1) candles: No EMA (not enough data)
- period-th candle: EMA = SMA of the first `period` closes
- Subsequent candles: EMA = (Close x Multiplier) + (Previous_EMA x (1 - Multiplier))
- Where Multiplier = 2 / (Period + 1)

All methods are pure: output depends only on the inputs.
"""

from typing import List, Optional, Sequence


class EMAProcessor:

    @staticmethod
    def getMultiplier(period: int) -> float:
        return 2.0 / (period + 1)

    @staticmethod
    def calculateEMAValue(previousEMA: float, currentPrice: float, period: int) -> float:
        """Single EMA step"""
        multiplier = EMAProcessor.getMultiplier(period)
        return float(currentPrice) * multiplier + previousEMA * (1 - multiplier)

    @staticmethod
    def calculateEMASeries(closes: Sequence[float], period: int) -> List[Optional[float]]:
        """
        Calculate the EMA series aligned with closes

        Args:
            closes: Closing prices in chronological order
            period: EMA period (>= 1)

        Returns:
            List of the same length as closes; None where the EMA is not yet available.
            All None when len(closes) < period.

        Raises:
            ValueError: if period < 1
        """
        if period < 1:
            raise ValueError(f"EMA period must be >= 1, got {period}")

        series: List[Optional[float]] = [None] * len(closes)
        if len(closes) < period:
            return series

        currentEMA = sum(float(close) for close in closes[:period]) / period
        series[period - 1] = currentEMA

        for i in range(period, len(closes)):
            currentEMA = EMAProcessor.calculateEMAValue(currentEMA, closes[i], period)
            series[i] = currentEMA

        return series

    @staticmethod
    def latestEMA(closes: Sequence[float], period: int) -> Optional[float]:
        """EMA at the last close, None when there is not enough data"""
        if not closes:
            return None
        return EMAProcessor.calculateEMASeries(closes, period)[-1]
