from datetime import datetime, timezone
from typing import Optional

import pytz


class CommonUtil:
    """
    Common utility methods for time and number formatting
    """

    @staticmethod
    def getTimeframeSeconds(timeframe: str) -> int:
        """
        Convert timeframe string to seconds.

        Args:
            timeframe: Timeframe string (e.g., '1m', '5m', '15m', '1H', '4H', '1D', '1W')

        Returns:
            Number of seconds in the timeframe

        Raises:
            ValueError: If timeframe format is not recognized
        """
        tf = timeframe.lower().strip()

        units = {
            'm': 60,
            'h': 3600,
            'd': 86400,
            'w': 7 * 86400
        }

        if tf and tf[-1] in units:
            try:
                return int(tf[:-1]) * units[tf[-1]]
            except ValueError:
                raise ValueError(f"Invalid timeframe format: {timeframe}")

        # Numeric timeframes are minutes
        if tf.isdigit():
            return int(tf) * 60

        raise ValueError(f"Unsupported timeframe format: {timeframe}. "
                         f"Supported formats: 1m, 5m, 15m, 1H, 4H, 1D, 1W, etc.")

    @staticmethod
    def formatNumber(value: float) -> str:
        """Prices >= 1 keep 6 decimals, smaller prices keep 8"""
        if value >= 1:
            return f"{value:.6f}"
        return f"{value:.8f}"

    @staticmethod
    def formatUnixTime(unixTime: int, timezoneName: Optional[str] = None) -> str:
        """
        Format unix timestamp (seconds) to a readable string in the given timezone

        Args:
            unixTime: Unix timestamp in seconds
            timezoneName: pytz timezone name, UTC when omitted

        Returns:
            str: Formatted time string
        """
        try:
            tz = pytz.timezone(timezoneName) if timezoneName else pytz.utc
            dt = datetime.fromtimestamp(unixTime, tz=timezone.utc).astimezone(tz)
            return dt.strftime("%Y-%m-%d %H:%M:%S %Z")
        except (pytz.UnknownTimeZoneError, OverflowError, OSError, ValueError):
            return "Unknown time"

    @staticmethod
    def nowUnix() -> int:
        return int(datetime.now(timezone.utc).timestamp())
