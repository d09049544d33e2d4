"""
Exceptions raised by the monitor
"""


class MonitorError(Exception):
    """Base class for all monitor errors"""


class ConfigurationError(MonitorError):
    """Required configuration is missing or invalid. Fatal at startup."""

    def __init__(self, message: str, missingKeys=None):
        super().__init__(message)
        self.missingKeys = list(missingKeys or [])


class MarketDataError(MonitorError):
    """Upstream market-data API returned an error or a malformed payload"""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.code = code
