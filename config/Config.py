"""
Config - Environment driven configuration

Values are read once from the process environment (and a local .env file if
present). Required credentials are checked by validate() before the
scheduler starts; a missing value is fatal at startup.
"""

import os
from typing import Dict, List, Optional

from dotenv import load_dotenv

import constants.EMAConstants as EMAConstants
from config.TrackedTokens import DEFAULT_TRACKED_TOKENS, parseTrackedTokens
from utils.Exceptions import ConfigurationError


def _getInt(environ: Dict[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if value is None or str(value).strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{value}'")


def _getFloat(environ: Dict[str, str], key: str, default: float) -> float:
    value = environ.get(key)
    if value is None or str(value).strip() == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{value}'")


def _getStr(environ: Dict[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = environ.get(key)
    if value is None or str(value).strip() == '':
        return default
    return str(value).strip()


class Config:
    """Application configuration"""

    REQUIRED_KEYS = [
        'OKX_API_KEY',
        'OKX_SECRET_KEY',
        'OKX_PASSPHRASE',
        'TELEGRAM_BOT_TOKEN',
        'TELEGRAM_CHAT_ID',
    ]

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        if environ is None:
            environ = os.environ

        # OKX DEX market API
        self.OKX_API_KEY = _getStr(environ, 'OKX_API_KEY')
        self.OKX_SECRET_KEY = _getStr(environ, 'OKX_SECRET_KEY')
        self.OKX_PASSPHRASE = _getStr(environ, 'OKX_PASSPHRASE')
        self.OKX_PROJECT_ID = _getStr(environ, 'OKX_PROJECT_ID')
        self.OKX_BASE_URL = _getStr(environ, 'OKX_BASE_URL', 'https://web3.okx.com')
        self.CHAIN_INDEX = _getStr(environ, 'CHAIN_INDEX', '56')

        # Telegram
        self.TELEGRAM_BOT_TOKEN = _getStr(environ, 'TELEGRAM_BOT_TOKEN')
        self.TELEGRAM_CHAT_ID = _getStr(environ, 'TELEGRAM_CHAT_ID')

        # Candles and detection
        self.CANDLE_GRANULARITY = _getStr(environ, 'CANDLE_GRANULARITY', '5m')
        self.CANDLE_WINDOW_SIZE = _getInt(environ, 'CANDLE_WINDOW_SIZE', EMAConstants.DEFAULT_WINDOW_SIZE)
        self.ALIGNMENT_HISTORY_SIZE = _getInt(environ, 'ALIGNMENT_HISTORY_SIZE', EMAConstants.DEFAULT_ALIGNMENT_HISTORY_SIZE)

        # Scheduling and I/O limits
        self.POLL_INTERVAL_MINUTES = _getInt(environ, 'POLL_INTERVAL_MINUTES', 5)
        self.POLL_ALIGN_SECOND = _getInt(environ, 'POLL_ALIGN_SECOND', -1)
        self.REQUEST_DELAY_SECONDS = _getFloat(environ, 'REQUEST_DELAY_SECONDS', 0.5)
        self.REQUEST_TIMEOUT_SECONDS = _getFloat(environ, 'REQUEST_TIMEOUT_SECONDS', 30)
        self.METADATA_RETRY_COUNT = _getInt(environ, 'METADATA_RETRY_COUNT', 2)

        # Display
        self.TIMEZONE = _getStr(environ, 'TIMEZONE', 'Asia/Shanghai')

        trackedTokens = parseTrackedTokens(_getStr(environ, 'TRACKED_TOKENS', ''))
        self.TRACKED_TOKENS: List[str] = trackedTokens or list(DEFAULT_TRACKED_TOKENS)

    def getMissingKeys(self) -> List[str]:
        return [key for key in self.REQUIRED_KEYS if not getattr(self, key)]

    def validate(self) -> None:
        """
        Validate configuration before scheduling starts

        Raises:
            ConfigurationError: if a required value is missing or a value is out of range
        """
        missingKeys = self.getMissingKeys()
        if missingKeys:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missingKeys)}", missingKeys
            )

        if self.CANDLE_WINDOW_SIZE < EMAConstants.EMA_LONG:
            raise ConfigurationError(
                f"CANDLE_WINDOW_SIZE must be at least {EMAConstants.EMA_LONG}, got {self.CANDLE_WINDOW_SIZE}"
            )
        if self.POLL_INTERVAL_MINUTES < 1:
            raise ConfigurationError("POLL_INTERVAL_MINUTES must be at least 1")
        if self.POLL_ALIGN_SECOND > 59:
            raise ConfigurationError("POLL_ALIGN_SECOND must be between 0 and 59")
        if self.isAlignedSchedule and 60 % self.POLL_INTERVAL_MINUTES != 0:
            # cron minute="*/N" only ticks evenly when N divides the hour
            raise ConfigurationError(
                f"POLL_INTERVAL_MINUTES must divide 60 when POLL_ALIGN_SECOND is set, got {self.POLL_INTERVAL_MINUTES}"
            )
        if self.ALIGNMENT_HISTORY_SIZE < 1:
            raise ConfigurationError("ALIGNMENT_HISTORY_SIZE must be at least 1")
        if not self.TRACKED_TOKENS:
            raise ConfigurationError("No tracked tokens configured")

    @property
    def isAlignedSchedule(self) -> bool:
        return self.POLL_ALIGN_SECOND >= 0


_config: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide configuration, loading .env on first use"""
    global _config
    if _config is None:
        load_dotenv()
        _config = Config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
