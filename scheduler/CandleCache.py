"""
CandleCache - Per-token sliding window of the most recent closed candles

Each token owns a fixed capacity window (default 144 candles) kept in
ascending unixTime order. The window is seeded with a bulk fetch and then
advanced one candle at a time: append newest, evict oldest.
"""

from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence

from logs.logger import get_logger
from models.Candle import Candle
import constants.EMAConstants as EMAConstants

logger = get_logger(__name__)


class CacheUpdateStatus(Enum):
    INITIALIZED = "initialized"
    APPENDED = "appended"
    STALE = "stale"          # candle not newer than the cached newest
    NOT_READY = "not_ready"  # not enough candles / token not initialized


class CandleCache:

    def __init__(self, windowSize: int = EMAConstants.DEFAULT_WINDOW_SIZE):
        if windowSize < 1:
            raise ValueError(f"windowSize must be >= 1, got {windowSize}")
        self.windowSize = windowSize
        self.windows: Dict[str, Deque[Candle]] = {}

    def initialize(self, tokenAddress: str, candles: Sequence[Candle]) -> CacheUpdateStatus:
        """
        Seed the window for a token from a bulk fetch

        Args:
            tokenAddress: Token contract address
            candles: Candles in ascending unixTime order

        Returns:
            INITIALIZED when at least windowSize candles were supplied (only the
            newest windowSize are kept), NOT_READY otherwise. On NOT_READY any
            existing window for the token is left untouched.
        """
        if len(candles) < self.windowSize:
            logger.info(f"CANDLE CACHE :: {tokenAddress} not ready: {len(candles)}/{self.windowSize} candles")
            return CacheUpdateStatus.NOT_READY

        for previous, current in zip(candles, candles[1:]):
            if current.unixTime <= previous.unixTime:
                raise ValueError(f"Candles for {tokenAddress} are not in strictly ascending order")

        self.windows[tokenAddress] = deque(candles[-self.windowSize:], maxlen=self.windowSize)
        return CacheUpdateStatus.INITIALIZED

    def appendLatest(self, tokenAddress: str, candle: Candle) -> CacheUpdateStatus:
        """
        Append one candle, evicting the oldest

        A candle that is not strictly newer than the cached newest one is a no-op
        (STALE). Repeated polls of the same candle are expected.
        """
        window = self.windows.get(tokenAddress)
        if window is None:
            return CacheUpdateStatus.NOT_READY

        if candle.unixTime <= window[-1].unixTime:
            return CacheUpdateStatus.STALE

        # deque(maxlen) drops exactly one candle from the left
        window.append(candle)
        return CacheUpdateStatus.APPENDED

    def appendNewer(self, tokenAddress: str, candles: Sequence[Candle]) -> int:
        """Append every candle newer than the cached newest, in order. Returns the number appended."""
        appended = 0
        for candle in candles:
            if self.appendLatest(tokenAddress, candle) == CacheUpdateStatus.APPENDED:
                appended += 1
        return appended

    def snapshot(self, tokenAddress: str) -> Optional[List[Candle]]:
        """Copy of the window in ascending order, None when the token is unknown"""
        window = self.windows.get(tokenAddress)
        if window is None:
            return None
        return list(window)

    def isReady(self, tokenAddress: str) -> bool:
        return tokenAddress in self.windows

    def latestTimestamp(self, tokenAddress: str) -> Optional[int]:
        window = self.windows.get(tokenAddress)
        if not window:
            return None
        return window[-1].unixTime

    def evict(self, tokenAddress: str) -> None:
        self.windows.pop(tokenAddress, None)

    def trackedTokens(self) -> List[str]:
        return list(self.windows.keys())
