"""
SignalDetector - Bullish EMA alignment transition detection

Per token state machine:

    UNINITIALIZED --(cache seeded with a full window)--> READY

While READY every cycle evaluates EMA21 / EMA55 / EMA144 at the newest closed
candle:

    isAligned = ema21 > ema55 and ema55 > ema144      (strict, ties are not aligned)

A signal fires only when the previous evaluation was explicitly False and the
current one is True. The first evaluation after seeding has no previous state
and never fires, so tokens that are already aligned at startup stay quiet.
Each evaluation is recorded against the candle timestamp; evaluating the same
candle twice is a no-op.

The detector is the only owner of the candle cache and the alignment history.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from logs.logger import get_logger
from models.AlignmentState import AlignmentState
from models.Candle import Candle
from models.Signal import BullishAlignmentSignal
from scheduler.CandleCache import CandleCache, CacheUpdateStatus
from scheduler.EMAProcessor import EMAProcessor
from utils.CommonUtil import CommonUtil
import constants.EMAConstants as EMAConstants

logger = get_logger(__name__)


class DetectionStatus(Enum):
    SIGNAL = "signal"
    NO_SIGNAL = "no_signal"
    SKIPPED_NOT_READY = "skipped_not_ready"
    SKIPPED_INSUFFICIENT_DATA = "skipped_insufficient_data"
    SKIPPED_ALREADY_EVALUATED = "skipped_already_evaluated"


@dataclass(frozen=True)
class DetectionResult:
    tokenAddress: str
    status: DetectionStatus
    isAligned: Optional[bool] = None
    previousAlignment: Optional[bool] = None
    ema21: Optional[float] = None
    ema55: Optional[float] = None
    ema144: Optional[float] = None
    candleTimestamp: Optional[int] = None
    signal: Optional[BullishAlignmentSignal] = None

    @property
    def hasSignal(self) -> bool:
        return self.signal is not None


class SignalDetector:

    def __init__(self, windowSize: int = EMAConstants.DEFAULT_WINDOW_SIZE,
                 historySize: int = EMAConstants.DEFAULT_ALIGNMENT_HISTORY_SIZE,
                 periods: Sequence[int] = EMAConstants.EMA_PERIODS):
        if len(periods) != 3:
            raise ValueError(f"Expected short, medium and long EMA periods, got {periods}")
        if windowSize < max(periods):
            raise ValueError(f"windowSize {windowSize} cannot seed EMA{max(periods)}")
        if historySize < 1:
            raise ValueError(f"historySize must be >= 1, got {historySize}")

        self.shortPeriod, self.mediumPeriod, self.longPeriod = periods
        self.historySize = historySize
        self.candleCache = CandleCache(windowSize)
        self.alignmentStates: Dict[str, AlignmentState] = {}

    # Cache operations

    def initializeToken(self, tokenAddress: str, candles: Sequence[Candle]) -> CacheUpdateStatus:
        status = self.candleCache.initialize(tokenAddress, candles)
        if status == CacheUpdateStatus.INITIALIZED:
            # Reseeding after a gap keeps the alignment history
            self.alignmentStates.setdefault(tokenAddress, AlignmentState(tokenAddress, self.historySize))
        return status

    def appendCandles(self, tokenAddress: str, candles: Sequence[Candle]) -> int:
        return self.candleCache.appendNewer(tokenAddress, candles)

    def isReady(self, tokenAddress: str) -> bool:
        return self.candleCache.isReady(tokenAddress)

    def latestTimestamp(self, tokenAddress: str) -> Optional[int]:
        return self.candleCache.latestTimestamp(tokenAddress)

    def snapshot(self, tokenAddress: str) -> Optional[List[Candle]]:
        return self.candleCache.snapshot(tokenAddress)

    def lastAlignment(self, tokenAddress: str) -> Optional[bool]:
        state = self.alignmentStates.get(tokenAddress)
        return state.lastAlignment() if state else None

    def alignmentHistory(self, tokenAddress: str):
        state = self.alignmentStates.get(tokenAddress)
        return state.entries() if state else []

    # Detection

    def evaluate(self, tokenAddress: str, detectedAt: Optional[int] = None) -> DetectionResult:
        """
        Evaluate the current window of a token and decide whether a new signal fires

        Args:
            tokenAddress: Token contract address
            detectedAt: Unix seconds stamped on an emitted signal (defaults to now)

        Returns:
            DetectionResult; result.signal is set only on a False -> True transition
        """
        candles = self.candleCache.snapshot(tokenAddress)
        if candles is None:
            return DetectionResult(tokenAddress, DetectionStatus.SKIPPED_NOT_READY)

        if len(candles) < self.longPeriod:
            return DetectionResult(tokenAddress, DetectionStatus.SKIPPED_INSUFFICIENT_DATA)

        latestCandle = candles[-1]
        alignmentState = self.alignmentStates.setdefault(
            tokenAddress, AlignmentState(tokenAddress, self.historySize)
        )

        if alignmentState.wasEvaluated(latestCandle.unixTime):
            return DetectionResult(
                tokenAddress,
                DetectionStatus.SKIPPED_ALREADY_EVALUATED,
                isAligned=alignmentState.lastAlignment(),
                candleTimestamp=latestCandle.unixTime
            )

        closes = [candle.closePrice for candle in candles]
        ema21 = EMAProcessor.latestEMA(closes, self.shortPeriod)
        ema55 = EMAProcessor.latestEMA(closes, self.mediumPeriod)
        ema144 = EMAProcessor.latestEMA(closes, self.longPeriod)

        if ema21 is None or ema55 is None or ema144 is None:
            return DetectionResult(tokenAddress, DetectionStatus.SKIPPED_INSUFFICIENT_DATA)

        isAligned = self.isBullishAlignment(ema21, ema55, ema144)
        previousAlignment = alignmentState.lastAlignment()

        signal = None
        if previousAlignment is False and isAligned:
            signal = BullishAlignmentSignal(
                tokenAddress=tokenAddress,
                currentPrice=latestCandle.closePrice,
                ema21=ema21,
                ema55=ema55,
                ema144=ema144,
                candleTimestamp=latestCandle.unixTime,
                detectedAt=detectedAt if detectedAt is not None else CommonUtil.nowUnix()
            )
            logger.info(f"SIGNAL DETECTOR :: Bullish alignment formed for {tokenAddress} at candle {latestCandle.unixTime}")

        alignmentState.record(latestCandle.unixTime, isAligned)

        logger.debug(f"SIGNAL DETECTOR :: {tokenAddress}: EMA21={ema21:.8f}, EMA55={ema55:.8f}, "
                     f"EMA144={ema144:.8f}, aligned={isAligned}, previous={previousAlignment}")

        return DetectionResult(
            tokenAddress=tokenAddress,
            status=DetectionStatus.SIGNAL if signal else DetectionStatus.NO_SIGNAL,
            isAligned=isAligned,
            previousAlignment=previousAlignment,
            ema21=ema21,
            ema55=ema55,
            ema144=ema144,
            candleTimestamp=latestCandle.unixTime,
            signal=signal
        )

    @staticmethod
    def isBullishAlignment(ema21: float, ema55: float, ema144: float) -> bool:
        return ema21 > ema55 and ema55 > ema144
