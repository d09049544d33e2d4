import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from config.Config import Config
from logs.logger import get_logger
from models.Signal import BullishAlignmentSignal
from models.TokenInfo import TokenInfo
from notification.handlers.BullishAlignmentNotification import BullishAlignmentNotification
from notification.NotificationManager import NotificationService
from scheduler.CandleCache import CacheUpdateStatus
from scheduler.SchedulerConstants import SchedulerDefaults
from scheduler.SignalDetector import DetectionResult, SignalDetector
from services.OKXDexServiceHandler import OKXDexServiceHandler
from utils.CommonUtil import CommonUtil

logger = get_logger(__name__)


@dataclass
class CycleSummary:
    startedAt: int
    tokensChecked: int = 0
    signals: List[BullishAlignmentSignal] = field(default_factory=list)
    failedTokens: List[str] = field(default_factory=list)
    notReadyTokens: List[str] = field(default_factory=list)
    notificationsSent: int = 0
    finishedAt: Optional[int] = None


class SignalScheduler:
    """
    Runs one detection cycle over the tracked tokens.

    Tokens are processed one at a time in configured order. For each token the
    candle cache is updated first, then detection runs, then any alert is sent.
    A failure on one token is logged and the cycle moves on. Only one cycle can
    run at a time; an overlapping call returns None without doing anything.
    """

    def __init__(self, config: Config, marketDataService: OKXDexServiceHandler,
                 notificationService: NotificationService,
                 signalDetector: Optional[SignalDetector] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.marketDataService = marketDataService
        self.notificationService = notificationService
        self.signalDetector = signalDetector or SignalDetector(
            windowSize=config.CANDLE_WINDOW_SIZE,
            historySize=config.ALIGNMENT_HISTORY_SIZE
        )
        self.sleep = sleep
        self.trackedTokens = list(config.TRACKED_TOKENS)
        self.tokenInfoCache: Dict[str, TokenInfo] = {}
        self.cycleLock = threading.Lock()
        self.timeframeMs = CommonUtil.getTimeframeSeconds(config.CANDLE_GRANULARITY) * 1000
        logger.info(f"SIGNAL SCHEDULER :: Initialized with {len(self.trackedTokens)} tokens, "
                    f"window {self.signalDetector.candleCache.windowSize}, bar {config.CANDLE_GRANULARITY}")

    def runCycle(self) -> Optional[CycleSummary]:
        if not self.cycleLock.acquire(blocking=False):
            logger.warning("SIGNAL SCHEDULER :: Previous cycle still running, skipping this tick")
            return None

        try:
            summary = CycleSummary(startedAt=CommonUtil.nowUnix())
            logger.info(f"SIGNAL SCHEDULER :: Cycle started for {len(self.trackedTokens)} tokens")

            for index, tokenAddress in enumerate(self.trackedTokens):
                summary.tokensChecked += 1
                try:
                    self.processToken(tokenAddress, summary)
                except Exception as e:
                    logger.error(f"SIGNAL SCHEDULER :: Error processing {tokenAddress}: {e}", exc_info=True)
                    summary.failedTokens.append(tokenAddress)

                # Rate limiting between tokens
                if index < len(self.trackedTokens) - 1 and self.config.REQUEST_DELAY_SECONDS > 0:
                    self.sleep(self.config.REQUEST_DELAY_SECONDS)

            summary.finishedAt = CommonUtil.nowUnix()
            logger.info(f"SIGNAL SCHEDULER :: Cycle completed: {summary.tokensChecked} checked, "
                        f"{len(summary.signals)} signals, {summary.notificationsSent} sent, "
                        f"{len(summary.failedTokens)} failed, {len(summary.notReadyTokens)} not ready")
            return summary

        finally:
            self.cycleLock.release()

    def processToken(self, tokenAddress: str, summary: CycleSummary) -> None:
        if not self.updateCandles(tokenAddress, summary):
            return

        result = self.signalDetector.evaluate(tokenAddress)
        self.logDetection(result)

        if result.signal:
            summary.signals.append(result.signal)
            if self.sendSignal(result.signal):
                summary.notificationsSent += 1

    def updateCandles(self, tokenAddress: str, summary: CycleSummary) -> bool:
        """
        Bring the cached window up to date. Returns False when the token cannot be
        evaluated this cycle.
        """
        if not self.signalDetector.isReady(tokenAddress):
            return self.seedCandles(tokenAddress, summary)

        candleResponse = self.marketDataService.getCandles(
            tokenAddress, self.config.CANDLE_GRANULARITY, SchedulerDefaults.INCREMENTAL_FETCH_LIMIT
        )
        if candleResponse.hasError():
            logger.warning(f"SIGNAL SCHEDULER :: Candle update failed for {tokenAddress}: {candleResponse.error}")
            summary.failedTokens.append(tokenAddress)
            return False

        if candleResponse.isEmpty():
            logger.info(f"SIGNAL SCHEDULER :: No closed candles returned for {tokenAddress}")
            return True

        cachedLatest = self.signalDetector.latestTimestamp(tokenAddress)
        if cachedLatest is not None and candleResponse.oldestTime > cachedLatest + self.timeframeMs:
            # Fetched candles do not overlap the cache; missing candles in between
            logger.info(f"SIGNAL SCHEDULER :: Gap detected for {tokenAddress}, reseeding window")
            return self.seedCandles(tokenAddress, summary)

        appended = self.signalDetector.appendCandles(tokenAddress, candleResponse.candles)
        if appended == 0:
            logger.debug(f"SIGNAL SCHEDULER :: No new candle for {tokenAddress} this cycle")
        return True

    def seedCandles(self, tokenAddress: str, summary: CycleSummary) -> bool:
        windowSize = self.signalDetector.candleCache.windowSize
        candleResponse = self.marketDataService.getCandles(
            tokenAddress, self.config.CANDLE_GRANULARITY, windowSize + SchedulerDefaults.SEED_FETCH_EXTRA
        )
        if candleResponse.hasError():
            logger.warning(f"SIGNAL SCHEDULER :: Initial fetch failed for {tokenAddress}: {candleResponse.error}")
            summary.failedTokens.append(tokenAddress)
            return False

        status = self.signalDetector.initializeToken(tokenAddress, candleResponse.candles)
        if status != CacheUpdateStatus.INITIALIZED:
            logger.info(f"SIGNAL SCHEDULER :: {tokenAddress} not ready: "
                        f"{candleResponse.candleCount}/{windowSize} candles")
            summary.notReadyTokens.append(tokenAddress)
            return False

        logger.info(f"SIGNAL SCHEDULER :: Seeded {windowSize} candles for {tokenAddress}")
        return True

    def sendSignal(self, signal: BullishAlignmentSignal) -> bool:
        tokenInfo = self.getTokenInfo(signal.tokenAddress)
        return BullishAlignmentNotification.sendAlert(
            self.notificationService,
            self.config.TELEGRAM_CHAT_ID,
            signal,
            tokenInfo,
            self.config.CANDLE_GRANULARITY,
            self.config.TIMEZONE
        )

    def getTokenInfo(self, tokenAddress: str) -> Optional[TokenInfo]:
        if tokenAddress in self.tokenInfoCache:
            return self.tokenInfoCache[tokenAddress]

        tokenInfo = self.marketDataService.getTokenInfo(tokenAddress)
        if tokenInfo is not None:
            self.tokenInfoCache[tokenAddress] = tokenInfo
        return tokenInfo

    def logDetection(self, result: DetectionResult) -> None:
        if result.ema21 is None:
            logger.info(f"SIGNAL SCHEDULER :: {result.tokenAddress}: {result.status.value}")
            return

        label = self.tokenInfoCache.get(result.tokenAddress)
        name = label.symbol if label else result.tokenAddress
        logger.info(f"SIGNAL SCHEDULER :: {name}: EMA21={result.ema21:.8f}, EMA55={result.ema55:.8f}, "
                    f"EMA144={result.ema144:.8f}, aligned={result.isAligned}, previous={result.previousAlignment}")
