"""
Bullish Alignment Notification Handler - Turns a detected signal into a Telegram alert

This module contains all logic specific to bullish alignment notifications,
including data preparation, URL building, and message formatting.
"""

import html
from typing import Optional
from logs.logger import get_logger
from constants.BullishAlignmentConstants import BullishAlignmentDefaults, BullishAlignmentUrls
from models.Signal import BullishAlignmentSignal
from models.TokenInfo import TokenInfo
from notification.NotificationManager import NotificationService
from notification.NotificationType import NotificationType
from notification.types.BullishAlignment import BullishAlignment
from utils.CommonUtil import CommonUtil

logger = get_logger(__name__)


class BullishAlignmentNotification:
    """Static methods for handling bullish alignment notifications"""

    @staticmethod
    def sendAlert(notificationService: NotificationService, chatId: str, signal: BullishAlignmentSignal,
                  tokenInfo: Optional[TokenInfo], timeframe: str, timezoneName: Optional[str] = None) -> bool:
        try:
            alignmentData = BullishAlignmentNotification.createBullishAlignmentData(
                signal, tokenInfo, timeframe, timezoneName
            )
            commonMessage = BullishAlignment.formatMessage(alignmentData)

            return notificationService.sendNotification(
                chatId=chatId,
                notificationType=NotificationType.BULLISH_ALIGNMENT,
                commonMessage=commonMessage
            )

        except Exception as e:
            logger.error(f"Error sending bullish alignment notification for {signal.tokenAddress}: {e}")
            return False

    @staticmethod
    def createBullishAlignmentData(signal: BullishAlignmentSignal, tokenInfo: Optional[TokenInfo],
                                   timeframe: str, timezoneName: Optional[str] = None) -> BullishAlignment.Data:
        if tokenInfo is None:
            tokenInfo = TokenInfo.unknown(signal.tokenAddress)

        return BullishAlignment.Data(
            symbol=html.escape(tokenInfo.symbol),
            name=html.escape(tokenInfo.name),
            tokenAddress=signal.tokenAddress,
            chain=BullishAlignmentDefaults.CHAIN_NAME,
            timeframe=timeframe,
            currentPrice=signal.currentPrice,
            ema21=signal.ema21,
            ema55=signal.ema55,
            ema144=signal.ema144,
            candleTime=CommonUtil.formatUnixTime(signal.candleTimestamp // 1000, timezoneName),
            detectedTime=CommonUtil.formatUnixTime(signal.detectedAt, timezoneName),
            strategyType=BullishAlignmentDefaults.STRATEGY_TYPE,
            dexScreenerUrl=BullishAlignmentUrls.DEXSCREENER_BASE.format(tokenAddress=signal.tokenAddress),
            explorerUrl=BullishAlignmentUrls.BSCSCAN_TOKEN_BASE.format(tokenAddress=signal.tokenAddress)
        )
