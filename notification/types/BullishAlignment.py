"""
Bullish Alignment notification type
"""
from dataclasses import dataclass
from typing import Optional
from notification.MessageFormat import CommonMessage, MessageButton
from utils.CommonUtil import CommonUtil


class BullishAlignment:
    """Bullish Alignment notification - EMA21 > EMA55 > EMA144 newly formed"""

    @dataclass
    class Data:
        """POJO for bullish alignment notification data"""
        symbol: str
        name: str
        tokenAddress: str
        chain: str
        timeframe: str
        currentPrice: float
        ema21: float
        ema55: float
        ema144: float
        candleTime: str
        detectedTime: str
        strategyType: Optional[str] = None
        dexScreenerUrl: Optional[str] = None
        explorerUrl: Optional[str] = None

    @staticmethod
    def formatMessage(data: Data) -> CommonMessage:
        """Format bullish alignment data into common message for Telegram (HTML parse mode)"""

        formatted = f"🚀 <b>EMA Bullish Alignment</b>\n\n"
        formatted += f"<b>Token:</b> <b>{data.symbol}</b> ({data.name})\n"
        formatted += f"<b>Chain:</b> {data.chain} | <b>Timeframe:</b> {data.timeframe}\n"
        formatted += f"<b>Address:</b> <code>{data.tokenAddress}</code>\n"
        formatted += f"<b>Current Price:</b> <b>${CommonUtil.formatNumber(data.currentPrice)}</b>\n\n"

        formatted += f"📊 <b>EMA Indicators</b>\n"
        formatted += f"EMA21: {CommonUtil.formatNumber(data.ema21)}\n"
        formatted += f"EMA55: {CommonUtil.formatNumber(data.ema55)}\n"
        formatted += f"EMA144: {CommonUtil.formatNumber(data.ema144)}\n\n"

        formatted += f"🕯 <b>Candle:</b> {data.candleTime}\n"
        formatted += f"⏰ <b>Detected:</b> {data.detectedTime}"

        buttons = []
        if data.dexScreenerUrl:
            buttons.append(MessageButton("📊 DexScreener", data.dexScreenerUrl))
        if data.explorerUrl:
            buttons.append(MessageButton("🔍 BscScan", data.explorerUrl))

        return CommonMessage(
            formattedMessage=formatted,
            tokenAddress=data.tokenAddress,
            strategyType=data.strategyType,
            buttons=buttons if buttons else None
        )
