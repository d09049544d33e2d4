"""
Bullish Alignment Constants - Constants specific to bullish alignment notifications
"""


class BullishAlignmentDefaults:
    """Default values for bullish alignment notification system"""
    STRATEGY_TYPE = "EMA21/55/144 Bullish Alignment"
    CHAIN_NAME = "BSC"


class BullishAlignmentUrls:
    """URL templates for bullish alignment notifications"""
    DEXSCREENER_BASE = "https://dexscreener.com/bsc/{tokenAddress}"
    BSCSCAN_TOKEN_BASE = "https://bscscan.com/token/{tokenAddress}"
