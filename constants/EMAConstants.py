"""
EMA Constants - Periods and window sizes for the bullish alignment detector
"""

# EMA Periods
EMA_21 = 21
EMA_55 = 55
EMA_144 = 144

EMA_SHORT = EMA_21
EMA_MEDIUM = EMA_55
EMA_LONG = EMA_144

EMA_PERIODS = (EMA_SHORT, EMA_MEDIUM, EMA_LONG)

# Candle window must be able to seed the longest EMA
DEFAULT_WINDOW_SIZE = EMA_LONG

# Only the immediately previous state is consulted; the rest is kept for logs
DEFAULT_ALIGNMENT_HISTORY_SIZE = 10
