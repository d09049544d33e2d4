"""
Simple notification enums
"""
from enum import Enum


class NotificationType(Enum):
    BULLISH_ALIGNMENT = "bullish_alignment"
