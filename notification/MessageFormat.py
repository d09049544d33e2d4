"""
Message models handed from alert formatters to the Telegram sender
"""
from dataclasses import dataclass
from typing import Optional, List


@dataclass
class MessageButton:
    """Inline URL button shown under an alert"""
    text: str
    url: str


@dataclass
class CommonMessage:
    """HTML alert text plus the token it is about"""
    formattedMessage: str
    tokenAddress: Optional[str] = None
    strategyType: Optional[str] = None
    buttons: Optional[List[MessageButton]] = None
