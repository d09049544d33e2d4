"""
Notification module for formatting and delivering alerts.
"""

from .NotificationType import NotificationType
from .MessageFormat import CommonMessage, MessageButton

__all__ = [
    'NotificationType',
    'CommonMessage',
    'MessageButton'
]
