"""
Notification handlers package
"""

from .BullishAlignmentNotification import BullishAlignmentNotification

__all__ = ['BullishAlignmentNotification']
