"""
Notification types package
"""

from .BullishAlignment import BullishAlignment

__all__ = ['BullishAlignment']
