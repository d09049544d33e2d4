"""
Alignment State POJO - Bounded per-token history of EMA alignment evaluations
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Tuple


@dataclass
class AlignmentState:
    """
    Recent (candleTimestamp, isAligned) pairs for one token, oldest first.

    Only the latest entry drives transition detection; older entries are
    dropped once maxEntries is exceeded.
    """

    tokenAddress: str
    maxEntries: int = 10
    history: Deque[Tuple[int, bool]] = field(default_factory=deque)

    def record(self, candleTimestamp: int, isAligned: bool) -> None:
        self.history.append((candleTimestamp, isAligned))
        self.prune()

    def prune(self) -> None:
        while len(self.history) > self.maxEntries:
            self.history.popleft()

    def lastAlignment(self) -> Optional[bool]:
        """None means unknown: nothing has been evaluated yet"""
        if not self.history:
            return None
        return self.history[-1][1]

    def wasEvaluated(self, candleTimestamp: int) -> bool:
        return any(timestamp == candleTimestamp for timestamp, _ in self.history)

    def entries(self) -> List[Tuple[int, bool]]:
        return list(self.history)
