"""Progressive hint escalation.

The level of the next hint is a pure function of how many hints the same
candidate already received in the session. There is no stored state: the
count is always re-read from the event log, so the ladder survives restarts.
"""
from __future__ import annotations

from enum import Enum


class HintLevel(str, Enum):
    NUDGE = "nudge"
    GUIDE = "guide"
    DIRECTION = "direction"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HintLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, HintLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, HintLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, HintLevel):
            return NotImplemented
        return self.rank >= other.rank


_ORDER = (HintLevel.NUDGE, HintLevel.GUIDE, HintLevel.DIRECTION)


def next_hint_level(prior_hint_count: int) -> HintLevel:
    """Return the level for the next hint given the prior hint count.

    ``direction`` is terminal: every request after the second hint stays there.
    """

    if prior_hint_count < 0:
        raise ValueError("prior_hint_count must be non-negative")
    if prior_hint_count == 0:
        return HintLevel.NUDGE
    if prior_hint_count == 1:
        return HintLevel.GUIDE
    return HintLevel.DIRECTION


__all__ = ["HintLevel", "next_hint_level"]
