from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class ScheduleWindow:
    """Recurring weekly time block parsed from a class schedule text.

    ``days`` holds canonical day codes (``"mon"`` .. ``"sun"``).
    """

    days: frozenset[str]
    start_time: time
    end_time: time

    def overlaps(self, other: "ScheduleWindow") -> bool:
        if not self.days & other.days:
            return False
        # Ranges that only touch (end == other start) do not overlap.
        return self.start_time < other.end_time and other.start_time < self.end_time
