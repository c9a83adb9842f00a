"""Schedule text parsing and weekly time collision checks.

Schedule text looks like ``"월,수,금 14:00-16:00"``: a day list (comma and/or
space separated) followed by a time range. Anything that does not parse is
treated as "no schedule" and never conflicts.
"""

from __future__ import annotations

import logging
import re
from datetime import time
from typing import Callable, Iterable, Optional, TypeVar

from .model import ScheduleWindow

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DAYS_KR = ("일", "월", "화", "수", "목", "금", "토")
_DAYS_EN = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")
_KR_TO_EN = dict(zip(_DAYS_KR, _DAYS_EN))

_TIME_RANGE = re.compile(r"(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})")


def normalize_day(label: str) -> str:
    label = label.strip()
    return _KR_TO_EN.get(label, label.lower())


def _to_time(hours: str, minutes: str) -> Optional[time]:
    h, m = int(hours), int(minutes)
    if h > 23 or m > 59:
        return None
    return time(hour=h, minute=m)


def parse_schedule(text: Optional[str]) -> Optional[ScheduleWindow]:
    if not text or not text.strip():
        return None

    match = _TIME_RANGE.search(text)
    if not match:
        return None

    # Every token before the time range is a day label.
    days = frozenset(normalize_day(d) for d in text[: match.start()].replace(",", " ").split())
    if not days:
        return None

    start = _to_time(match.group(1), match.group(2))
    end = _to_time(match.group(3), match.group(4))
    if start is None or end is None:
        return None

    return ScheduleWindow(days=days, start_time=start, end_time=end)


def schedules_conflict(a: Optional[str], b: Optional[str]) -> bool:
    window_a = parse_schedule(a)
    window_b = parse_schedule(b)
    if window_a is None or window_b is None:
        return False
    return window_a.overlaps(window_b)


def find_conflict(
    candidate: Optional[str],
    existing: Iterable[T],
    *,
    schedule_of: Callable[[T], Optional[str]],
) -> Optional[T]:
    """First item of ``existing`` whose schedule collides with ``candidate``, or None."""
    if parse_schedule(candidate) is None:
        return None
    for item in existing:
        if schedules_conflict(candidate, schedule_of(item)):
            logger.info("Schedule conflict: %r vs %r", candidate, schedule_of(item))
            return item
    return None
