from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AcademyClass:
    """Academy class as stored; plain data, no DB access.

    ``period_days`` grows when a cancellation is approved.
    """

    class_id: int
    name: str
    teacher_id: Optional[int]
    start_date: Optional[date]
    period_days: Optional[int]
    schedule: Optional[str] = None
