from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def list_events(
        self,
        *,
        class_id: int,
        student_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events of one student in one class, bounds inclusive."""

        raise NotImplementedError
