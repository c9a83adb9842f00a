from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus
from ..periods.model import Period


@dataclass(frozen=True)
class AttendanceEvent:
    """One daily attendance mark for a student in a class."""

    event_date: date
    status: AttendanceStatus
    student_id: Optional[int] = None
    class_id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceSummary:
    """Derived counts over a date-bounded event set.

    ``absent`` is the raw count; ``adjusted_absent`` adds one absence per three
    lates and is only meant for warnings. ``rate`` counts lates as present.
    """

    total: int
    present: int
    absent: int
    late: int
    late_to_absent: int
    adjusted_absent: int
    effective_present: int
    rate: int
    sick_leave: int = 0
    vacation: int = 0
    early_leave: int = 0


@dataclass(frozen=True)
class AbsenceWarning:
    adjusted_absent: int
    allowed_absences: int
    remaining_absent: int
    warning: bool


@dataclass(frozen=True)
class PeriodAttendanceReport:
    """Dashboard row: one period and the summary inside it."""

    student_id: int
    class_id: int
    period: Period
    label: str
    summary: AttendanceSummary
    absence: AbsenceWarning
