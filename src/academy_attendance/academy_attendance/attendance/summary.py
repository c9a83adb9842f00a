"""Attendance aggregation.

Two figures come out of the same events and must not be mixed up:

* ``rate``: lenient, a LATE counts as attended.
* ``adjusted_absent``: strict, every three LATEs add one absence. It drives
  the warning flag only.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..core.constants import ABSENCE_WARNING_THRESHOLD, LATES_PER_ABSENCE
from ..core.enums import AttendanceStatus
from .model import AbsenceWarning, AttendanceEvent, AttendanceSummary


def _rate_percent(effective_present: int, total: int) -> int:
    if total == 0:
        return 100
    # Half-up rounding of effective_present / total * 100 in integer arithmetic.
    return (effective_present * 200 + total) // (2 * total)


def summarize(events: Iterable[AttendanceEvent]) -> AttendanceSummary:
    counts: Counter[AttendanceStatus] = Counter()
    total = 0
    for event in events:
        counts[AttendanceStatus(event.status)] += 1
        total += 1

    present = counts[AttendanceStatus.PRESENT]
    absent = counts[AttendanceStatus.ABSENT]
    late = counts[AttendanceStatus.LATE]

    late_to_absent = late // LATES_PER_ABSENCE
    effective_present = present + late

    return AttendanceSummary(
        total=total,
        present=present,
        absent=absent,
        late=late,
        late_to_absent=late_to_absent,
        adjusted_absent=absent + late_to_absent,
        effective_present=effective_present,
        rate=_rate_percent(effective_present, total),
        sick_leave=counts[AttendanceStatus.SICK_LEAVE],
        vacation=counts[AttendanceStatus.VACATION],
        early_leave=counts[AttendanceStatus.EARLY_LEAVE],
    )


def evaluate_absence_warning(summary: AttendanceSummary, allowed_absences: int) -> AbsenceWarning:
    adjusted = summary.adjusted_absent
    return AbsenceWarning(
        adjusted_absent=adjusted,
        allowed_absences=int(allowed_absences),
        remaining_absent=max(0, int(allowed_absences) - adjusted),
        warning=adjusted >= ABSENCE_WARNING_THRESHOLD,
    )
