from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..classes.model import AcademyClass
from ..classes.repository import ClassRepository
from ..common.validators import require_period_days
from ..core.constants import DEFAULT_ALLOWED_ABSENCES
from ..core.exceptions import NotFoundError
from ..periods.calculator import format_period_label, iter_periods, period_for
from ..periods.model import Period, PeriodBounds
from .model import PeriodAttendanceReport
from .repository import AttendanceRepository
from .summary import evaluate_absence_warning, summarize


class AttendanceReportService:
    """Dashboard read side: period boundaries first, then a summary of events inside them."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        classes: ClassRepository,
        *,
        bounds: Optional[PeriodBounds] = None,
        allowed_absences: int = DEFAULT_ALLOWED_ABSENCES,
    ):
        self._attendance = attendance
        self._classes = classes
        self._bounds = bounds or PeriodBounds()
        self._allowed_absences = int(allowed_absences)

    def _get_class(self, class_id: int) -> AcademyClass:
        cls = self._classes.get_by_id(int(class_id))
        if not cls:
            raise NotFoundError("클래스를 찾을 수 없습니다.")
        return cls

    def _period_days(self, cls: AcademyClass) -> int:
        value = cls.period_days if cls.period_days is not None else self._bounds.default_days
        return require_period_days(value, min_days=self._bounds.min_days)

    def _report(self, cls: AcademyClass, student_id: int, period: Period) -> PeriodAttendanceReport:
        events = self._attendance.list_events(
            class_id=cls.class_id,
            student_id=int(student_id),
            start_date=period.period_start,
            end_date=period.period_end,
        )
        summary = summarize(events)
        return PeriodAttendanceReport(
            student_id=int(student_id),
            class_id=cls.class_id,
            period=period,
            label=format_period_label(period),
            summary=summary,
            absence=evaluate_absence_warning(summary, self._allowed_absences),
        )

    def current_period_summary(
        self,
        *,
        class_id: int,
        student_id: int,
        target_date: Optional[date] = None,
    ) -> PeriodAttendanceReport:
        cls = self._get_class(class_id)
        period = period_for(cls.start_date, self._period_days(cls), target_date)
        return self._report(cls, student_id, period)

    def period_history(
        self,
        *,
        class_id: int,
        student_id: int,
        up_to: Optional[date] = None,
    ) -> list[PeriodAttendanceReport]:
        cls = self._get_class(class_id)
        return [
            self._report(cls, student_id, period)
            for period in iter_periods(cls.start_date, self._period_days(cls), up_to)
        ]

    def class_warnings(
        self,
        *,
        class_id: int,
        student_ids: Optional[Iterable[int]] = None,
        target_date: Optional[date] = None,
    ) -> list[PeriodAttendanceReport]:
        """Current-period reports for a roster, warned students first, then lowest rate.

        Without ``student_ids`` the class roster is used.
        """
        cls = self._get_class(class_id)
        if student_ids is None:
            student_ids = self._classes.list_student_ids(cls.class_id)
        period = period_for(cls.start_date, self._period_days(cls), target_date)
        reports = [self._report(cls, sid, period) for sid in student_ids]
        reports.sort(key=lambda r: (not r.absence.warning, r.summary.rate))
        return reports

    @staticmethod
    def to_ui(report: PeriodAttendanceReport) -> dict:
        s = report.summary
        return {
            "student_id": report.student_id,
            "class_id": report.class_id,
            "period": {
                "number": report.period.period_number,
                "start_date": report.period.period_start.strftime("%Y-%m-%d"),
                "end_date": report.period.period_end.strftime("%Y-%m-%d"),
                "label": report.label,
            },
            "stats": {
                "total": s.total,
                "present": s.present,
                "absent": s.absent,
                "late": s.late,
                "late_to_absent": s.late_to_absent,
                "adjusted_absent": s.adjusted_absent,
                "effective_present": s.effective_present,
                "sick_leave": s.sick_leave,
                "vacation": s.vacation,
                "early_leave": s.early_leave,
                "rate": s.rate,
                "remaining_absent": report.absence.remaining_absent,
                "warning": report.absence.warning,
            },
        }
