from __future__ import annotations

from datetime import date

import pytest

from src.academy_attendance.academy_attendance.attendance.model import AttendanceEvent
from src.academy_attendance.academy_attendance.attendance.service import AttendanceReportService
from src.academy_attendance.academy_attendance.classes.model import AcademyClass
from src.academy_attendance.academy_attendance.core.enums import AttendanceStatus
from src.academy_attendance.academy_attendance.core.exceptions import NotFoundError, ValidationError
from src.academy_attendance.academy_attendance.periods.model import PeriodBounds

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
L = AttendanceStatus.LATE


class InMemoryAttendanceRepo:
    def __init__(self, events: list[AttendanceEvent]):
        self._events = events

    def list_events(self, *, class_id, student_id, start_date=None, end_date=None):
        return [
            e
            for e in self._events
            if e.class_id == class_id
            and e.student_id == student_id
            and (start_date is None or e.event_date >= start_date)
            and (end_date is None or e.event_date <= end_date)
        ]


class InMemoryClassRepo:
    def __init__(self, *classes: AcademyClass, roster: tuple[int, ...] = ()):
        self._items = {c.class_id: c for c in classes}
        self._roster = list(roster)

    def get_by_id(self, class_id):
        return self._items.get(class_id)

    def list_for_student(self, student_id, *, exclude_class_id=None):
        return []

    def list_student_ids(self, class_id):
        return self._roster if class_id in self._items else []


def _ev(day: date, status: AttendanceStatus, student_id: int = 7, class_id: int = 1) -> AttendanceEvent:
    return AttendanceEvent(event_date=day, status=status, student_id=student_id, class_id=class_id)


def _class(period_days=10, start_date=date(2024, 3, 1)) -> AcademyClass:
    return AcademyClass(
        class_id=1, name="수학", teacher_id=10, start_date=start_date, period_days=period_days
    )


def test_current_period_only_counts_events_inside_it():
    events = [
        _ev(date(2024, 3, 2), A),  # period 1
        _ev(date(2024, 3, 11), P),  # period 2 start
        _ev(date(2024, 3, 12), L),
        _ev(date(2024, 3, 20), A),  # period 2 end
        _ev(date(2024, 3, 21), A),  # period 3
        _ev(date(2024, 3, 15), A, student_id=8),
    ]
    svc = AttendanceReportService(InMemoryAttendanceRepo(events), InMemoryClassRepo(_class()))

    report = svc.current_period_summary(class_id=1, student_id=7, target_date=date(2024, 3, 15))

    assert report.period.period_number == 2
    assert report.period.period_start == date(2024, 3, 11)
    assert report.period.period_end == date(2024, 3, 20)
    assert report.label == "2기간 (2024-03-11 ~ 2024-03-20)"
    assert (report.summary.total, report.summary.present, report.summary.late, report.summary.absent) == (3, 1, 1, 1)
    assert report.summary.rate == 67
    assert report.absence.remaining_absent == 1
    assert report.absence.warning is False


def test_history_has_one_row_per_period_up_to_current():
    events = [_ev(date(2024, 3, 1), A), _ev(date(2024, 3, 2), A), _ev(date(2024, 3, 25), P)]
    svc = AttendanceReportService(InMemoryAttendanceRepo(events), InMemoryClassRepo(_class()))

    rows = svc.period_history(class_id=1, student_id=7, up_to=date(2024, 3, 25))

    assert [r.period.period_number for r in rows] == [1, 2, 3]
    assert rows[0].absence.warning is True
    assert rows[1].summary.total == 0
    assert rows[1].summary.rate == 100
    assert rows[2].summary.present == 1


def test_class_warnings_order_warned_first_then_lowest_rate():
    day = date(2024, 3, 3)
    events = [
        _ev(day, P, student_id=1),
        _ev(day, A, student_id=2),
        _ev(date(2024, 3, 4), P, student_id=2),
        _ev(day, A, student_id=3),
        _ev(date(2024, 3, 4), A, student_id=3),
        _ev(date(2024, 3, 5), P, student_id=3),
    ]
    svc = AttendanceReportService(InMemoryAttendanceRepo(events), InMemoryClassRepo(_class()))

    rows = svc.class_warnings(class_id=1, student_ids=[1, 2, 3], target_date=date(2024, 3, 5))

    assert [r.student_id for r in rows] == [3, 2, 1]
    assert rows[0].absence.warning is True


def test_class_warnings_default_to_class_roster():
    events = [_ev(date(2024, 3, 2), A, student_id=5), _ev(date(2024, 3, 3), A, student_id=5), _ev(date(2024, 3, 2), P, student_id=6)]
    svc = AttendanceReportService(InMemoryAttendanceRepo(events), InMemoryClassRepo(_class(), roster=(6, 5)))

    rows = svc.class_warnings(class_id=1, target_date=date(2024, 3, 4))

    assert [r.student_id for r in rows] == [5, 6]
    assert [r.absence.warning for r in rows] == [True, False]


def test_unknown_class():
    svc = AttendanceReportService(InMemoryAttendanceRepo([]), InMemoryClassRepo())
    with pytest.raises(NotFoundError):
        svc.current_period_summary(class_id=1, student_id=7)


def test_missing_period_days_falls_back_to_default():
    svc = AttendanceReportService(
        InMemoryAttendanceRepo([]),
        InMemoryClassRepo(_class(period_days=None)),
        bounds=PeriodBounds(min_days=1, max_days=365, default_days=14),
    )
    report = svc.current_period_summary(class_id=1, student_id=7, target_date=date(2024, 3, 20))
    assert report.period.period_number == 2
    assert report.period.period_start == date(2024, 3, 15)


def test_period_length_below_minimum_is_rejected():
    svc = AttendanceReportService(
        InMemoryAttendanceRepo([]),
        InMemoryClassRepo(_class(period_days=3)),
        bounds=PeriodBounds(min_days=7, max_days=60, default_days=30),
    )
    with pytest.raises(ValidationError):
        svc.current_period_summary(class_id=1, student_id=7, target_date=date(2024, 3, 20))


def test_to_ui_shape():
    svc = AttendanceReportService(InMemoryAttendanceRepo([]), InMemoryClassRepo(_class()))
    report = svc.current_period_summary(class_id=1, student_id=7, target_date=date(2024, 3, 1))
    ui = svc.to_ui(report)
    assert ui["period"] == {"number": 1, "start_date": "2024-03-01", "end_date": "2024-03-10", "label": report.label}
    assert ui["stats"]["rate"] == 100
    assert ui["stats"]["remaining_absent"] == 2
