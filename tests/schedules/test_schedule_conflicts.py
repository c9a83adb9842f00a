from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from src.academy_attendance.academy_attendance.schedules.conflicts import (
    find_conflict,
    normalize_day,
    parse_schedule,
    schedules_conflict,
)


def test_parse_korean_day_list():
    w = parse_schedule("월,수,금 14:00-16:00")
    assert w is not None
    assert w.days == frozenset({"mon", "wed", "fri"})
    assert w.start_time == time(14, 0)
    assert w.end_time == time(16, 0)


def test_parse_accepts_single_digit_hour_and_spaced_dash():
    w = parse_schedule("화 9:30 - 11:00")
    assert w is not None
    assert w.start_time == time(9, 30)
    assert w.end_time == time(11, 0)


def test_parse_space_separated_day_list():
    assert parse_schedule("월 수 금 14:00-16:00").days == frozenset({"mon", "wed", "fri"})
    assert parse_schedule("월, 수 10:00-12:00").days == frozenset({"mon", "wed"})


def test_space_separated_days_are_all_checked_for_conflicts():
    assert schedules_conflict("월 수 금 14:00-16:00", "수 15:00-17:00") is True
    assert schedules_conflict("금 15:00-17:00", "월, 수 금 14:00-16:00") is True


def test_time_range_without_days_is_absent():
    assert parse_schedule("14:00-16:00") is None


def test_unparseable_text_is_absent():
    assert parse_schedule(None) is None
    assert parse_schedule("") is None
    assert parse_schedule("   ") is None
    assert parse_schedule("월수금") is None
    assert parse_schedule("월 오후") is None
    assert parse_schedule("월 25:00-26:00") is None


def test_overlapping_ranges_on_shared_day_conflict():
    assert schedules_conflict("월,수 10:00-12:00", "월 11:00-13:00") is True


def test_touching_ranges_do_not_conflict():
    assert schedules_conflict("월 10:00-11:00", "월 11:00-12:00") is False
    assert schedules_conflict("월 11:00-12:00", "월 10:00-11:00") is False


def test_different_days_do_not_conflict():
    assert schedules_conflict("월,수 10:00-12:00", "화,목 10:00-12:00") is False


def test_contained_range_conflicts():
    assert schedules_conflict("토 09:00-18:00", "토 12:00-13:00") is True


def test_korean_and_english_labels_are_equivalent():
    assert normalize_day("월") == "mon"
    assert normalize_day("MON") == "mon"
    assert schedules_conflict("월 10:00-12:00", "mon,wed 11:00-12:30") is True


def test_absent_schedule_never_conflicts():
    assert schedules_conflict(None, "월 10:00-12:00") is False
    assert schedules_conflict("월 10:00-12:00", "nonsense") is False


@dataclass
class _Cls:
    name: str
    schedule: Optional[str]


def test_find_conflict_returns_first_clash():
    existing = [
        _Cls("A", None),
        _Cls("B", "화 10:00-12:00"),
        _Cls("C", "월 11:30-12:30"),
        _Cls("D", "월 09:00-13:00"),
    ]
    clash = find_conflict("월,수 10:00-12:00", existing, schedule_of=lambda c: c.schedule)
    assert clash is existing[2]


def test_find_conflict_none_when_candidate_unscheduled():
    existing = [_Cls("A", "월 10:00-12:00")]
    assert find_conflict(None, existing, schedule_of=lambda c: c.schedule) is None
