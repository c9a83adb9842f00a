"""Period arithmetic for academy classes.

A class is split into periods of ``period_days`` days anchored at its start
date. Period numbers start at 1 and periods tile the calendar without gaps.

Every function here expects ``period_days >= 1``; callers validate it with
``common.validators.require_period_days`` before calling in.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..common.datetime_utils import as_day, today_local
from .model import Period


def period_for(
    start_date: Optional[date | datetime],
    period_days: int,
    target_date: Optional[date | datetime] = None,
) -> Period:
    """Return the period containing ``target_date`` (today by default).

    Without a start date, period 1 begins on the target day. A target before the
    start date also maps to period 1.
    """
    target = as_day(target_date) if target_date is not None else today_local()

    if start_date is None:
        return Period(
            period_start=target,
            period_end=target + timedelta(days=period_days - 1),
            period_number=1,
        )

    start = as_day(start_date)
    if target < start:
        return period_by_number(start, period_days, 1)

    days_since_start = (target - start).days
    period_number = days_since_start // period_days + 1
    return period_by_number(start, period_days, period_number)


def period_by_number(
    start_date: Optional[date | datetime],
    period_days: int,
    period_number: int,
) -> Period:
    """Closed-form boundaries of period ``period_number`` (1-based, may lie in the future)."""
    start = as_day(start_date) if start_date is not None else today_local()
    period_start = start + timedelta(days=(period_number - 1) * period_days)
    return Period(
        period_start=period_start,
        period_end=period_start + timedelta(days=period_days - 1),
        period_number=period_number,
    )


def iter_periods(
    start_date: Optional[date | datetime],
    period_days: int,
    up_to: Optional[date | datetime] = None,
) -> Iterator[Period]:
    """Yield periods 1..current (current = the period containing ``up_to``)."""
    current = period_for(start_date, period_days, up_to)
    anchor = current.period_start if start_date is None else start_date
    for number in range(1, current.period_number + 1):
        yield period_by_number(anchor, period_days, number)


def original_period_end(start_date: date | datetime, period_days: int) -> date:
    """Boundary after which make-up days are appended.

    Offset is the full period length (start + period_days), one day past the
    natural last day of the period.
    """
    return as_day(start_date) + timedelta(days=period_days)


def make_up_dates(start_date: date | datetime, period_days: int, count: int) -> list[date]:
    """Consecutive calendar days following ``original_period_end``; weekends are not skipped."""
    boundary = original_period_end(start_date, period_days)
    return [boundary + timedelta(days=i + 1) for i in range(count)]


def format_period_label(period: Period) -> str:
    """e.g. ``"1기간 (2024-03-15 ~ 2024-04-13)"``."""
    return (
        f"{period.period_number}기간 "
        f"({period.period_start.strftime('%Y-%m-%d')} ~ {period.period_end.strftime('%Y-%m-%d')})"
    )
