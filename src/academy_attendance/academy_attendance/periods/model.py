from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import DEFAULT_PERIOD_DAYS, MAX_PERIOD_DAYS, MIN_PERIOD_DAYS
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Period:
    """A contiguous, fixed-length window anchored at a class start date (never persisted)."""

    period_start: date
    period_end: date
    period_number: int


@dataclass(frozen=True)
class PeriodBounds:
    """System-wide period length bounds, resolved once by the configuration layer."""

    min_days: int = MIN_PERIOD_DAYS
    max_days: int = MAX_PERIOD_DAYS
    default_days: int = DEFAULT_PERIOD_DAYS

    def __post_init__(self):
        if self.min_days < 1:
            raise ValidationError("최소 기간은 1일 이상이어야 합니다.")
        if self.max_days > MAX_PERIOD_DAYS:
            raise ValidationError(f"최대 기간은 {MAX_PERIOD_DAYS}일 이하여야 합니다.")
        if self.min_days > self.max_days:
            raise ValidationError("최소 기간은 최대 기간보다 작아야 합니다.")
        if not self.min_days <= self.default_days <= self.max_days:
            raise ValidationError(f"기본값은 {self.min_days}일 이상 {self.max_days}일 이하여야 합니다.")
