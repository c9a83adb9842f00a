from __future__ import annotations

from typing import Optional

from ..core.constants import MIN_PERIOD_DAYS
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}이(가) 올바르지 않습니다.")
    return value.strip()


def require_period_days(value: Optional[int], *, min_days: int = MIN_PERIOD_DAYS) -> int:
    """Period length precondition shared by every caller of the period calculator."""
    if value is None:
        raise ValidationError("클래스의 기간 정보가 설정되지 않았습니다.")
    days = int(value)
    if days < min_days:
        raise ValidationError(f"기간 단위는 {min_days}일 이상이어야 합니다.")
    return days
