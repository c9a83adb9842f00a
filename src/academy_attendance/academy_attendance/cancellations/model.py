from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus
from ..users.model import LeaveBalance


@dataclass(frozen=True)
class CancellationRequest:
    request_id: int
    class_id: int
    teacher_id: int
    reason: str
    dates: tuple[date, ...]
    status: RequestStatus
    created_at: datetime
    rejected_reason: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None


@dataclass(frozen=True)
class ApprovalResult:
    request: CancellationRequest
    new_period_days: int
    make_up_dates: list[date]
    new_leave_balance: Optional[LeaveBalance]
