from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class LeaveBalance:
    """Leave days a teacher may spend on approved cancellations. Neither field goes below zero."""

    annual_leave_days: int = 0
    monthly_leave_days: int = 0

    @property
    def total(self) -> int:
        return self.annual_leave_days + self.monthly_leave_days

    def debit(self, days: int) -> "LeaveBalance":
        """Take ``days`` from annual leave first, the rest from monthly leave, flooring both at 0.

        When the combined balance is short, less than ``days`` is actually deducted.
        """
        days = max(0, int(days))
        if self.annual_leave_days >= days:
            return LeaveBalance(self.annual_leave_days - days, self.monthly_leave_days)

        remaining = days - self.annual_leave_days
        return LeaveBalance(0, max(0, self.monthly_leave_days - remaining))


@dataclass(frozen=True)
class User:
    """Teacher or student account.

    Only the fields the cancellation workflow reads or writes.
    """

    user_id: int
    name: str
    role: Role
    leave: LeaveBalance = field(default_factory=LeaveBalance)
    email: Optional[str] = None
