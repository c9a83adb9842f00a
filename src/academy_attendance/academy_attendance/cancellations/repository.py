from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..classes.model import AcademyClass
from ..core.enums import RequestStatus
from ..users.model import LeaveBalance, User
from .model import CancellationRequest


class CancellationTransaction(Protocol):
    """One atomic unit of work. Reads take row locks held until commit/rollback.

    Lock order is request -> class -> teacher.
    """

    def get_request_for_update(self, request_id: int) -> Optional[CancellationRequest]:
        raise NotImplementedError

    def get_class_for_update(self, class_id: int) -> Optional[AcademyClass]:
        raise NotImplementedError

    def get_teacher_for_update(self, teacher_id: int) -> Optional[User]:
        raise NotImplementedError

    def set_period_days(self, *, class_id: int, period_days: int) -> None:
        raise NotImplementedError

    def set_leave_balance(self, *, teacher_id: int, balance: LeaveBalance) -> None:
        raise NotImplementedError

    def mark_reviewed(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        rejected_reason: Optional[str] = None,
    ) -> bool:
        """Transition a PENDING request; False if it was no longer PENDING."""

        raise NotImplementedError


class CancellationRepository(Protocol):
    def create(
        self,
        *,
        class_id: int,
        teacher_id: int,
        reason: str,
        dates: Sequence[date],
    ) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[CancellationRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        teacher_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[CancellationRequest]:
        """Newest first."""

        raise NotImplementedError

    def delete(self, *, request_id: int) -> bool:
        raise NotImplementedError

    def transaction(self) -> ContextManager[CancellationTransaction]:
        """Commit on normal exit, roll back every write if the block raises."""

        raise NotImplementedError
