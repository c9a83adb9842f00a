from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_period_days
from ..core.constants import DEFAULT_LIST_LIMIT, NO_REJECTION_REASON
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, StateConflictError, ValidationError
from ..periods.calculator import make_up_dates
from .model import ApprovalResult, CancellationRequest
from .repository import CancellationRepository, CancellationTransaction

logger = logging.getLogger(__name__)


class CancellationService:
    """Teacher class-cancellation requests and their one-time approve/reject transition.

    Approval extends the class period, derives make-up dates and debits the
    teacher's leave inside a single repository transaction.
    """

    def __init__(self, requests: CancellationRepository, classes: ClassRepository):
        self._requests = requests
        self._classes = classes

    def submit(
        self,
        *,
        class_id: int,
        teacher_id: int,
        reason: str,
        dates: Sequence[date],
        today: Optional[date] = None,
    ) -> CancellationRequest:
        today = today or now_local().date()

        reason = require_non_empty(reason, "휴강 사유")
        if not dates:
            raise ValidationError("휴강 날짜를 하나 이상 선택해주세요.")
        if len(set(dates)) != len(dates):
            raise ValidationError("휴강 날짜가 중복되었습니다.")
        if any(d < today for d in dates):
            raise ValidationError("지난 날짜는 휴강 신청할 수 없습니다.")

        cls = self._classes.get_by_id(int(class_id))
        if not cls:
            raise NotFoundError("클래스를 찾을 수 없습니다.")
        if cls.teacher_id != int(teacher_id):
            raise AuthorizationError("이 클래스에 대한 권한이 없습니다.")

        request_id = self._requests.create(
            class_id=cls.class_id,
            teacher_id=int(teacher_id),
            reason=reason,
            dates=list(dates),
        )
        created = self._requests.get(request_id=request_id)
        if not created:
            raise NotFoundError("휴강 신청을 찾을 수 없습니다.")
        return created

    @staticmethod
    def _load_pending(tx: CancellationTransaction, request_id: int) -> CancellationRequest:
        req = tx.get_request_for_update(int(request_id))
        if not req:
            raise NotFoundError("휴강 신청을 찾을 수 없습니다.")
        if req.status != RequestStatus.PENDING:
            raise StateConflictError("이미 처리된 신청입니다.")
        return req

    def approve(self, *, request_id: int, admin_id: int, now: Optional[datetime] = None) -> ApprovalResult:
        now = now or now_local()

        with self._requests.transaction() as tx:
            req = self._load_pending(tx, request_id)

            cls = tx.get_class_for_update(req.class_id)
            if not cls:
                raise NotFoundError("클래스를 찾을 수 없습니다.")
            if cls.start_date is None or not cls.period_days:
                raise ValidationError("클래스의 기간 정보가 설정되지 않았습니다.")
            period_days = require_period_days(cls.period_days)

            count = len(req.dates)
            new_dates = make_up_dates(cls.start_date, period_days, count)
            new_period_days = period_days + count
            tx.set_period_days(class_id=cls.class_id, period_days=new_period_days)

            new_balance = None
            teacher = tx.get_teacher_for_update(req.teacher_id)
            if teacher:
                new_balance = teacher.leave.debit(count)
                tx.set_leave_balance(teacher_id=teacher.user_id, balance=new_balance)
            else:
                logger.warning("Teacher %s not found; leave not debited for request %s", req.teacher_id, req.request_id)

            if not tx.mark_reviewed(
                request_id=req.request_id,
                status=RequestStatus.APPROVED,
                reviewed_by=int(admin_id),
                reviewed_at=now,
            ):
                raise StateConflictError("이미 처리된 신청입니다.")

            approved = tx.get_request_for_update(req.request_id) or req

        logger.info(
            "Cancellation %s approved by %s: class=%s period_days %s -> %s, make-up %s",
            req.request_id,
            admin_id,
            cls.class_id,
            period_days,
            new_period_days,
            [d.isoformat() for d in new_dates],
        )
        return ApprovalResult(
            request=approved,
            new_period_days=new_period_days,
            make_up_dates=new_dates,
            new_leave_balance=new_balance,
        )

    def reject(
        self,
        *,
        request_id: int,
        admin_id: int,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CancellationRequest:
        now = now or now_local()
        rejected_reason = (reason or "").strip() or NO_REJECTION_REASON

        with self._requests.transaction() as tx:
            req = self._load_pending(tx, request_id)
            if not tx.mark_reviewed(
                request_id=req.request_id,
                status=RequestStatus.REJECTED,
                reviewed_by=int(admin_id),
                reviewed_at=now,
                rejected_reason=rejected_reason,
            ):
                raise StateConflictError("이미 처리된 신청입니다.")
            rejected = tx.get_request_for_update(req.request_id) or req

        logger.info("Cancellation %s rejected by %s", req.request_id, admin_id)
        return rejected

    def delete(self, *, request_id: int, actor_id: int, actor_role: Role) -> None:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("휴강 신청을 찾을 수 없습니다.")

        if actor_role == Role.TEACHER:
            if req.teacher_id != int(actor_id):
                raise AuthorizationError("권한이 없습니다.")
            if req.status != RequestStatus.REJECTED:
                raise StateConflictError("거절된 신청만 삭제할 수 있습니다.")
        elif actor_role == Role.ADMIN:
            pass
        elif actor_role == Role.STUDENT:
            raise AuthorizationError("권한이 없습니다.")

        if not self._requests.delete(request_id=req.request_id):
            raise NotFoundError("휴강 신청을 찾을 수 없습니다.")
        logger.info("Cancellation %s deleted by %s (%s)", req.request_id, actor_id, actor_role.value)

    def list_for_teacher(self, *, teacher_id: int) -> Sequence[CancellationRequest]:
        return self._requests.list_requests(teacher_id=int(teacher_id), limit=DEFAULT_LIST_LIMIT)

    def list_for_admin(self, *, status: Optional[RequestStatus] = None) -> Sequence[CancellationRequest]:
        return self._requests.list_requests(status=status, limit=DEFAULT_LIST_LIMIT)

    @staticmethod
    def to_ui(req: CancellationRequest) -> dict:
        return {
            "id": req.request_id,
            "class_id": req.class_id,
            "teacher_id": req.teacher_id,
            "reason": req.reason,
            "dates": [d.strftime("%Y-%m-%d") for d in req.dates],
            "status": req.status.value,
            "rejected_reason": req.rejected_reason or "",
            "created_at": req.created_at.strftime("%Y-%m-%d %H:%M"),
            "reviewed_at": req.reviewed_at.strftime("%Y-%m-%d %H:%M") if req.reviewed_at else None,
            "reviewed_by": req.reviewed_by,
        }
