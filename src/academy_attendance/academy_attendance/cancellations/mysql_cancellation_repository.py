from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterator, Optional, Sequence

from ..classes.model import AcademyClass
from ..classes.mysql_class_repository import row_to_class
from ..core.enums import RequestStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_dates, fetchall, fetchone, load_dates
from ..users.model import LeaveBalance, User
from .model import CancellationRequest
from .repository import CancellationRepository, CancellationTransaction

_REQUEST_COLUMNS = """
    request_id, class_id, teacher_id, reason, dates, status, created_at,
    rejected_reason, reviewed_at, reviewed_by
"""


def _row_to_request(r: Dict[str, Any]) -> CancellationRequest:
    return CancellationRequest(
        request_id=int(r["request_id"]),
        class_id=int(r["class_id"]),
        teacher_id=int(r["teacher_id"]),
        reason=r["reason"],
        dates=load_dates(r["dates"]),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        rejected_reason=r.get("rejected_reason"),
        reviewed_at=r.get("reviewed_at"),
        reviewed_by=r.get("reviewed_by"),
    )


class MySQLCancellationTransaction(CancellationTransaction):
    def __init__(self, cur):
        self._cur = cur

    def get_request_for_update(self, request_id: int) -> Optional[CancellationRequest]:
        self._cur.execute(
            f"SELECT {_REQUEST_COLUMNS} FROM cancellation_requests WHERE request_id=%s FOR UPDATE",
            (int(request_id),),
        )
        r = fetchone(self._cur)
        return _row_to_request(r) if r else None

    def get_class_for_update(self, class_id: int) -> Optional[AcademyClass]:
        self._cur.execute(
            """
            SELECT c.class_id, c.name, c.teacher_id, c.start_date, c.period_days, c.schedule
            FROM classes c
            WHERE c.class_id=%s
            FOR UPDATE
            """,
            (int(class_id),),
        )
        r = fetchone(self._cur)
        return row_to_class(r) if r else None

    def get_teacher_for_update(self, teacher_id: int) -> Optional[User]:
        self._cur.execute(
            """
            SELECT user_id, name, email, role, annual_leave_days, monthly_leave_days
            FROM users
            WHERE user_id=%s
            FOR UPDATE
            """,
            (int(teacher_id),),
        )
        r = fetchone(self._cur)
        if not r:
            return None
        return User(
            user_id=int(r["user_id"]),
            name=r["name"],
            role=Role(r["role"]),
            leave=LeaveBalance(
                annual_leave_days=int(r.get("annual_leave_days") or 0),
                monthly_leave_days=int(r.get("monthly_leave_days") or 0),
            ),
            email=r.get("email"),
        )

    def set_period_days(self, *, class_id: int, period_days: int) -> None:
        self._cur.execute(
            "UPDATE classes SET period_days=%s WHERE class_id=%s",
            (int(period_days), int(class_id)),
        )

    def set_leave_balance(self, *, teacher_id: int, balance: LeaveBalance) -> None:
        self._cur.execute(
            "UPDATE users SET annual_leave_days=%s, monthly_leave_days=%s WHERE user_id=%s",
            (int(balance.annual_leave_days), int(balance.monthly_leave_days), int(teacher_id)),
        )

    def mark_reviewed(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        reviewed_at: datetime,
        rejected_reason: Optional[str] = None,
    ) -> bool:
        self._cur.execute(
            """
            UPDATE cancellation_requests
            SET status=%s, reviewed_by=%s, reviewed_at=%s, rejected_reason=%s
            WHERE request_id=%s AND status=%s
            """,
            (
                status.value,
                int(reviewed_by),
                reviewed_at,
                rejected_reason,
                int(request_id),
                RequestStatus.PENDING.value,
            ),
        )
        return self._cur.rowcount > 0


class MySQLCancellationRepository(CancellationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, class_id: int, teacher_id: int, reason: str, dates: Sequence[date]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cancellation_requests(class_id, teacher_id, reason, dates, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(class_id), int(teacher_id), reason, dump_dates(dates), RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[CancellationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM cancellation_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        teacher_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[CancellationRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if teacher_id is not None:
            clauses.append("teacher_id=%s")
            params.append(int(teacher_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_REQUEST_COLUMNS}
                FROM cancellation_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def delete(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM cancellation_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0

    @contextmanager
    def transaction(self) -> Iterator[MySQLCancellationTransaction]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield MySQLCancellationTransaction(cur)
