from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_events(
        self,
        *,
        class_id: int,
        student_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["class_id=%s", "student_id=%s"]
        params: list[object] = [int(class_id), int(student_id)]

        if start_date is not None:
            clauses.append("attendance_date>=%s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("attendance_date<=%s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, class_id, attendance_date, status
                FROM attendances
                WHERE {where}
                ORDER BY attendance_date ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceEvent(
                    event_date=r["attendance_date"],
                    status=AttendanceStatus(r["status"]),
                    student_id=int(r["student_id"]),
                    class_id=int(r["class_id"]),
                )
                for r in rows
            ]
