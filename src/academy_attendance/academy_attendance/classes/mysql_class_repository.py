from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AcademyClass
from .repository import ClassRepository

_CLASS_COLUMNS = "c.class_id, c.name, c.teacher_id, c.start_date, c.period_days, c.schedule"


def row_to_class(r: Dict[str, Any]) -> AcademyClass:
    return AcademyClass(
        class_id=int(r["class_id"]),
        name=r["name"],
        teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
        start_date=r.get("start_date"),
        period_days=int(r["period_days"]) if r.get("period_days") is not None else None,
        schedule=r.get("schedule"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[AcademyClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_CLASS_COLUMNS} FROM classes c WHERE c.class_id=%s",
                (int(class_id),),
            )
            r = fetchone(cur)
            return row_to_class(r) if r else None

    def list_for_student(self, student_id: int, *, exclude_class_id: Optional[int] = None) -> Sequence[AcademyClass]:
        clauses = ["m.student_id=%s"]
        params: list[object] = [int(student_id)]
        if exclude_class_id is not None:
            clauses.append("c.class_id<>%s")
            params.append(int(exclude_class_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_CLASS_COLUMNS}
                FROM class_members m
                JOIN classes c ON c.class_id = m.class_id
                WHERE {where}
                ORDER BY c.class_id ASC
                """,
                tuple(params),
            )
            return [row_to_class(r) for r in fetchall(cur)]

    def list_student_ids(self, class_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_id FROM class_members WHERE class_id=%s ORDER BY student_id ASC",
                (int(class_id),),
            )
            return [int(r["student_id"]) for r in fetchall(cur)]
