from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceReportService
from .cancellations.mysql_cancellation_repository import MySQLCancellationRepository
from .cancellations.service import CancellationService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.service import EnrollmentService
from .core.constants import DEFAULT_ALLOWED_ABSENCES
from .database.connection import DBConfig, DatabaseConnection
from .periods.model import PeriodBounds


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    classes_repo: MySQLClassRepository
    attendance_repo: MySQLAttendanceRepository
    cancellations_repo: MySQLCancellationRepository

    attendance_report_service: AttendanceReportService
    enrollment_service: EnrollmentService
    cancellation_service: CancellationService


def build_container(
    *,
    db_config: dict,
    period_bounds: PeriodBounds | None = None,
    allowed_absences: int = DEFAULT_ALLOWED_ABSENCES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    classes_repo = MySQLClassRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    cancellations_repo = MySQLCancellationRepository(conn)

    attendance_report_service = AttendanceReportService(
        attendance_repo,
        classes_repo,
        bounds=period_bounds or PeriodBounds(),
        allowed_absences=allowed_absences,
    )
    enrollment_service = EnrollmentService(classes_repo)
    cancellation_service = CancellationService(cancellations_repo, classes_repo)

    return Container(
        conn=conn,
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        cancellations_repo=cancellations_repo,
        attendance_report_service=attendance_report_service,
        enrollment_service=enrollment_service,
        cancellation_service=cancellation_service,
    )
