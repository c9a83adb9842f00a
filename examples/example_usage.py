"""Using the service layer directly, without Flask.

Prints the current-period attendance summary for one student and the make-up
dates a two-day cancellation would produce.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.academy_attendance.academy_attendance.container import build_container
from src.academy_attendance.academy_attendance.main import period_bounds_from
from src.academy_attendance.academy_attendance.periods.calculator import make_up_dates


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        period_bounds=period_bounds_from(settings),
        allowed_absences=settings.ALLOWED_ABSENCES,
    )
    report = container.attendance_report_service.current_period_summary(class_id=1, student_id=1)
    print(container.attendance_report_service.to_ui(report))
    print(make_up_dates(date(2024, 1, 1), 30, 2))


if __name__ == "__main__":
    main()
