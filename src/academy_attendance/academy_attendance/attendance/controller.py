from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_role, fail, handle_domain_errors, ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    service = container.attendance_report_service

    def _student_id() -> int:
        # Students only ever see their own numbers.
        if current_role() == Role.STUDENT:
            return int(session["user_id"])
        return request.args.get("student_id", default=0, type=int)

    @app.route("/api/classes/<int:class_id>/attendance/current", methods=["GET"], endpoint="attendance_current")
    @role_required()
    @handle_domain_errors
    def attendance_current(class_id: int):
        student_id = _student_id()
        if student_id <= 0:
            return fail("학생을 지정해주세요.", 400)
        try:
            target = parse_iso_date(request.args["date"]) if request.args.get("date") else None
        except ValueError:
            return fail("날짜 형식이 올바르지 않습니다. (YYYY-MM-DD)", 400)

        report = service.current_period_summary(class_id=class_id, student_id=student_id, target_date=target)
        return ok(service.to_ui(report))

    @app.route("/api/classes/<int:class_id>/attendance/history", methods=["GET"], endpoint="attendance_history")
    @role_required()
    @handle_domain_errors
    def attendance_history(class_id: int):
        student_id = _student_id()
        if student_id <= 0:
            return fail("학생을 지정해주세요.", 400)

        reports = service.period_history(class_id=class_id, student_id=student_id)
        return ok([service.to_ui(r) for r in reports])

    @app.route("/api/classes/<int:class_id>/attendance/warnings", methods=["GET"], endpoint="attendance_warnings")
    @role_required(Role.ADMIN, Role.TEACHER)
    @handle_domain_errors
    def attendance_warnings(class_id: int):
        try:
            target = parse_iso_date(request.args["date"]) if request.args.get("date") else None
        except ValueError:
            return fail("날짜 형식이 올바르지 않습니다. (YYYY-MM-DD)", 400)

        reports = service.class_warnings(class_id=class_id, target_date=target)
        return ok([service.to_ui(r) for r in reports])
