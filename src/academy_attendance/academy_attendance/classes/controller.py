from __future__ import annotations

from flask import Flask, request

from ..common.web import fail, handle_domain_errors, ok, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/<int:class_id>/enrollment-check", methods=["POST"], endpoint="enrollment_check")
    @role_required(Role.ADMIN, Role.TEACHER)
    @handle_domain_errors
    def enrollment_check(class_id: int):
        data = request.get_json(silent=True) or {}
        try:
            student_id = int(data.get("student_id") or 0)
        except (TypeError, ValueError):
            student_id = 0
        if student_id <= 0:
            return fail("학생을 지정해주세요.", 400)

        cls = container.enrollment_service.ensure_can_enroll(student_id=student_id, class_id=class_id)
        return ok({"class_id": cls.class_id, "student_id": student_id, "schedule": cls.schedule})
