from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_role, fail, handle_domain_errors, ok, role_required
from ..container import Container
from ..core.enums import RequestStatus, Role


def register(app: Flask, container: Container) -> None:
    service = container.cancellation_service

    @app.route("/api/cancellations", methods=["POST"], endpoint="cancellation_create")
    @role_required(Role.TEACHER)
    @handle_domain_errors
    def cancellation_create():
        data = request.get_json(silent=True) or {}
        raw_dates = data.get("dates")
        if not data.get("class_id") or not isinstance(raw_dates, list):
            return fail("필수 정보가 누락되었습니다.", 400)
        try:
            class_id = int(data["class_id"])
        except (TypeError, ValueError):
            return fail("클래스 정보가 올바르지 않습니다.", 400)
        try:
            dates = [parse_iso_date(str(d)) for d in raw_dates]
        except ValueError:
            return fail("날짜 형식이 올바르지 않습니다. (YYYY-MM-DD)", 400)

        req = service.submit(
            class_id=class_id,
            teacher_id=int(session["user_id"]),
            reason=data.get("reason", ""),
            dates=dates,
        )
        return ok(service.to_ui(req))

    @app.route("/api/cancellations/my", methods=["GET"], endpoint="cancellation_my")
    @role_required(Role.TEACHER)
    @handle_domain_errors
    def cancellation_my():
        rows = service.list_for_teacher(teacher_id=int(session["user_id"]))
        return ok([service.to_ui(r) for r in rows])

    @app.route("/api/cancellations", methods=["GET"], endpoint="cancellation_list")
    @role_required(Role.ADMIN)
    @handle_domain_errors
    def cancellation_list():
        status_s = request.args.get("status")
        try:
            status = RequestStatus(status_s) if status_s else None
        except ValueError:
            return fail("알 수 없는 상태입니다.", 400)
        rows = service.list_for_admin(status=status)
        return ok([service.to_ui(r) for r in rows])

    @app.route("/api/cancellations/<int:request_id>/approve", methods=["PUT"], endpoint="cancellation_approve")
    @role_required(Role.ADMIN)
    @handle_domain_errors
    def cancellation_approve(request_id: int):
        result = service.approve(request_id=request_id, admin_id=int(session["user_id"]))
        data = service.to_ui(result.request)
        data["new_period_days"] = result.new_period_days
        data["make_up_dates"] = [d.strftime("%Y-%m-%d") for d in result.make_up_dates]
        if result.new_leave_balance is not None:
            data["leave"] = {
                "annual_leave_days": result.new_leave_balance.annual_leave_days,
                "monthly_leave_days": result.new_leave_balance.monthly_leave_days,
            }
        message = "휴강이 승인되었습니다."
        if result.make_up_dates:
            last = result.make_up_dates[-1]
            message += f" 보강일은 {last.year}년 {last.month}월 {last.day}일까지 연장됩니다."
        return ok(data, message=message)

    @app.route("/api/cancellations/<int:request_id>/reject", methods=["PUT"], endpoint="cancellation_reject")
    @role_required(Role.ADMIN)
    @handle_domain_errors
    def cancellation_reject(request_id: int):
        data = request.get_json(silent=True) or {}
        req = service.reject(
            request_id=request_id,
            admin_id=int(session["user_id"]),
            reason=data.get("rejected_reason"),
        )
        return ok(service.to_ui(req))

    @app.route("/api/cancellations/<int:request_id>", methods=["DELETE"], endpoint="cancellation_delete")
    @role_required()
    @handle_domain_errors
    def cancellation_delete(request_id: int):
        service.delete(request_id=request_id, actor_id=int(session["user_id"]), actor_role=current_role())
        return ok(message="휴강 신청이 삭제되었습니다.")
