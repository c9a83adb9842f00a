from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import DomainError, ErrorCode

logger = logging.getLogger(__name__)

HTTP_STATUS = {
    ErrorCode.VALIDATION: 400,
    ErrorCode.AUTHORIZATION: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.STATE_CONFLICT: 409,
}


def ok(data=None, **extra):
    payload = {"success": True, "data": data}
    payload.update(extra)
    return jsonify(payload)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(e: DomainError):
    return jsonify({"success": False, "code": e.code.value, "message": str(e)}), HTTP_STATUS[e.code]


def current_role() -> Role:
    return Role(session["role"])


def role_required(*roles: Role):
    """Session must hold a user whose role is one of ``roles`` (any role when empty)."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return fail("로그인이 필요합니다.", 401)
            if roles and session.get("role") not in {r.value for r in roles}:
                return fail("권한이 없습니다.", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def handle_domain_errors(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("서버 내부 오류가 발생했습니다.", 500)

    return wrapper
