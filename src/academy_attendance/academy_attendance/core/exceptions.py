from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION = "VALIDATION"
    STATE_CONFLICT = "STATE_CONFLICT"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"


class DomainError(Exception):
    """Base exception for business rule violations."""

    code: ErrorCode = ErrorCode.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = ErrorCode.VALIDATION


class StateConflictError(DomainError):
    """Raised when a request is not in the status the operation requires."""

    code = ErrorCode.STATE_CONFLICT


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = ErrorCode.AUTHORIZATION


class NotFoundError(DomainError):
    """Raised when a referenced class or request does not exist."""

    code = ErrorCode.NOT_FOUND
