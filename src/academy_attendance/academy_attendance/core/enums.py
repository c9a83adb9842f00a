from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used by the controllers for access checks."""

    ADMIN = "SUPER_ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class AttendanceStatus(str, Enum):
    """Daily attendance status recorded per student and class."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    SICK_LEAVE = "SICK_LEAVE"
    VACATION = "VACATION"
    EARLY_LEAVE = "EARLY_LEAVE"


class RequestStatus(str, Enum):
    """Cancellation request lifecycle: PENDING moves exactly once to a terminal state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
