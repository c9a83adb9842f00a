from __future__ import annotations

import logging

from ..core.exceptions import NotFoundError, ValidationError
from ..schedules.conflicts import find_conflict
from .model import AcademyClass
from .repository import ClassRepository

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Gate run before a student is added to a class roster."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def ensure_can_enroll(self, *, student_id: int, class_id: int) -> AcademyClass:
        candidate = self._classes.get_by_id(int(class_id))
        if not candidate:
            raise NotFoundError("클래스를 찾을 수 없습니다.")

        if not candidate.schedule:
            return candidate

        existing = self._classes.list_for_student(int(student_id), exclude_class_id=candidate.class_id)
        clash = find_conflict(candidate.schedule, existing, schedule_of=lambda c: c.schedule)
        if clash is not None:
            logger.info(
                "Enrollment blocked: student=%s class=%s clashes with class=%s",
                student_id,
                candidate.class_id,
                clash.class_id,
            )
            raise ValidationError(
                f'시간대 충돌: "{candidate.name}" 클래스와 "{clash.name}" 클래스의 시간대가 겹칩니다. '
                f"({candidate.schedule} vs {clash.schedule})"
            )
        return candidate
