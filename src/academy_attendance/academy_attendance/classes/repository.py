from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AcademyClass


class ClassRepository(Protocol):
    """Read access to classes. Services depend on this protocol, never on a concrete DB adapter."""

    def get_by_id(self, class_id: int) -> Optional[AcademyClass]:
        raise NotImplementedError

    def list_for_student(self, student_id: int, *, exclude_class_id: Optional[int] = None) -> Sequence[AcademyClass]:
        """Classes the student is currently enrolled in."""

        raise NotImplementedError

    def list_student_ids(self, class_id: int) -> Sequence[int]:
        """Roster of the class."""

        raise NotImplementedError
