from __future__ import annotations

import threading
import time as _time
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.academy_attendance.academy_attendance.cancellations.model import CancellationRequest
from src.academy_attendance.academy_attendance.cancellations.service import CancellationService
from src.academy_attendance.academy_attendance.classes.model import AcademyClass
from src.academy_attendance.academy_attendance.core.enums import RequestStatus, Role
from src.academy_attendance.academy_attendance.users.model import LeaveBalance, User


class InMemoryTx:
    def __init__(self, store: "InMemoryAcademyStore"):
        self._store = store

    def get_request_for_update(self, request_id):
        return self._store.requests.get(int(request_id))

    def get_class_for_update(self, class_id):
        cls = self._store.classes.get(int(class_id))
        if self._store.read_delay:
            _time.sleep(self._store.read_delay)
        return cls

    def get_teacher_for_update(self, teacher_id):
        return self._store.teachers.get(int(teacher_id))

    def set_period_days(self, *, class_id, period_days):
        self._store.classes[class_id] = replace(self._store.classes[class_id], period_days=period_days)

    def set_leave_balance(self, *, teacher_id, balance):
        if self._store.fail_on_leave_update:
            raise RuntimeError("leave update failed")
        self._store.teachers[teacher_id] = replace(self._store.teachers[teacher_id], leave=balance)

    def mark_reviewed(self, *, request_id, status, reviewed_by, reviewed_at, rejected_reason=None):
        req = self._store.requests.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self._store.requests[req.request_id] = replace(
            req,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=reviewed_at,
            rejected_reason=rejected_reason,
        )
        return True


class InMemoryAcademyStore:
    """Class + cancellation repository fake. A transaction holds one lock, like a row lock."""

    def __init__(self):
        self.classes: dict[int, AcademyClass] = {}
        self.teachers: dict[int, User] = {}
        self.requests: dict[int, CancellationRequest] = {}
        self.read_delay = 0.0
        self.fail_on_leave_update = False
        self._next_id = 1
        self._lock = threading.Lock()

    # ClassRepository
    def get_by_id(self, class_id):
        return self.classes.get(int(class_id))

    def list_for_student(self, student_id, *, exclude_class_id=None):
        return []

    def list_student_ids(self, class_id):
        return []

    # CancellationRepository
    def create(self, *, class_id, teacher_id, reason, dates):
        rid = self._next_id
        self._next_id += 1
        self.requests[rid] = CancellationRequest(
            request_id=rid,
            class_id=int(class_id),
            teacher_id=int(teacher_id),
            reason=reason,
            dates=tuple(dates),
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 1, 5, 9, 0, 0),
        )
        return rid

    def get(self, *, request_id):
        return self.requests.get(int(request_id))

    def list_requests(self, *, status=None, teacher_id=None, limit=200):
        rows = [
            r
            for r in self.requests.values()
            if (status is None or r.status == status) and (teacher_id is None or r.teacher_id == teacher_id)
        ]
        rows.sort(key=lambda r: r.request_id, reverse=True)
        return rows[:limit]

    def delete(self, *, request_id):
        return self.requests.pop(int(request_id), None) is not None

    @contextmanager
    def transaction(self):
        with self._lock:
            snapshot = (dict(self.classes), dict(self.teachers), dict(self.requests))
            try:
                yield InMemoryTx(self)
            except Exception:
                self.classes, self.teachers, self.requests = snapshot
                raise

    # helpers
    def add_class(
        self,
        class_id: int,
        *,
        teacher_id: int = 10,
        start_date: Optional[date] = date(2024, 1, 1),
        period_days: Optional[int] = 30,
        schedule: Optional[str] = None,
    ) -> AcademyClass:
        cls = AcademyClass(
            class_id=class_id,
            name=f"Class {class_id}",
            teacher_id=teacher_id,
            start_date=start_date,
            period_days=period_days,
            schedule=schedule,
        )
        self.classes[class_id] = cls
        return cls

    def add_teacher(self, user_id: int = 10, *, annual: int = 5, monthly: int = 5) -> User:
        teacher = User(user_id=user_id, name=f"T{user_id}", role=Role.TEACHER, leave=LeaveBalance(annual, monthly))
        self.teachers[user_id] = teacher
        return teacher

    def add_request(self, class_id: int, dates, *, teacher_id: int = 10) -> int:
        return self.create(class_id=class_id, teacher_id=teacher_id, reason="개인 사정", dates=list(dates))


@pytest.fixture
def store() -> InMemoryAcademyStore:
    return InMemoryAcademyStore()


@pytest.fixture
def service(store) -> CancellationService:
    return CancellationService(store, store)
