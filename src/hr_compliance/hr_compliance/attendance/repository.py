from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance store.

    Implementations must enforce one record per (employee_id, work_date) and
    raise DuplicateOperation from ``insert`` when it is violated.
    """

    def get_by_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_by_employee_in_range(self, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records with start <= work_date <= end, ordered by work_date."""

        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        """Persist a new record (attendance_id is ignored) and return its id."""

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError
