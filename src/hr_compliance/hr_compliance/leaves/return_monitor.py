from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from ..attendance.repository import AttendanceRepository
from ..core.enums import RequestStatus
from .model import LateReturn, LeaveRequest


class LeaveReturnMonitor:
    """Flags employees who have not come back to work after an approved leave.

    The scan starts the day after ``end_date``, so a check-in on the last
    leave day never counts.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def check(self, leave: LeaveRequest, today: date) -> LateReturn:
        if leave.status != RequestStatus.APPROVED:
            return LateReturn(is_late=False)
        # end_date is over only once the whole day has passed
        if leave.end_date >= today:
            return LateReturn(is_late=False)

        start = leave.end_date + timedelta(days=1)
        records = self._attendance.get_by_employee_in_range(leave.employee_id, start, today)
        returned = sorted(r.work_date for r in records if r.check_in is not None and r.work_date >= start)
        if not returned:
            return LateReturn(is_late=True)
        return LateReturn(is_late=True, return_date=returned[0])

    def scan(self, leaves: Iterable[LeaveRequest], today: date) -> dict[int, LateReturn]:
        return {
            leave.leave_id: self.check(leave, today)
            for leave in leaves
            if leave.status == RequestStatus.APPROVED
        }
