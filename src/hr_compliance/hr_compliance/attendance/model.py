from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    location: Optional[str] = None
    notes: Optional[str] = None

    def worked_minutes(self) -> int:
        """(out - in), not below 0; 0 while the day is still open."""
        if not self.check_in or not self.check_out:
            return 0
        minutes = int((self.check_out - self.check_in).total_seconds() // 60)
        return max(minutes, 0)
