from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: str
    status: RequestStatus
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveQuota:
    """Leave allotment of one employee: remaining = total - used, never below 0."""

    employee_id: int
    total_days: int
    used_days: int
    remaining_days: int

    @classmethod
    def opened(cls, employee_id: int, total_days: int) -> "LeaveQuota":
        return cls(employee_id=employee_id, total_days=total_days, used_days=0, remaining_days=total_days)


@dataclass(frozen=True)
class LateReturn:
    is_late: bool
    return_date: Optional[date] = None
