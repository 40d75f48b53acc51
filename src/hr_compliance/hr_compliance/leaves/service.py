from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days, now_local
from ..common.validators import require_non_empty
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import DuplicateOperation, NotFound, ValidationError
from ..employees.repository import EmployeeDirectory
from .model import LateReturn, LeaveRequest
from .quota import LeaveQuotaTracker
from .repository import LeaveRepository
from .return_monitor import LeaveReturnMonitor

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeDirectory,
        quota_tracker: LeaveQuotaTracker,
        return_monitor: LeaveReturnMonitor,
    ):
        self._leaves = leaves
        self._employees = employees
        self._quota = quota_tracker
        self._returns = return_monitor

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFound(f"Employee {employee_id} does not exist")
        try:
            leave_type = LeaveType(leave_type)
        except ValueError:
            raise ValidationError(f"Unknown leave type: {leave_type!r}")
        if start_date is None or end_date is None:
            raise ValidationError("Start and end date are required")
        if end_date < start_date:
            raise ValidationError("End date must be on or after the start date")

        request = LeaveRequest(
            leave_id=0,
            employee_id=int(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=inclusive_days(start_date, end_date),
            reason=require_non_empty(reason, "Reason"),
            status=RequestStatus.PENDING,
        )
        return replace(request, leave_id=self._leaves.create(request))

    def _get_pending(self, leave_id: int) -> LeaveRequest:
        request = self._leaves.get_by_id(int(leave_id))
        if not request:
            raise NotFound(f"Leave request {leave_id} does not exist")
        if request.status != RequestStatus.PENDING:
            raise DuplicateOperation(f"Leave request {leave_id} was already {request.status.value}")
        return request

    def approve(self, leave_id: int, *, approved_by: int, now: Optional[datetime] = None) -> LeaveRequest:
        """pending -> approved, booking the days against the employee's quota.

        The status change and the quota booking are one store write; a
        refused booking leaves the request pending.
        """

        now = now or now_local()
        request = self._get_pending(leave_id)
        self._quota.apply_approval(request, approved_by=int(approved_by), approved_at=now)

        approved = replace(request, status=RequestStatus.APPROVED, approved_by=int(approved_by), approved_at=now)
        logger.info("Leave %s approved by %s (%s days)", leave_id, approved_by, approved.days)
        return approved

    def reject(self, leave_id: int) -> LeaveRequest:
        request = self._get_pending(leave_id)
        if not self._leaves.decide(
            leave_id=request.leave_id,
            status=RequestStatus.REJECTED,
            approved_by=None,
            approved_at=None,
        ):
            raise DuplicateOperation(f"Leave request {leave_id} was already decided")
        logger.info("Leave %s rejected", leave_id)
        return replace(request, status=RequestStatus.REJECTED)

    def check_return(self, leave_id: int, today: date) -> LateReturn:
        request = self._leaves.get_by_id(int(leave_id))
        if not request:
            raise NotFound(f"Leave request {leave_id} does not exist")
        return self._returns.check(request, today)

    def check_returns(self, today: date, *, employee_id: Optional[int] = None) -> dict[int, LateReturn]:
        if employee_id is None:
            leaves = self._leaves.get_all()
        else:
            leaves = self._leaves.get_approved_by_employee(int(employee_id))
        return self._returns.scan(leaves, today)
