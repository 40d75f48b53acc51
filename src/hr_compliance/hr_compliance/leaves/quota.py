from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..core.exceptions import DuplicateOperation, NotFound, PolicyViolation, ValidationError
from ..settings.provider import SettingsProvider, StaticSettingsProvider
from .model import LeaveQuota, LeaveRequest
from .repository import LeaveQuotaRepository

logger = logging.getLogger(__name__)


class LeaveQuotaTracker:
    """Keeps total/used/remaining leave days in step with approvals.

    There is no reverse operation: an approval that is later
    invalidated does not give days back.
    """

    def __init__(self, quotas: LeaveQuotaRepository, settings: Optional[SettingsProvider] = None):
        self._quotas = quotas
        self._settings = settings or StaticSettingsProvider()

    def get(self, employee_id: int) -> LeaveQuota:
        quota = self._quotas.get(int(employee_id))
        if not quota:
            raise NotFound(f"No leave quota for employee {employee_id}")
        return quota

    def open_quota(self, employee_id: int, total_days: Optional[int] = None) -> LeaveQuota:
        total = self._settings.get_annual_leave_quota() if total_days is None else int(total_days)
        if total < 0:
            raise ValidationError("Quota must not be negative")
        if self._quotas.get(int(employee_id)):
            raise DuplicateOperation(f"Employee {employee_id} already has a leave quota")
        quota = LeaveQuota.opened(int(employee_id), total)
        self._quotas.create(quota)
        return quota

    def ensure_available(self, leave: LeaveRequest) -> LeaveQuota:
        quota = self.get(leave.employee_id)
        if leave.days > quota.remaining_days:
            raise PolicyViolation(
                f"Leave of {leave.days} days exceeds remaining quota of {quota.remaining_days} days"
            )
        return quota

    def apply_approval(
        self,
        leave: LeaveRequest,
        *,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> LeaveQuota:
        """Book ``leave.days`` against the employee's quota.

        With ``approved_at`` the pending request is approved by the same store
        write, so a refused booking leaves it pending.
        """

        if leave.days <= 0:
            raise ValidationError("Leave must cover at least one day")
        self.ensure_available(leave)
        booked = self._quotas.increment_used(
            leave.employee_id,
            leave.days,
            leave_id=leave.leave_id if approved_at is not None else None,
            approved_by=approved_by,
            approved_at=approved_at,
        )
        if not booked:
            raise PolicyViolation("Leave quota would go negative")

        quota = self.get(leave.employee_id)
        logger.info(
            "Leave quota employee=%s used=%s remaining=%s",
            quota.employee_id, quota.used_days, quota.remaining_days,
        )
        return quota
