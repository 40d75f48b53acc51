from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveQuota, LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def get_approved_by_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get_all(self) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create(self, request: LeaveRequest) -> int:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: RequestStatus,
        approved_by: Optional[int],
        approved_at: Optional[datetime],
    ) -> bool:
        """Move a *pending* request to ``status``; False if it was not pending."""

        raise NotImplementedError


class LeaveQuotaRepository(Protocol):
    def get(self, employee_id: int) -> Optional[LeaveQuota]:
        raise NotImplementedError

    def create(self, quota: LeaveQuota) -> None:
        raise NotImplementedError

    def increment_used(
        self,
        employee_id: int,
        days: int,
        *,
        leave_id: Optional[int] = None,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> bool:
        """Atomically add ``days`` to used_days and recompute remaining_days.

        Must refuse (return False, nothing written) when remaining_days would
        go below zero. With ``leave_id`` the pending request is approved in
        the same transaction; if it is no longer pending nothing is written
        and DuplicateOperation is raised.
        """

        raise NotImplementedError
