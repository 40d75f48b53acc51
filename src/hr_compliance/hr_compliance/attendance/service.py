from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..compliance.accumulator import ComplianceAccumulator
from ..compliance.model import EscalationEvent
from ..compliance.policies import EscalationPolicy
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..core.exceptions import DuplicateOperation, NotFound, PolicyViolation, StoreError, ValidationError
from ..employees.repository import EmployeeDirectory
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository
from ..leaves.return_monitor import LeaveReturnMonitor
from .classifier import AttendanceClassifier
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .strategies.base import Classification

logger = logging.getLogger(__name__)

MANUAL_STATUSES = frozenset({AttendanceStatus.ABSENT, AttendanceStatus.LEAVE, AttendanceStatus.HOLIDAY})


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    classification: Classification
    escalations: list[EscalationEvent]
    late_return: Optional[LeaveRequest] = None


@dataclass(frozen=True)
class CheckOutResult:
    record: AttendanceRecord
    worked_minutes: int
    escalations: list[EscalationEvent]
    late_return: Optional[LeaveRequest] = None


class AttendanceService:
    """Check-in / check-out flows.

    Callers run any identity gate (face verification) before ``check_in``.
    The duplicate lookups here only fail fast; the store's unique key on
    (employee, day) is what actually prevents double punches.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        classifier: Optional[AttendanceClassifier] = None,
        compliance: Optional[ComplianceAccumulator] = None,
        *,
        check_in_policies: Sequence[EscalationPolicy] = (),
        check_out_policies: Sequence[EscalationPolicy] = (),
        leaves: Optional[LeaveRepository] = None,
        return_monitor: Optional[LeaveReturnMonitor] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._classifier = classifier or AttendanceClassifier()
        self._compliance = compliance
        self._check_in_policies = tuple(check_in_policies)
        self._check_out_policies = tuple(check_out_policies)
        self._leaves = leaves
        self._returns = return_monitor

    def _require_employee(self, employee_id: int):
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFound(f"Employee {employee_id} does not exist")
        if employee.status != EmployeeStatus.ACTIVE:
            raise PolicyViolation(f"Employee {employee_id} is not active")
        return employee

    def _escalate(self, policies: Sequence[EscalationPolicy], employee_id: int, on_date: date) -> list[EscalationEvent]:
        if not self._compliance:
            return []
        events = []
        for policy in policies:
            event = self._compliance.evaluate(policy, employee_id, on_date)
            if event:
                events.append(event)
        return events

    def _late_return(self, employee_id: int, work_date: date) -> Optional[LeaveRequest]:
        """The approved leave this punch comes back late from, on the first punch after it.

        A punch on the leave's own end date is never a late return.
        """

        if not self._leaves or not self._returns:
            return None
        try:
            ended = [lv for lv in self._leaves.get_approved_by_employee(employee_id) if lv.end_date < work_date]
            if not ended:
                return None
            leave = max(ended, key=lambda lv: lv.end_date)
            result = self._returns.check(leave, work_date)
        except StoreError:
            # The punch is already stored; the warning is advisory.
            logger.exception("Late-return check failed for employee %s on %s", employee_id, work_date)
            return None

        if not (result.is_late and result.return_date == work_date):
            return None
        logger.warning(
            "Employee %s returned late from leave %s (ended %s)", employee_id, leave.leave_id, leave.end_date
        )
        return leave

    def check_in(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CheckInResult:
        now = now or now_local()
        today = now.date()
        self._require_employee(employee_id)

        existing = self._attendance.get_by_employee_and_date(int(employee_id), today)
        if existing:
            raise DuplicateOperation("Already checked in today")

        decision = self._classifier.classify(now, today)
        record = AttendanceRecord(
            attendance_id=0,
            employee_id=int(employee_id),
            work_date=today,
            check_in=now,
            check_out=None,
            status=decision.status,
            location=(location or "").strip() or None,
            notes=(notes or "").strip() or decision.note,
        )
        attendance_id = self._attendance.insert(record)
        record = replace(record, attendance_id=attendance_id)
        logger.info(
            "Check-in employee=%s date=%s status=%s late_minutes=%s",
            employee_id, today, decision.status.value, decision.late_minutes,
        )

        escalations = self._escalate(self._check_in_policies, int(employee_id), today)
        return CheckInResult(
            record=record,
            classification=decision,
            escalations=escalations,
            late_return=self._late_return(int(employee_id), today),
        )

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> CheckOutResult:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_by_employee_and_date(int(employee_id), today)
        if not record or record.check_in is None:
            raise NotFound("No check-in recorded today")
        if record.check_out is not None:
            raise DuplicateOperation("Already checked out today")
        if now < record.check_in:
            raise ValidationError("Check-out cannot be earlier than check-in")

        updated = replace(record, check_out=now)
        if not self._attendance.update(updated):
            raise NotFound(f"Attendance record {record.attendance_id} no longer exists")
        logger.info("Check-out employee=%s date=%s worked_minutes=%s", employee_id, today, updated.worked_minutes())

        escalations = self._escalate(self._check_out_policies, int(employee_id), today)
        return CheckOutResult(
            record=updated,
            worked_minutes=updated.worked_minutes(),
            escalations=escalations,
            late_return=self._late_return(int(employee_id), today),
        )

    def mark_status(
        self,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        *,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Record a day without a punch (absent, leave, holiday)."""

        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {status!r}")
        if status not in MANUAL_STATUSES:
            raise ValidationError(f"Status {status.value} is set by check-in, not manually")
        self._require_employee(employee_id)

        if self._attendance.get_by_employee_and_date(int(employee_id), work_date):
            raise DuplicateOperation("Attendance for this day is already recorded")

        record = AttendanceRecord(
            attendance_id=0,
            employee_id=int(employee_id),
            work_date=work_date,
            check_in=None,
            check_out=None,
            status=status,
            notes=(notes or "").strip() or None,
        )
        return replace(record, attendance_id=self._attendance.insert(record))

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_by_employee_and_date(int(employee_id), today)
