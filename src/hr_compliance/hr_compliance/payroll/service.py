from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_negative
from ..core.enums import PayrollStatus
from ..core.exceptions import AccountNotLinked, AlreadyPaid, DuplicatePending, NotFound, PolicyViolation
from ..employees.repository import EmployeeDirectory
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .deductions import DeductionCalculator
from .model import DeductionSummary, LoanInstallment, PayrollPeriod, PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollDraft:
    record: PayrollRecord
    deductions: DeductionSummary


class PayrollService:
    """Creates payroll records and drives pending -> paid | cancelled.

    The duplicate lookups are a fast fail for the caller; the store's
    unique key on non-cancelled (employee, period) rows is the guarantee.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeDirectory,
        deductions: DeductionCalculator,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._deductions = deductions
        self._calculator = calculator or StandardPayrollCalculator()

    def _ensure_can_create(self, employee_id: int, period: PayrollPeriod) -> None:
        if not self._employees.has_linked_account(employee_id):
            raise AccountNotLinked(f"Employee {employee_id} has no linked system account")
        if self._payroll.exists_for_period(
            employee_id, period, exclude_statuses=(PayrollStatus.PAID, PayrollStatus.CANCELLED)
        ):
            raise DuplicatePending(f"Payroll for {period} is already submitted and pending")
        if self._payroll.exists_for_period(
            employee_id, period, exclude_statuses=(PayrollStatus.PENDING, PayrollStatus.CANCELLED)
        ):
            raise AlreadyPaid(f"Payroll for {period} has already been paid")

    def _build(
        self,
        employee_id: int,
        period: PayrollPeriod,
        base_salary,
        allowances,
        deductions,
        overtime_hours,
        overtime_rate,
        loan_items: Sequence[LoanInstallment] = (),
    ) -> PayrollRecord:
        base = require_non_negative(base_salary, "Base salary")
        extra = require_non_negative(allowances, "Allowances")
        cut = require_non_negative(deductions, "Deductions")
        hours = require_non_negative(overtime_hours, "Overtime hours")
        rate = require_non_negative(overtime_rate, "Overtime rate")

        return PayrollRecord(
            payroll_id=0,
            employee_id=int(employee_id),
            period=period,
            base_salary=base,
            allowances=extra,
            deductions=cut,
            net_salary=self._calculator.net_salary(
                base_salary=base,
                allowances=extra,
                deductions=cut,
                overtime_hours=hours,
                overtime_rate=rate,
            ),
            status=PayrollStatus.PENDING,
            loan_items=tuple(loan_items),
        )

    def _insert(self, record: PayrollRecord) -> PayrollRecord:
        record = replace(record, payroll_id=self._payroll.insert(record))
        logger.info(
            "Payroll %s created employee=%s period=%s net=%s",
            record.payroll_id, record.employee_id, record.period, record.net_salary,
        )
        return record

    def create(
        self,
        employee_id: int,
        period: PayrollPeriod,
        base_salary,
        allowances=Decimal("0"),
        deductions=Decimal("0"),
        overtime_hours=Decimal("0"),
        overtime_rate=Decimal("0"),
    ) -> PayrollRecord:
        record = self._build(
            int(employee_id), period, base_salary, allowances, deductions, overtime_hours, overtime_rate
        )
        self._ensure_can_create(record.employee_id, period)
        return self._insert(record)

    def create_for_period(
        self,
        employee_id: int,
        period: PayrollPeriod,
        *,
        base_salary=None,
        allowances=Decimal("0"),
        overtime_hours=Decimal("0"),
        overtime_rate=Decimal("0"),
    ) -> PayrollDraft:
        """Compute deductions for the period, then create the record.

        Nothing is written if the deduction reads fail. The loan installments
        deducted here are stored with the record and drained when it is paid.
        """

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFound(f"Employee {employee_id} does not exist")
        self._ensure_can_create(employee.employee_id, period)

        summary = self._deductions.compute(employee.employee_id, period)
        record = self._build(
            employee.employee_id,
            period,
            employee.salary if base_salary is None else base_salary,
            allowances,
            summary.total,
            overtime_hours,
            overtime_rate,
            loan_items=summary.loan_items,
        )
        return PayrollDraft(record=self._insert(record), deductions=summary)

    def _get_pending(self, payroll_id: int) -> PayrollRecord:
        record = self._payroll.get_by_id(int(payroll_id))
        if not record:
            raise NotFound(f"Payroll {payroll_id} does not exist")
        if record.status != PayrollStatus.PENDING:
            raise PolicyViolation(f"Payroll {payroll_id} is already {record.status.value}")
        return record

    def mark_as_paid(self, payroll_id: int, pay_date: Optional[date] = None) -> PayrollRecord:
        """pending -> paid; the record's loan installments are drained by the same store write."""

        record = self._get_pending(payroll_id)
        pay_date = pay_date or now_local().date()
        if not self._payroll.mark_paid(record.payroll_id, pay_date):
            raise PolicyViolation(f"Payroll {record.payroll_id} is no longer pending")
        logger.info(
            "Payroll %s pending -> paid (%d loan installment(s) drained)",
            record.payroll_id, len(record.loan_items),
        )
        return replace(record, status=PayrollStatus.PAID, pay_date=pay_date)

    def cancel(self, payroll_id: int) -> PayrollRecord:
        record = self._get_pending(payroll_id)
        cancelled = replace(record, status=PayrollStatus.CANCELLED)
        if not self._payroll.update(cancelled):
            raise PolicyViolation(f"Payroll {record.payroll_id} is no longer pending")
        logger.info("Payroll %s pending -> cancelled", record.payroll_id)
        return cancelled
