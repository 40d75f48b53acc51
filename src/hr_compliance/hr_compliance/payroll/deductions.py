from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..attendance.classifier import AttendanceClassifier
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus
from ..loans.repository import LoanRepository
from ..settings.provider import SettingsProvider, StaticSettingsProvider
from .model import DeductionSummary, LoanInstallment, PayrollPeriod


class DeductionCalculator:
    """Loan installments plus lateness penalty for one payroll period.

    Both the loan and the attendance read must succeed; a failed read
    propagates instead of counting as zero.
    """

    def __init__(
        self,
        loans: LoanRepository,
        attendance: AttendanceRepository,
        settings: Optional[SettingsProvider] = None,
        classifier: Optional[AttendanceClassifier] = None,
    ):
        self._loans = loans
        self._attendance = attendance
        self._settings = settings or StaticSettingsProvider()
        self._classifier = classifier or AttendanceClassifier()

    def compute(self, employee_id: int, period: PayrollPeriod) -> DeductionSummary:
        period_start = period.first_day
        loans = self._loans.get_active_by_employee(int(employee_id), period_start)
        records = self._attendance.get_by_employee_in_range(int(employee_id), period.first_day, period.last_day)

        loan_items = tuple(
            sorted(
                (
                    LoanInstallment(loan_id=loan.loan_id, amount=loan.installment_amount)
                    for loan in loans
                    if loan.employee_id == int(employee_id) and loan.is_active_for(period_start)
                ),
                key=lambda item: item.loan_id,
            )
        )
        loan_deduction = sum((item.amount for item in loan_items), Decimal("0"))

        late_minutes = 0
        absent_count = 0
        for r in records:
            if not period.contains(r.work_date):
                continue
            if r.status == AttendanceStatus.LATE and r.check_in is not None:
                late_minutes += self._classifier.late_minutes(r.check_in, r.work_date)
            elif r.status == AttendanceStatus.ABSENT:
                absent_count += 1

        late_penalty = Decimal("0")
        if late_minutes:
            late_penalty = late_minutes * self._settings.get_late_penalty_rate_per_minute()

        breakdown = []
        if loan_deduction > 0:
            breakdown.append(f"Loan installments: {loan_deduction}")
        if late_minutes > 0:
            breakdown.append(f"Lateness: {late_minutes} minutes ({late_penalty})")
        if absent_count > 0:
            breakdown.append(f"Absences: {absent_count} day(s), not deducted")

        return DeductionSummary(
            total=loan_deduction + late_penalty,
            breakdown=breakdown,
            loan_deduction=loan_deduction,
            late_penalty=late_penalty,
            late_minutes=late_minutes,
            absent_count=absent_count,
            loan_items=loan_items,
        )
