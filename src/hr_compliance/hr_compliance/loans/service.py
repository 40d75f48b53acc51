from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.validators import require_positive
from ..core.enums import LoanStatus
from ..core.exceptions import DuplicateOperation, NotFound, PolicyViolation, ValidationError
from ..employees.repository import EmployeeDirectory
from .model import Loan
from .repository import LoanRepository

logger = logging.getLogger(__name__)


class LoanService:
    def __init__(self, loans: LoanRepository, employees: EmployeeDirectory):
        self._loans = loans
        self._employees = employees

    def create(
        self,
        *,
        employee_id: int,
        amount,
        installment_amount,
        start_date: date,
        reason: Optional[str] = None,
    ) -> Loan:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFound(f"Employee {employee_id} does not exist")
        if start_date is None:
            raise ValidationError("Start date is required")

        principal = require_positive(amount, "Loan amount")
        installment = require_positive(installment_amount, "Installment")
        if installment > principal:
            raise PolicyViolation("Installment cannot exceed the loan amount")

        loan = Loan(
            loan_id=0,
            employee_id=int(employee_id),
            amount=principal,
            remaining_amount=principal,
            installment_amount=installment,
            start_date=start_date,
            status=LoanStatus.PENDING,
            reason=(reason or "").strip() or None,
        )
        return replace(loan, loan_id=self._loans.create(loan))

    def _decide(self, loan_id: int, status: LoanStatus) -> Loan:
        loan = self._loans.get_by_id(int(loan_id))
        if not loan:
            raise NotFound(f"Loan {loan_id} does not exist")
        if loan.status != LoanStatus.PENDING or not self._loans.decide(loan_id=loan.loan_id, status=status):
            raise DuplicateOperation(f"Loan {loan_id} was already {loan.status.value}")
        logger.info("Loan %s %s", loan_id, status.value)
        return replace(loan, status=status)

    def approve(self, loan_id: int) -> Loan:
        return self._decide(loan_id, LoanStatus.APPROVED)

    def reject(self, loan_id: int) -> Loan:
        return self._decide(loan_id, LoanStatus.REJECTED)
