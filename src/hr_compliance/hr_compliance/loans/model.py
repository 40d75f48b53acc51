from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import LoanStatus


@dataclass(frozen=True)
class Loan:
    """Salary advance repaid by a fixed installment each payroll period."""

    loan_id: int
    employee_id: int
    amount: Decimal
    remaining_amount: Decimal
    installment_amount: Decimal
    start_date: date
    status: LoanStatus
    reason: Optional[str] = None

    def is_active_for(self, period_start: date) -> bool:
        return (
            self.status == LoanStatus.APPROVED
            and self.remaining_amount > 0
            and self.start_date <= period_start
        )

    def after_installment(self, installment: Decimal) -> "Loan":
        """Balance after one installment; floors at zero and flips to paid_off there."""
        remaining = max(self.remaining_amount - installment, Decimal("0"))
        status = LoanStatus.PAID_OFF if remaining == 0 else self.status
        return replace(self, remaining_amount=remaining, status=status)
