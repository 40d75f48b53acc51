from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LoanStatus
from .model import Loan


class LoanRepository(Protocol):
    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        raise NotImplementedError

    def get_active_by_employee(self, employee_id: int, period_start: date) -> Sequence[Loan]:
        """Approved loans with remaining_amount > 0 and start_date <= period_start."""

        raise NotImplementedError

    def create(self, loan: Loan) -> int:
        raise NotImplementedError

    def decide(self, *, loan_id: int, status: LoanStatus) -> bool:
        """Move a *pending* loan to ``status``; False if it was not pending."""

        raise NotImplementedError
