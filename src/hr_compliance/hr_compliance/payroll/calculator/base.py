from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def net_salary(
        self,
        *,
        base_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        overtime_hours: Decimal,
        overtime_rate: Decimal,
    ) -> Decimal:
        raise NotImplementedError
