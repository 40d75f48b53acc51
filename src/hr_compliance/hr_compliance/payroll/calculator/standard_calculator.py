from __future__ import annotations

from decimal import Decimal

from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base + allowances + overtime hours * rate - deductions.

    Exact Decimal arithmetic, no rounding.
    """

    def net_salary(
        self,
        *,
        base_salary: Decimal,
        allowances: Decimal,
        deductions: Decimal,
        overtime_hours: Decimal,
        overtime_rate: Decimal,
    ) -> Decimal:
        return base_salary + allowances + overtime_hours * overtime_rate - deductions
