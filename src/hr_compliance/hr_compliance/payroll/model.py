from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollPeriod:
    """One salary run bucket: (month, year)."""

    month: int
    year: int

    def __post_init__(self):
        if not 1 <= int(self.month) <= 12:
            raise ValidationError(f"Invalid payroll month: {self.month}")
        if not 1 <= int(self.year) <= 9999:
            raise ValidationError(f"Invalid payroll year: {self.year}")

    @classmethod
    def of(cls, day: date) -> "PayrollPeriod":
        return cls(month=day.month, year=day.year)

    @property
    def first_day(self) -> date:
        return month_bounds(self.year, self.month)[0]

    @property
    def last_day(self) -> date:
        return month_bounds(self.year, self.month)[1]

    def contains(self, day: date) -> bool:
        return self.first_day <= day <= self.last_day

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"


@dataclass(frozen=True)
class LoanInstallment:
    """One loan installment taken off a payroll record."""

    loan_id: int
    amount: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    period: PayrollPeriod
    base_salary: Decimal
    allowances: Decimal
    deductions: Decimal
    net_salary: Decimal
    status: PayrollStatus
    pay_date: Optional[date] = None
    loan_items: tuple[LoanInstallment, ...] = ()

    @property
    def period_month(self) -> int:
        return self.period.month

    @property
    def period_year(self) -> int:
        return self.period.year


@dataclass(frozen=True)
class DeductionSummary:
    """Deductions of one employee for one period, with audit lines.

    ``absent_count`` is reported only; it is not part of ``total``.
    ``loan_items`` make up ``loan_deduction``; paying the record drains
    exactly those loans.
    """

    total: Decimal
    breakdown: list[str] = field(default_factory=list)
    loan_deduction: Decimal = Decimal("0")
    late_penalty: Decimal = Decimal("0")
    late_minutes: int = 0
    absent_count: int = 0
    loan_items: tuple[LoanInstallment, ...] = ()
