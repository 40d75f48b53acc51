from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol

from ..core.enums import PayrollStatus
from .model import PayrollPeriod, PayrollRecord


class PayrollRepository(Protocol):
    """Payroll store.

    Implementations must keep at most one non-cancelled record per
    (employee, period) and raise DuplicatePending from ``insert`` otherwise.
    """

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def exists_for_period(
        self,
        employee_id: int,
        period: PayrollPeriod,
        exclude_statuses: Iterable[PayrollStatus] = (),
    ) -> bool:
        raise NotImplementedError

    def insert(self, record: PayrollRecord) -> int:
        """Store the record together with its loan items."""

        raise NotImplementedError

    def update(self, record: PayrollRecord) -> bool:
        """Persist status/pay_date; only a pending row may change."""

        raise NotImplementedError

    def mark_paid(self, payroll_id: int, pay_date: date) -> bool:
        """pending -> paid, draining the record's loan items in the same transaction.

        Each listed loan loses its installment (floored at zero, paid_off at
        zero). False, with nothing written, if the record was not pending.
        """

        raise NotImplementedError
