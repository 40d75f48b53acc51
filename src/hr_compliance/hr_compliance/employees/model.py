from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee as seen by the engine (read-only).

    ``user_id`` is set once the employee has registered a system account.
    """

    employee_id: int
    full_name: str
    join_date: date
    salary: Decimal
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    user_id: Optional[int] = None

    @property
    def has_account(self) -> bool:
        return self.user_id is not None
