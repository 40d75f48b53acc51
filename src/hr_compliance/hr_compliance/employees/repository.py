from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeDirectory(Protocol):
    """Read-only view of the external employee directory."""

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def has_linked_account(self, employee_id: int) -> bool:
        raise NotImplementedError
