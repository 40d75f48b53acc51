from __future__ import annotations

from typing import Optional

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchone
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, join_date, salary, status, user_id
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                join_date=r["join_date"],
                salary=as_decimal(r["salary"]),
                status=EmployeeStatus(r["status"]),
                user_id=int(r["user_id"]) if r.get("user_id") is not None else None,
            )

    def has_linked_account(self, employee_id: int) -> bool:
        employee = self.get_by_id(employee_id)
        return bool(employee and employee.has_account)
