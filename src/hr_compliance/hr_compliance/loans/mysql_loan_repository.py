from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LoanStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Loan
from .repository import LoanRepository

LOAN_COLUMNS = "loan_id, employee_id, amount, remaining_amount, installment_amount, start_date, status, reason"


def to_loan(r: dict) -> Loan:
    return Loan(
        loan_id=int(r["loan_id"]),
        employee_id=int(r["employee_id"]),
        amount=as_decimal(r["amount"]),
        remaining_amount=as_decimal(r["remaining_amount"]),
        installment_amount=as_decimal(r["installment_amount"]),
        start_date=r["start_date"],
        status=LoanStatus(r["status"]),
        reason=r.get("reason"),
    )


class MySQLLoanRepository(LoanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, loan_id: int) -> Optional[Loan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {LOAN_COLUMNS} FROM loans WHERE loan_id=%s", (int(loan_id),))
            r = fetchone(cur)
            return to_loan(r) if r else None

    def get_active_by_employee(self, employee_id: int, period_start: date) -> Sequence[Loan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {LOAN_COLUMNS} FROM loans
                WHERE employee_id=%s AND status=%s AND remaining_amount > 0 AND start_date <= %s
                ORDER BY start_date ASC, loan_id ASC
                """,
                (int(employee_id), LoanStatus.APPROVED.value, period_start),
            )
            return [to_loan(r) for r in fetchall(cur)]

    def create(self, loan: Loan) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO loans(employee_id, amount, remaining_amount, installment_amount, start_date, status, reason)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    loan.employee_id,
                    loan.amount,
                    loan.remaining_amount,
                    loan.installment_amount,
                    loan.start_date,
                    loan.status.value,
                    loan.reason,
                ),
            )
            return int(cur.lastrowid)

    def decide(self, *, loan_id: int, status: LoanStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE loans SET status=%s WHERE loan_id=%s AND status=%s",
                (status.value, int(loan_id), LoanStatus.PENDING.value),
            )
            return cur.rowcount > 0
