from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

import mysql.connector

from ..core.enums import PayrollStatus
from ..core.exceptions import DuplicatePending
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, is_duplicate_key
from ..loans.mysql_loan_repository import LOAN_COLUMNS, to_loan
from .model import LoanInstallment, PayrollPeriod, PayrollRecord
from .repository import PayrollRepository

_COLUMNS = (
    "payroll_id, employee_id, period_month, period_year, base_salary, allowances, "
    "deductions, net_salary, status, pay_date"
)
_LOAN_ITEM_COLUMNS = ", ".join(f"l.{c.strip()}" for c in LOAN_COLUMNS.split(","))


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        period=PayrollPeriod(month=int(r["period_month"]), year=int(r["period_year"])),
        base_salary=as_decimal(r["base_salary"]),
        allowances=as_decimal(r["allowances"]),
        deductions=as_decimal(r["deductions"]),
        net_salary=as_decimal(r["net_salary"]),
        status=PayrollStatus(r["status"]),
        pay_date=r.get("pay_date"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            if not r:
                return None
            cur.execute(
                "SELECT loan_id, amount FROM payroll_loan_items WHERE payroll_id=%s ORDER BY loan_id",
                (int(payroll_id),),
            )
            items = tuple(
                LoanInstallment(loan_id=int(i["loan_id"]), amount=as_decimal(i["amount"])) for i in fetchall(cur)
            )
            return replace(_to_record(r), loan_items=items)

    def exists_for_period(
        self,
        employee_id: int,
        period: PayrollPeriod,
        exclude_statuses: Iterable[PayrollStatus] = (),
    ) -> bool:
        clauses = ["employee_id=%s", "period_month=%s", "period_year=%s"]
        params: list[object] = [int(employee_id), period.month, period.year]

        excluded = [s.value for s in exclude_statuses]
        if excluded:
            clauses.append(f"status NOT IN ({', '.join(['%s'] * len(excluded))})")
            params.extend(excluded)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT 1 AS found FROM payroll_records WHERE {' AND '.join(clauses)} LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def insert(self, record: PayrollRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO payroll_records(
                        employee_id, period_month, period_year, base_salary, allowances,
                        deductions, net_salary, status, pay_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.employee_id,
                        record.period_month,
                        record.period_year,
                        record.base_salary,
                        record.allowances,
                        record.deductions,
                        record.net_salary,
                        record.status.value,
                        record.pay_date,
                    ),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicatePending(f"Payroll for {record.period} already exists") from e
                raise
            payroll_id = int(cur.lastrowid)
            for item in record.loan_items:
                cur.execute(
                    "INSERT INTO payroll_loan_items(payroll_id, loan_id, amount) VALUES(%s,%s,%s)",
                    (payroll_id, item.loan_id, item.amount),
                )
            return payroll_id

    def update(self, record: PayrollRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, pay_date=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (record.status.value, record.pay_date, record.payroll_id, PayrollStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def mark_paid(self, payroll_id: int, pay_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payroll_records
                SET status=%s, pay_date=%s
                WHERE payroll_id=%s AND status=%s
                """,
                (PayrollStatus.PAID.value, pay_date, int(payroll_id), PayrollStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return False

            cur.execute(
                f"""
                SELECT {_LOAN_ITEM_COLUMNS}, i.amount AS deducted
                FROM payroll_loan_items i
                JOIN loans l ON l.loan_id = i.loan_id
                WHERE i.payroll_id=%s
                ORDER BY l.loan_id
                FOR UPDATE
                """,
                (int(payroll_id),),
            )
            for r in fetchall(cur):
                loan = to_loan(r).after_installment(as_decimal(r["deducted"]))
                cur.execute(
                    "UPDATE loans SET remaining_amount=%s, status=%s WHERE loan_id=%s",
                    (loan.remaining_amount, loan.status.value, loan.loan_id),
                )
            return True
