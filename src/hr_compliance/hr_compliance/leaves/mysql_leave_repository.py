from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import DuplicateOperation
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import LeaveQuota, LeaveRequest
from .repository import LeaveQuotaRepository, LeaveRepository

_COLUMNS = "leave_id, employee_id, leave_type, start_date, end_date, days, reason, status, approved_by, approved_at"


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=int(r["days"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=r.get("approved_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def get_approved_by_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM leave_requests
                WHERE employee_id=%s AND status=%s
                ORDER BY end_date ASC
                """,
                (int(employee_id), RequestStatus.APPROVED.value),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def get_all(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests ORDER BY created_at DESC")
            return [_to_request(r) for r in fetchall(cur)]

    def create(self, request: LeaveRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.employee_id,
                    request.leave_type.value,
                    request.start_date,
                    request.end_date,
                    request.days,
                    request.reason,
                    request.status.value,
                ),
            )
            return int(cur.lastrowid)

    def decide(
        self,
        *,
        leave_id: int,
        status: RequestStatus,
        approved_by: Optional[int],
        approved_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, approved_by, approved_at, int(leave_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0


class MySQLLeaveQuotaRepository(LeaveQuotaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[LeaveQuota]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, total_days, used_days, remaining_days FROM leave_quotas WHERE employee_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveQuota(
                employee_id=int(r["employee_id"]),
                total_days=int(r["total_days"]),
                used_days=int(r["used_days"]),
                remaining_days=int(r["remaining_days"]),
            )

    def create(self, quota: LeaveQuota) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO leave_quotas(employee_id, total_days, used_days, remaining_days)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (quota.employee_id, quota.total_days, quota.used_days, quota.remaining_days),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateOperation(f"Employee {quota.employee_id} already has a leave quota") from e
                raise

    def increment_used(
        self,
        employee_id: int,
        days: int,
        *,
        leave_id: Optional[int] = None,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> bool:
        # MySQL evaluates SET left to right: remaining_days sees the new used_days.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_quotas
                SET used_days = used_days + %s, remaining_days = total_days - used_days
                WHERE employee_id=%s AND total_days - used_days >= %s
                """,
                (int(days), int(employee_id), int(days)),
            )
            if cur.rowcount == 0:
                return False

            if leave_id is not None:
                cur.execute(
                    """
                    UPDATE leave_requests
                    SET status=%s, approved_by=%s, approved_at=%s
                    WHERE leave_id=%s AND status=%s
                    """,
                    (
                        RequestStatus.APPROVED.value,
                        approved_by,
                        approved_at,
                        int(leave_id),
                        RequestStatus.PENDING.value,
                    ),
                )
                if cur.rowcount == 0:
                    # raising rolls back the quota update above
                    raise DuplicateOperation(f"Leave request {leave_id} was already decided")
            return True
