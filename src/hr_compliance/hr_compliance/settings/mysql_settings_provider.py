from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_ANNUAL_LEAVE_QUOTA, DEFAULT_SP1_WEEKLY_LATE_MINUTES
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .provider import (
    ANNUAL_QUOTA_KEY,
    LATE_PENALTY_KEY,
    SP1_THRESHOLD_KEY,
    SettingsProvider,
    penalty_rate_or_default,
    positive_int_or_default,
)


class MySQLSettingsProvider(SettingsProvider):
    """Reads the key/value ``system_settings`` table on every call."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _value(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_value FROM system_settings WHERE setting_key=%s", (key,))
            r = fetchone(cur)
            return r["setting_value"] if r else None

    def get_late_penalty_rate_per_minute(self) -> Decimal:
        return penalty_rate_or_default(self._value(LATE_PENALTY_KEY))

    def get_sp1_weekly_late_minutes(self) -> int:
        return positive_int_or_default(self._value(SP1_THRESHOLD_KEY), DEFAULT_SP1_WEEKLY_LATE_MINUTES)

    def get_annual_leave_quota(self) -> int:
        return positive_int_or_default(self._value(ANNUAL_QUOTA_KEY), DEFAULT_ANNUAL_LEAVE_QUOTA)
