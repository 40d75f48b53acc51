from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from ..common.validators import to_money
from ..core.constants import (
    DEFAULT_ANNUAL_LEAVE_QUOTA,
    DEFAULT_LATE_PENALTY_PER_MINUTE,
    DEFAULT_SP1_WEEKLY_LATE_MINUTES,
)
from ..core.exceptions import ValidationError

LATE_PENALTY_KEY = "attendance_late_penalty"
SP1_THRESHOLD_KEY = "attendance_sp1_threshold"
ANNUAL_QUOTA_KEY = "leave_annual_quota"


class SettingsProvider(Protocol):
    """Tunable HR settings.

    Every getter has a documented fallback so an unset (or zero) value never
    disables a rule: penalty rate 1000/minute, SP1 threshold 30 minutes per
    week, 12 leave days per year.
    """

    def get_late_penalty_rate_per_minute(self) -> Decimal:
        raise NotImplementedError

    def get_sp1_weekly_late_minutes(self) -> int:
        raise NotImplementedError

    def get_annual_leave_quota(self) -> int:
        raise NotImplementedError


def penalty_rate_or_default(value) -> Decimal:
    """Unset or zero means the default rate; garbage or a negative rate is rejected."""
    if value is None or str(value).strip() == "":
        return DEFAULT_LATE_PENALTY_PER_MINUTE
    rate = to_money(str(value).strip(), "Late penalty rate")
    if rate < 0:
        raise ValidationError(f"Late penalty rate must not be negative: {value!r}")
    return rate if rate else DEFAULT_LATE_PENALTY_PER_MINUTE


def positive_int_or_default(value, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Expected a whole number, got {value!r}")
    return number if number > 0 else default


@dataclass(frozen=True)
class StaticSettingsProvider:
    """Settings fixed at construction (config module, tests)."""

    late_penalty_rate_per_minute: Optional[Decimal] = None
    sp1_weekly_late_minutes: Optional[int] = None
    annual_leave_quota: Optional[int] = None

    def get_late_penalty_rate_per_minute(self) -> Decimal:
        return penalty_rate_or_default(self.late_penalty_rate_per_minute)

    def get_sp1_weekly_late_minutes(self) -> int:
        return positive_int_or_default(self.sp1_weekly_late_minutes, DEFAULT_SP1_WEEKLY_LATE_MINUTES)

    def get_annual_leave_quota(self) -> int:
        return positive_int_or_default(self.annual_leave_quota, DEFAULT_ANNUAL_LEAVE_QUOTA)
