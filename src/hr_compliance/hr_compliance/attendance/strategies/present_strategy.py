from __future__ import annotations

from ...common.datetime_utils import TimeOfDay
from ...core.enums import AttendanceStatus
from ...schedules.model import WorkSchedule
from .base import AttendanceStrategy, Classification


class PresentStrategy(AttendanceStrategy):
    """Check-in inside the tolerance window."""

    def decide_checkin(self, *, check_in: TimeOfDay, schedule: WorkSchedule, tolerance_minutes: int) -> Classification:
        return Classification(status=AttendanceStatus.PRESENT)
