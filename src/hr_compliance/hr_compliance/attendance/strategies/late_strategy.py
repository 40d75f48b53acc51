from __future__ import annotations

from ...common.datetime_utils import TimeOfDay
from ...core.enums import AttendanceStatus
from ...schedules.model import WorkSchedule
from .base import AttendanceStrategy, Classification


class LateStrategy(AttendanceStrategy):
    """Late check-in. Minutes are counted from the end of the tolerance window."""

    def decide_checkin(self, *, check_in: TimeOfDay, schedule: WorkSchedule, tolerance_minutes: int) -> Classification:
        threshold = schedule.start.plus_minutes(tolerance_minutes)
        late_minutes = max(check_in.minutes - threshold.minutes, 0)
        return Classification(status=AttendanceStatus.LATE, late_minutes=late_minutes, note="Late")
