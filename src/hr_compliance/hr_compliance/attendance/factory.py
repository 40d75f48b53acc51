from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import TimeOfDay
from ..schedules.model import WorkSchedule
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, check_in: TimeOfDay, schedule: WorkSchedule, tolerance_minutes: int) -> AttendanceStrategy:
        threshold = schedule.start.plus_minutes(tolerance_minutes)
        if check_in <= threshold:
            return PresentStrategy()
        return LateStrategy()
