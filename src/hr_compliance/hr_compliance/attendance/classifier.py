from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Union

from ..common.datetime_utils import TimeOfDay
from ..core.constants import LATE_TOLERANCE_MINUTES
from ..core.exceptions import ValidationError
from ..schedules.resolver import ScheduleResolver
from .factory import AttendanceStrategyFactory
from .strategies.base import Classification

CheckInTime = Union[TimeOfDay, time, datetime]


class AttendanceClassifier:
    """Classifies a check-in as present or late against the day's schedule.

    The tolerance is fixed rather than per-schedule. Only present/late come
    out of here; absent, leave and holiday are set by other flows.
    """

    tolerance_minutes = LATE_TOLERANCE_MINUTES

    def __init__(
        self,
        resolver: Optional[ScheduleResolver] = None,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._resolver = resolver or ScheduleResolver()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def classify(self, check_in: CheckInTime, work_date: date) -> Classification:
        if check_in is None:
            raise ValidationError("Check-in time is required")
        if not isinstance(check_in, TimeOfDay):
            check_in = TimeOfDay.from_time(check_in)

        schedule = self._resolver.resolve(work_date)
        strategy = self._factory.for_checkin(
            check_in=check_in, schedule=schedule, tolerance_minutes=self.tolerance_minutes
        )
        return strategy.decide_checkin(
            check_in=check_in, schedule=schedule, tolerance_minutes=self.tolerance_minutes
        )

    def late_minutes(self, check_in: CheckInTime, work_date: date) -> int:
        return self.classify(check_in, work_date).late_minutes
