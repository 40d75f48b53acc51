from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import TimeOfDay
from ..core.constants import SATURDAY_WORK_END, WORK_END, WORK_START
from .model import WorkSchedule

SATURDAY = 5


class ScheduleResolver:
    """Maps a calendar date to its working hours.

    Saturday closes early; every other day, Sunday included, uses the
    weekday hours.
    """

    def __init__(
        self,
        *,
        start: Optional[TimeOfDay] = None,
        end: Optional[TimeOfDay] = None,
        saturday_end: Optional[TimeOfDay] = None,
    ):
        self._start = start or TimeOfDay.parse(WORK_START)
        self._end = end or TimeOfDay.parse(WORK_END)
        self._saturday_end = saturday_end or TimeOfDay.parse(SATURDAY_WORK_END)

    def resolve(self, work_date: date) -> WorkSchedule:
        if work_date.weekday() == SATURDAY:
            return WorkSchedule(start=self._start, end=self._saturday_end)
        return WorkSchedule(start=self._start, end=self._end)
