from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import iso_week_bounds, month_bounds
from ..core.constants import DEFAULT_SP1_MONTHLY_LATE_COUNT, SP1
from ..core.enums import AttendanceStatus
from ..settings.provider import SettingsProvider, StaticSettingsProvider
from .model import EscalationEvent


class EscalationPolicy(ABC):
    """A window over attendance history, a measure over it and a threshold.

    The policy fires when the measure strictly exceeds the threshold.
    """

    name: str = "policy"
    kind: str = SP1

    @abstractmethod
    def window(self, on_date: date) -> tuple[date, date]:
        raise NotImplementedError

    @abstractmethod
    def period_label(self, on_date: date) -> str:
        raise NotImplementedError

    @abstractmethod
    def measure(self, records: Sequence[AttendanceRecord]) -> int:
        raise NotImplementedError

    @abstractmethod
    def threshold(self) -> int:
        raise NotImplementedError

    def evaluate(self, employee_id: int, on_date: date, records: Sequence[AttendanceRecord]) -> Optional[EscalationEvent]:
        value = self.measure(records)
        limit = self.threshold()
        if value <= limit:
            return None
        return EscalationEvent(
            employee_id=employee_id,
            kind=self.kind,
            trigger_value=value,
            threshold=limit,
            period=self.period_label(on_date),
            policy=self.name,
            evaluated_on=on_date,
        )


class WeeklyLateMinutesPolicy(EscalationPolicy):
    """SP1 once the late minutes of one ISO week (Mon-Sun) pass the limit.

    Late minutes are re-derived from each late record's check-in, so they
    always count from the end of the tolerance window.
    """

    name = "weekly_late_minutes"

    def __init__(self, classifier: AttendanceClassifier, settings: Optional[SettingsProvider] = None):
        self._classifier = classifier
        self._settings = settings or StaticSettingsProvider()

    def window(self, on_date: date) -> tuple[date, date]:
        return iso_week_bounds(on_date)

    def period_label(self, on_date: date) -> str:
        year, week, _ = on_date.isocalendar()
        return f"{year}-W{week:02d}"

    def measure(self, records: Sequence[AttendanceRecord]) -> int:
        return sum(
            self._classifier.late_minutes(r.check_in, r.work_date)
            for r in records
            if r.status == AttendanceStatus.LATE and r.check_in is not None
        )

    def threshold(self) -> int:
        return self._settings.get_sp1_weekly_late_minutes()


class MonthlyLateCountPolicy(EscalationPolicy):
    """SP1 once the number of late days in a calendar month passes the limit."""

    name = "monthly_late_count"

    def __init__(self, max_late_days: int = DEFAULT_SP1_MONTHLY_LATE_COUNT):
        self._max_late_days = int(max_late_days)

    def window(self, on_date: date) -> tuple[date, date]:
        return month_bounds(on_date.year, on_date.month)

    def period_label(self, on_date: date) -> str:
        return f"{on_date.year}-{on_date.month:02d}"

    def measure(self, records: Sequence[AttendanceRecord]) -> int:
        return sum(1 for r in records if r.status == AttendanceStatus.LATE)

    def threshold(self) -> int:
        return self._max_late_days
