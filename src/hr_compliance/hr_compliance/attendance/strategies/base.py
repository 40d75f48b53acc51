from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...common.datetime_utils import TimeOfDay
from ...core.enums import AttendanceStatus
from ...schedules.model import WorkSchedule


@dataclass(frozen=True)
class Classification:
    status: AttendanceStatus
    late_minutes: int = 0
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a check-in status."""

    @abstractmethod
    def decide_checkin(self, *, check_in: TimeOfDay, schedule: WorkSchedule, tolerance_minutes: int) -> Classification:
        raise NotImplementedError
