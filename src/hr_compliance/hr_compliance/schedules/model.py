from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import TimeOfDay


@dataclass(frozen=True)
class WorkSchedule:
    """Expected working hours of one calendar day."""

    start: TimeOfDay
    end: TimeOfDay
