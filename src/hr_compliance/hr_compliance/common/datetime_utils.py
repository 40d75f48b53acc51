from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time of day as minutes since midnight (seconds dropped)."""

    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes < 24 * 60:
            raise ValidationError(f"Time of day out of range: {self.minutes} minutes")

    @classmethod
    def of(cls, hour: int, minute: int = 0) -> "TimeOfDay":
        if not (0 <= hour < 24 and 0 <= minute < 60):
            raise ValidationError(f"Invalid time {hour:02d}:{minute:02d}")
        return cls(hour * 60 + minute)

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """Parse HH:MM (or HH:MM:SS, seconds ignored)."""
        v = (value or "").strip()
        for fmt in ("%H:%M", "%H:%M:%S"):
            try:
                parsed = datetime.strptime(v, fmt).time()
            except ValueError:
                continue
            return cls.from_time(parsed)
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")

    @classmethod
    def from_time(cls, value: time | datetime) -> "TimeOfDay":
        return cls(value.hour * 60 + value.minute)

    def plus_minutes(self, minutes: int) -> "TimeOfDay":
        return TimeOfDay(self.minutes + int(minutes))

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def iso_week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday of the ISO week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def inclusive_days(start: date, end: date) -> int:
    return abs((end - start).days) + 1
