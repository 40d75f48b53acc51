from datetime import date

from src.hr_compliance.hr_compliance.common.datetime_utils import TimeOfDay
from src.hr_compliance.hr_compliance.schedules.resolver import ScheduleResolver


def test_weekday_runs_until_four():
    schedule = ScheduleResolver().resolve(date(2024, 1, 10))  # Wednesday
    assert schedule.start == TimeOfDay.of(8, 0)
    assert schedule.end == TimeOfDay.of(16, 0)


def test_saturday_closes_at_three():
    schedule = ScheduleResolver().resolve(date(2024, 1, 13))
    assert schedule.start == TimeOfDay.of(8, 0)
    assert schedule.end == TimeOfDay.of(15, 0)


def test_sunday_uses_weekday_hours():
    schedule = ScheduleResolver().resolve(date(2024, 1, 14))
    assert schedule.end == TimeOfDay.of(16, 0)


def test_custom_hours_override_defaults():
    resolver = ScheduleResolver(start=TimeOfDay.of(9, 0), saturday_end=TimeOfDay.of(12, 0))
    assert resolver.resolve(date(2024, 1, 13)).end == TimeOfDay.of(12, 0)
    assert resolver.resolve(date(2024, 1, 12)).start == TimeOfDay.of(9, 0)
