from datetime import date, datetime, time

import pytest

from src.hr_compliance.hr_compliance.attendance.classifier import AttendanceClassifier
from src.hr_compliance.hr_compliance.attendance.factory import AttendanceStrategyFactory
from src.hr_compliance.hr_compliance.attendance.strategies.late_strategy import LateStrategy
from src.hr_compliance.hr_compliance.attendance.strategies.present_strategy import PresentStrategy
from src.hr_compliance.hr_compliance.common.datetime_utils import TimeOfDay
from src.hr_compliance.hr_compliance.core.enums import AttendanceStatus
from src.hr_compliance.hr_compliance.core.exceptions import ValidationError
from src.hr_compliance.hr_compliance.schedules.model import WorkSchedule

WEDNESDAY = date(2024, 1, 10)


def test_factory_picks_present_inside_tolerance():
    schedule = WorkSchedule(start=TimeOfDay.of(8, 0), end=TimeOfDay.of(16, 0))
    factory = AttendanceStrategyFactory()
    assert isinstance(factory.for_checkin(check_in=TimeOfDay.of(8, 5), schedule=schedule, tolerance_minutes=5), PresentStrategy)
    assert isinstance(factory.for_checkin(check_in=TimeOfDay.of(8, 6), schedule=schedule, tolerance_minutes=5), LateStrategy)


@pytest.mark.parametrize(
    "check_in, status, late",
    [
        (time(7, 30), AttendanceStatus.PRESENT, 0),
        (time(8, 0), AttendanceStatus.PRESENT, 0),
        (time(8, 5), AttendanceStatus.PRESENT, 0),
        (time(8, 6), AttendanceStatus.LATE, 1),
        (time(8, 10), AttendanceStatus.LATE, 5),
        (time(9, 5), AttendanceStatus.LATE, 60),
    ],
)
def test_classify_counts_late_minutes_past_tolerance(check_in, status, late):
    result = AttendanceClassifier().classify(check_in, WEDNESDAY)
    assert result.status == status
    assert result.late_minutes == late


def test_saturday_uses_same_start_time():
    result = AttendanceClassifier().classify(datetime(2024, 1, 13, 8, 6), date(2024, 1, 13))
    assert result.status == AttendanceStatus.LATE
    assert result.late_minutes == 1


def test_seconds_are_ignored():
    assert AttendanceClassifier().classify(datetime(2024, 1, 10, 8, 5, 59), WEDNESDAY).status == AttendanceStatus.PRESENT


def test_late_minutes_never_negative():
    classifier = AttendanceClassifier()
    for minute in range(0, 60):
        assert classifier.late_minutes(TimeOfDay.of(8, minute), WEDNESDAY) >= 0


def test_missing_check_in_rejected():
    with pytest.raises(ValidationError):
        AttendanceClassifier().classify(None, WEDNESDAY)
