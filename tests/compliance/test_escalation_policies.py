from datetime import date, datetime

from src.hr_compliance.hr_compliance.attendance.classifier import AttendanceClassifier
from src.hr_compliance.hr_compliance.compliance.accumulator import ComplianceAccumulator
from src.hr_compliance.hr_compliance.compliance.policies import MonthlyLateCountPolicy, WeeklyLateMinutesPolicy
from src.hr_compliance.hr_compliance.core.enums import AttendanceStatus
from src.hr_compliance.hr_compliance.settings.provider import StaticSettingsProvider
from tests.fakes import InMemoryAttendance, RecordingSink


class ExplodingSink:
    def emit(self, employee_id, kind, details):
        raise RuntimeError("notification service down")


def _weekly(threshold=None):
    return WeeklyLateMinutesPolicy(AttendanceClassifier(), StaticSettingsProvider(sp1_weekly_late_minutes=threshold))


def test_weekly_threshold_must_be_exceeded():
    attendance = InMemoryAttendance()
    # 08:20 and 08:20 -> 15 + 15 = 30 minutes, exactly the threshold
    attendance.punch(1, datetime(2024, 1, 8, 8, 20), AttendanceStatus.LATE)
    attendance.punch(1, datetime(2024, 1, 9, 8, 20), AttendanceStatus.LATE)
    acc = ComplianceAccumulator(attendance, RecordingSink())
    assert acc.evaluate(_weekly(), 1, date(2024, 1, 9)) is None

    attendance.punch(1, datetime(2024, 1, 10, 8, 6), AttendanceStatus.LATE)
    event = acc.evaluate(_weekly(), 1, date(2024, 1, 10))
    assert event is not None
    assert event.trigger_value == 31
    assert event.threshold == 30


def test_weekly_window_is_monday_to_sunday():
    attendance = InMemoryAttendance()
    attendance.punch(1, datetime(2024, 1, 7, 9, 5), AttendanceStatus.LATE)  # previous Sunday
    attendance.punch(1, datetime(2024, 1, 8, 8, 10), AttendanceStatus.LATE)
    acc = ComplianceAccumulator(attendance, RecordingSink())

    assert acc.evaluate(_weekly(), 1, date(2024, 1, 14)) is None
    assert attendance.range_calls[-1] == (1, date(2024, 1, 8), date(2024, 1, 14))


def test_weekly_threshold_read_from_settings():
    attendance = InMemoryAttendance()
    attendance.punch(1, datetime(2024, 1, 8, 8, 16), AttendanceStatus.LATE)
    acc = ComplianceAccumulator(attendance, RecordingSink())
    assert acc.evaluate(_weekly(threshold=10), 1, date(2024, 1, 8)).trigger_value == 11
    assert acc.evaluate(_weekly(threshold=0), 1, date(2024, 1, 8)) is None


def test_present_and_absent_days_ignored():
    attendance = InMemoryAttendance()
    attendance.punch(1, datetime(2024, 1, 8, 8, 5), AttendanceStatus.PRESENT)
    attendance.mark(1, date(2024, 1, 9), AttendanceStatus.ABSENT)
    assert _weekly().measure(attendance.get_by_employee_in_range(1, date(2024, 1, 8), date(2024, 1, 14))) == 0


def test_monthly_count_fires_on_sixth_late_day():
    attendance = InMemoryAttendance()
    acc = ComplianceAccumulator(attendance, RecordingSink())
    policy = MonthlyLateCountPolicy()
    for day in (2, 3, 4, 5, 8):
        attendance.punch(1, datetime(2024, 1, day, 8, 6), AttendanceStatus.LATE)
    assert acc.evaluate(policy, 1, date(2024, 1, 8)) is None

    attendance.punch(1, datetime(2024, 1, 9, 8, 6), AttendanceStatus.LATE)
    event = acc.evaluate(policy, 1, date(2024, 1, 9))
    assert event.trigger_value == 6
    assert event.period == "2024-01"


def test_monthly_count_resets_with_the_month():
    attendance = InMemoryAttendance()
    for day in (22, 23, 24, 25, 26, 29):
        attendance.punch(1, datetime(2024, 1, day, 8, 6), AttendanceStatus.LATE)
    attendance.punch(1, datetime(2024, 2, 1, 8, 6), AttendanceStatus.LATE)
    acc = ComplianceAccumulator(attendance, RecordingSink())
    assert acc.evaluate(MonthlyLateCountPolicy(), 1, date(2024, 2, 1)) is None


def test_evaluate_all_reports_each_policy_and_survives_sink_failure():
    attendance = InMemoryAttendance()
    # 6 x 5 minutes is exactly 30; the 08:11 punch pushes the week to 31
    attendance.punch(1, datetime(2024, 1, 8, 8, 11), AttendanceStatus.LATE)
    for day in (9, 10, 11, 12, 13):
        attendance.punch(1, datetime(2024, 1, day, 8, 10), AttendanceStatus.LATE)
    acc = ComplianceAccumulator(attendance, ExplodingSink(), policies=(_weekly(), MonthlyLateCountPolicy()))

    events = acc.evaluate_all(1, date(2024, 1, 13))
    assert [e.policy for e in events] == ["weekly_late_minutes", "monthly_late_count"]
    assert acc.policy("monthly_late_count") is acc.policies[1]
    assert acc.policy("nope") is None
