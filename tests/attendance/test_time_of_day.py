from datetime import date, datetime, time

import pytest

from src.hr_compliance.hr_compliance.common.datetime_utils import (
    TimeOfDay,
    inclusive_days,
    iso_week_bounds,
    month_bounds,
    parse_iso_date,
)
from src.hr_compliance.hr_compliance.core.exceptions import ValidationError


def test_parse_accepts_hh_mm_and_drops_seconds():
    assert TimeOfDay.parse("08:05") == TimeOfDay(485)
    assert TimeOfDay.parse("08:05:59") == TimeOfDay(485)
    assert str(TimeOfDay.parse(" 16:00 ")) == "16:00"


@pytest.mark.parametrize("raw", ["", "8h05", "24:00", "12:60", None])
def test_parse_rejects_malformed_times(raw):
    with pytest.raises(ValidationError):
        TimeOfDay.parse(raw)


def test_out_of_range_minutes_rejected():
    with pytest.raises(ValidationError):
        TimeOfDay(24 * 60)
    with pytest.raises(ValidationError):
        TimeOfDay.of(8, 75)


def test_from_time_and_datetime_agree():
    assert TimeOfDay.from_time(time(8, 6)) == TimeOfDay.from_time(datetime(2024, 1, 10, 8, 6, 30))


def test_calendar_helpers():
    assert iso_week_bounds(date(2024, 1, 10)) == (date(2024, 1, 8), date(2024, 1, 14))
    assert iso_week_bounds(date(2024, 1, 14)) == (date(2024, 1, 8), date(2024, 1, 14))
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert inclusive_days(date(2024, 1, 10), date(2024, 1, 12)) == 3
    assert inclusive_days(date(2024, 1, 10), date(2024, 1, 10)) == 1
    assert parse_iso_date("2024-01-10") == date(2024, 1, 10)
    with pytest.raises(ValidationError):
        parse_iso_date("10/01/2024")
