from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from herdcycle.utils.datetime_tz import (
    add_months,
    days_between,
    localize,
    month_bounds,
    parse_datetime,
    start_of_week,
    to_day,
    to_utc,
)


def test_start_of_week_is_previous_sunday():
    assert start_of_week(date(2024, 3, 9)) == date(2024, 3, 3)
    assert start_of_week(date(2024, 3, 3)) == date(2024, 3, 3)
    assert start_of_week(date(2024, 3, 4)) == date(2024, 3, 3)


def test_days_between_ignores_time_of_day():
    late = datetime(2024, 1, 1, 23, 59, tzinfo=timezone.utc)
    early = datetime(2024, 1, 2, 0, 1, tzinfo=timezone.utc)

    assert days_between(early, late) == 1
    assert days_between(late, early) == -1


def test_to_day_normalises_offsets_to_utc():
    value = datetime(2024, 3, 6, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_day(value) == date(2024, 3, 5)
    assert to_day("2024-03-05T23:00:00Z") == date(2024, 3, 5)


def test_parse_datetime_accepts_plain_dates():
    assert parse_datetime("2024-01-01") == datetime(2024, 1, 1)
    assert parse_datetime(date(2024, 1, 1)) == datetime(2024, 1, 1)


def test_parse_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        parse_datetime("soon")


def test_add_months_across_year_end():
    assert add_months(datetime(2024, 11, 15), 3) == datetime(2025, 2, 15)
    assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 3, 3)


def test_month_bounds_for_december():
    assert month_bounds(date(2024, 12, 10)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_naive_values_use_the_given_timezone():
    converted = to_utc(datetime(2024, 3, 5, 20, 0), ZoneInfo("America/Guayaquil"))

    assert converted == datetime(2024, 3, 6, 1, 0, tzinfo=timezone.utc)


def test_naive_values_default_to_utc():
    assert to_utc(datetime(2024, 3, 5, 20, 0)) == datetime(2024, 3, 5, 20, 0, tzinfo=timezone.utc)
    assert localize(None, ZoneInfo("America/Guayaquil")) is None


def test_aware_values_are_only_converted():
    value = datetime(2024, 3, 5, 20, 0, tzinfo=timezone(timedelta(hours=-3)))

    assert to_utc(value) == datetime(2024, 3, 5, 23, 0, tzinfo=timezone.utc)
