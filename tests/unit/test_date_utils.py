"""Unit tests for date helpers"""

from datetime import date, datetime, timedelta, timezone

from credit_service.utils.date_utils import day_window, month_bounds, utc_date


def test_day_window_is_utc_and_half_open():
    start, end = day_window(date(2024, 1, 2), date(2024, 1, 4))

    assert start == datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert end == datetime(2024, 1, 5, tzinfo=timezone.utc)
    assert start.utcoffset() == timedelta(0)


def test_utc_date_converts_offsets():
    assert utc_date(datetime(2024, 1, 3, 1, tzinfo=timezone(timedelta(hours=5)))) == date(2024, 1, 2)
    assert utc_date(datetime(2024, 1, 3, 1, tzinfo=timezone.utc)) == date(2024, 1, 3)


def test_utc_date_naive_taken_as_utc():
    assert utc_date(datetime(2024, 1, 3, 23, 59)) == date(2024, 1, 3)


def test_month_bounds_leap_february():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
