from datetime import datetime, timezone

from contentseo.utils.date_utils import days_since, format_date, months_ago, parse_date


def test_parse_date_handles_common_formats():
    assert parse_date("2024-09-13") == datetime(2024, 9, 13, tzinfo=timezone.utc)
    assert parse_date("2024-09-13T14:00:00") == datetime(2024, 9, 13, 14, tzinfo=timezone.utc)
    assert parse_date("2024-09-13T14:00:00Z") == datetime(2024, 9, 13, 14, tzinfo=timezone.utc)
    assert parse_date("2024-09-13T14:00:00+09:00") == datetime(2024, 9, 13, 5, tzinfo=timezone.utc)
    assert parse_date(1726236000000) == datetime(2024, 9, 13, 14, tzinfo=timezone.utc)


def test_parse_date_rejects_invalid_values():
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date("not a date") is None
    assert parse_date(True) is None
    assert parse_date(["2024-09-13"]) is None


def test_format_date_uses_utc_calendar_day():
    late_evening = parse_date("2024-09-13T23:30:00-05:00")
    assert format_date(late_evening) == "2024-09-14"


def test_months_ago_uses_calendar_months():
    now = datetime(2026, 5, 31, 12, tzinfo=timezone.utc)
    assert months_ago(3, now) == datetime(2026, 2, 28, 12, tzinfo=timezone.utc)


def test_days_since():
    now = datetime(2026, 10, 17, 12, tzinfo=timezone.utc)
    assert days_since(datetime(2026, 10, 10, 12, tzinfo=timezone.utc), now) == 7
    assert days_since(datetime(2026, 10, 17), now) == 0.5
