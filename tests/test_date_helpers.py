from datetime import date, datetime, timezone

import pytest

from utils.date_helpers import (
    add_months,
    format_display_date,
    friendly_month,
    month_key,
    month_name,
    parse_date,
    parse_datetime,
    parse_month,
    utc_timestamp,
    year_options,
)


@pytest.mark.parametrize("raw, expected", [
    ("2024-03-01", date(2024, 3, 1)),
    ("2024-03-01T00:00:00.000Z", date(2024, 3, 1)),
    ("2024/03/01", date(2024, 3, 1)),
    ("", None),
    (None, None),
    ("not a date", None),
    ("2024-02-30", None),
])
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_parse_datetime_bare_date_is_midnight():
    assert parse_datetime("2024-03-10") == datetime(2024, 3, 10)


def test_parse_datetime_aware_becomes_local_naive():
    parsed = parse_datetime("2024-03-10T12:00:00Z")
    expected = datetime(2024, 3, 10, 12, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed == expected
    assert parsed.tzinfo is None


def test_parse_datetime_garbage():
    assert parse_datetime("soon") is None
    assert parse_datetime("") is None


def test_month_helpers():
    assert month_key("2024-03-15") == "2024-03"
    assert month_key("junk") is None
    assert parse_month("2024-03") == date(2024, 3, 1)
    assert parse_month("2024-13") is None
    assert month_name(0) == "January"
    assert month_name(11) == "December"
    assert friendly_month("2026-02") == "February 2026"
    assert friendly_month("bad") == "bad"


def test_format_display_date():
    assert format_display_date("2024-03-01") == "Mar 1, 2024"
    assert format_display_date("2024-12-25T10:00:00Z") == "Dec 25, 2024"
    assert format_display_date("??") == "??"


@pytest.mark.parametrize("start, n, expected", [
    (date(2024, 1, 31), 1, date(2024, 2, 29)),
    (date(2024, 1, 15), -1, date(2023, 12, 15)),
    (date(2024, 11, 30), 3, date(2025, 2, 28)),
    (date(2024, 5, 10), 0, date(2024, 5, 10)),
])
def test_add_months(start, n, expected):
    assert add_months(start, n) == expected


def test_year_options_centred():
    assert year_options(2024) == ["2022", "2023", "2024", "2025", "2026"]
    assert len(year_options()) == 5


def test_utc_timestamp_has_z_suffix():
    moment = datetime(2024, 2, 9, 18, 30, 5, 123456, tzinfo=timezone.utc)
    assert utc_timestamp(moment) == "2024-02-09T18:30:05.123Z"


def test_utc_timestamp_reads_naive_as_local():
    local = datetime(2024, 2, 9, 18, 30)
    expected = local.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
    assert utc_timestamp(local) == expected
    assert utc_timestamp().endswith("Z")
