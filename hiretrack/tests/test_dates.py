"""Tests for UTC date helpers"""
from datetime import date, datetime, timedelta, timezone

import pytest

from hiretrack.app.core.exceptions import InvalidInput
from hiretrack.app.utils.dates import isoformat_utc, parse_datetime


def test_parse_z_suffix():
    assert parse_datetime("2030-01-02T03:04:05Z") == datetime(2030, 1, 2, 3, 4, 5)


def test_parse_offset_converts_to_utc():
    assert parse_datetime("2030-01-02T03:04:05-05:00") == datetime(2030, 1, 2, 8, 4, 5)


def test_parse_naive_string_is_utc():
    assert parse_datetime("2030-01-02T03:04:05") == datetime(2030, 1, 2, 3, 4, 5)


def test_parse_aware_datetime_and_date():
    aware = datetime(2030, 1, 2, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert parse_datetime(aware) == datetime(2030, 1, 2, 10, 0)
    assert parse_datetime(date(2030, 1, 2)) == datetime(2030, 1, 2)


@pytest.mark.parametrize("value", ["", "   ", "tomorrow", "2030-13-45", None, 12345])
def test_parse_rejects_garbage(value):
    with pytest.raises(InvalidInput):
        parse_datetime(value, "reminder date")


def test_isoformat_utc():
    assert isoformat_utc(None) is None
    assert isoformat_utc(datetime(2030, 1, 2, 3, 4, 5)) == "2030-01-02T03:04:05Z"
