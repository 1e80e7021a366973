# petcare/utils/test_datetime_utils.py
"""
Tests for the shared date/time helpers.

Usage: python -m pytest petcare/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta
from petcare.utils.datetime_utils import DateTimeUtils


def test_now_is_timezone_aware_utc():
    current = DateTimeUtils.now()
    assert current.tzinfo is not None
    assert current.utcoffset() == timedelta(0)


def test_parse_date_string():
    """Several common date notations parse to the same date."""
    for date_string in ["2024-01-15", "2024/01/15", "2024-01-15T10:30:00Z"]:
        assert DateTimeUtils.parse_date_string(date_string) == date(2024, 1, 15)


def test_parse_date_string_rejects_garbage():
    with pytest.raises(ValueError):
        DateTimeUtils.parse_date_string("not a date")
    with pytest.raises(ValueError):
        DateTimeUtils.parse_date_string("")


def test_to_iso_string_uses_z_suffix():
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert DateTimeUtils.to_iso_string(dt) == "2024-01-15T10:30:00Z"
    # naive datetimes are treated as UTC
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"


def test_to_date():
    assert DateTimeUtils.to_date(None) is None
    assert DateTimeUtils.to_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert DateTimeUtils.to_date(datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc)) == date(2024, 5, 1)
    assert DateTimeUtils.to_date("2024-05-01") == date(2024, 5, 1)
    with pytest.raises(ValueError):
        DateTimeUtils.to_date(12345)


def test_for_firestore():
    """Firestore conversion"""
    test_data = {
        'birthdate': date(2020, 1, 15),
        'timestamp': datetime(2024, 1, 15, 10, 30),
        'nested': {
            'event_date': date(2023, 12, 25)
        },
        'list_data': [
            {'created_at': datetime(2024, 1, 1)}
        ],
        'name': 'Buddy'
    }

    converted = DateTimeUtils.for_firestore(test_data)

    # dates become datetimes
    assert isinstance(converted['birthdate'], datetime)
    assert isinstance(converted['nested']['event_date'], datetime)
    assert isinstance(converted['list_data'][0]['created_at'], datetime)

    # every datetime is timezone-aware
    assert converted['timestamp'].tzinfo is not None
    assert converted['birthdate'].tzinfo is not None
    assert converted['name'] == 'Buddy'


def test_from_firestore_normalizes_to_utc():
    kst = timezone(timedelta(hours=9))
    data = {'reviewed_at': datetime(2024, 1, 15, 19, 0, tzinfo=kst), 'items': [datetime(2024, 1, 1)]}
    converted = DateTimeUtils.from_firestore(data)
    assert converted['reviewed_at'] == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    assert converted['items'][0].tzinfo is not None
