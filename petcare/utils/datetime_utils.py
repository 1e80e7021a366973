# petcare/utils/datetime_utils.py
"""
Centralized date/time helpers used across the project.

Goals of this module:
1. One canonical way to read "now" (timezone-aware UTC)
2. Firestore-compatible conversion of date/datetime values before writes
3. Tolerant conversion back from whatever the document store returns
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any, Optional
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Date/time helpers shared by services and models."""

    @staticmethod
    def now() -> datetime:
        """Current time as a timezone-aware UTC datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_date_string(date_string: str) -> date:
        """
        Parse a date string into a date object.

        Supported formats:
        - 2024-01-15
        - 2024/01/15
        - 2024-01-15T10:30:00Z (time part is dropped)
        """
        try:
            if not date_string:
                raise ValueError("cannot parse an empty string")
            return dateutil_parser.parse(date_string).date()
        except Exception as e:
            logger.error(f"Failed to parse date string: {date_string} - {e}")
            raise ValueError(f"Invalid date format: {date_string}")

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime -> ISO string in UTC with a 'Z' suffix."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        else:
            dt = dt.astimezone(timezone.utc)
        return dt.isoformat().replace('+00:00', 'Z')

    @staticmethod
    def to_date(value: Any) -> Optional[date]:
        """
        Convert a stored value back to a plain date.

        Firestore hands back datetimes (DatetimeWithNanoseconds) for fields
        that were written as dates, so every date-typed field goes through here.
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return DateTimeUtils.parse_date_string(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to date: {value}")

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Convert date/time values of an object before writing to Firestore.

        Rules:
        - date -> datetime (00:00:00 UTC)
        - naive datetime -> aware datetime (UTC)
        - dicts and lists are converted recursively
        """
        if isinstance(obj, date) and not isinstance(obj, datetime):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        elif isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Normalize datetimes read from Firestore to aware UTC datetimes.

        dicts and lists are converted recursively; other values pass through.
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)
        elif isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj

