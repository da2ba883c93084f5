"""Canonical storage keys for calendar days.

A DateKey is the ``YYYY-MM-DD`` form of a calendar day, taken from the
date's own year/month/day fields. Datetimes are never shifted to UTC, so
every moment of a local day maps to the same key.
"""

import re
from datetime import date, datetime

_KEY_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


class DateKeyError(ValueError):
    """Base error for date key conversion."""


class InvalidDateError(DateKeyError):
    """Raised when a value is not a valid calendar date."""


class InvalidKeyError(DateKeyError):
    """Raised when a storage key is not a well-formed date key."""


def to_key(value: date | datetime) -> str:
    """
    Convert a date or datetime to its storage key.

    Args:
        value: Calendar date; the time component of a datetime is ignored

    Returns:
        Key in ``YYYY-MM-DD`` form

    Raises:
        InvalidDateError: If value is not a date or datetime
    """
    # datetime is a subclass of date, so both pass here
    if not isinstance(value, date):
        raise InvalidDateError(
            f"Expected a date or datetime, got {type(value).__name__}"
        )
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def from_key(key: str) -> date:
    """
    Parse a storage key back into a date.

    Args:
        key: Key in ``YYYY-MM-DD`` form

    Returns:
        The calendar day the key denotes

    Raises:
        InvalidKeyError: If the key is malformed or names no real day
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"Date key must be a string, got {type(key).__name__}")
    match = _KEY_PATTERN.fullmatch(key)
    if match is None:
        raise InvalidKeyError(f"Malformed date key: {key!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidKeyError(f"Date key {key!r} is not a calendar day: {e}") from e


def is_valid_key(key: str) -> bool:
    """Check whether a string is a well-formed date key."""
    try:
        from_key(key)
    except InvalidKeyError:
        return False
    return True
