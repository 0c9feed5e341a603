#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campaign Calendar

Parses, formats and compares in-universe dates of the form "YYYY-DDD" and
"YYYY-DDD HH:MM". Years have 365 days with no leap days. The reference
epoch is 1100-001 00:00.

Two levels of strictness:

- parse_date / days_since_epoch accept either component order and an
  optional time, and read a missing date as the epoch.
- compare_dates / minutes_between / hours_between accept only the canonical
  "YYYY-DDD HH:MM" shape and raise DateFormatError for anything else.
"""

import re
from dataclasses import dataclass
from typing import Union

EPOCH_YEAR = 1100
EPOCH_DAY = 1
DAYS_PER_YEAR = 365
MINUTES_PER_DAY = 24 * 60

CANONICAL_PATTERN = re.compile(r"([0-9]{4})-([0-9]{3}) ([0-9]{2}):([0-9]{2})")
_LENIENT_PATTERN = re.compile(r"([0-9]+)-([0-9]+)(?: +([0-9]{1,2})(?::([0-9]{1,2}))?)?")


class DateFormatError(ValueError):
    """Raised when a date string does not have the expected shape."""


@dataclass(frozen=True, order=True)
class CampaignDate:
    """
    A point in campaign time.

    Attributes
    ----------
    year : int
        Imperial year
    day : int
        Day of year (1-365)
    hour : int
        Hour of day (0-23)
    minute : int
        Minute of hour (0-59)
    """

    year: int
    day: int
    hour: int = 0
    minute: int = 0

    @property
    def total_minutes(self) -> int:
        """Minutes since day 1 of year 0."""
        days = self.year * DAYS_PER_YEAR + (self.day - 1)
        return days * MINUTES_PER_DAY + self.hour * 60 + self.minute

    @property
    def days_since_epoch(self) -> float:
        current = self.year * DAYS_PER_YEAR + self.day + self.hour / 24 + self.minute / 1440
        return current - (EPOCH_YEAR * DAYS_PER_YEAR + EPOCH_DAY)

    def advance(self, hours: int = 0, minutes: int = 0) -> "CampaignDate":
        """New date moved forward (or back) by the given time."""
        total = self.total_minutes + hours * 60 + minutes
        days, remainder = divmod(total, MINUTES_PER_DAY)
        year, day_index = divmod(days, DAYS_PER_YEAR)
        hour, minute = divmod(remainder, 60)
        return CampaignDate(year, day_index + 1, hour, minute)

    def __str__(self) -> str:
        return format_date(self.year, self.day, self.hour, self.minute)


EPOCH = CampaignDate(EPOCH_YEAR, EPOCH_DAY, 0, 0)

DateLike = Union[str, CampaignDate, None]


def format_date(year: int, day: int, hour: int = 0, minute: int = 0) -> str:
    """Canonical "YYYY-DDD HH:MM" string."""
    return f"{year:04d}-{day:03d} {hour:02d}:{minute:02d}"


def parse_date(date_string: DateLike) -> CampaignDate:
    """
    Parse a campaign date leniently.

    Parameters
    ----------
    date_string : str or CampaignDate, optional
        "YYYY-DDD" or "DDD-YYYY", optionally followed by " HH:MM". The
        component greater than 999 is taken as the year. None or an empty
        string means the epoch.

    Returns
    -------
    CampaignDate
        Parsed date; day 0 reads as day 1

    Raises
    ------
    DateFormatError
        If the text is not made of the expected numeric components
    """
    if isinstance(date_string, CampaignDate):
        return date_string
    if date_string is None:
        return EPOCH
    if not isinstance(date_string, str):
        raise DateFormatError(f"Expected a date string, got {type(date_string).__name__}")

    text = date_string.strip()
    if not text:
        return EPOCH

    match = _LENIENT_PATTERN.fullmatch(text)
    if not match:
        raise DateFormatError(f"Unrecognised campaign date: {date_string!r}")

    first, second = int(match.group(1)), int(match.group(2))
    if first > 999:
        year, day = first, second
    else:
        day, year = first, second

    hour = int(match.group(3) or 0)
    minute = int(match.group(4) or 0)
    return CampaignDate(year, day or 1, hour, minute)


def days_since_epoch(date_string: DateLike) -> float:
    """
    Continuous day count from the epoch.

    Fractional for hours and minutes; negative for dates before the epoch.
    """
    return parse_date(date_string).days_since_epoch


def parse_canonical(date_string: str) -> CampaignDate:
    """
    Parse a date that must be exactly "YYYY-DDD HH:MM".

    Raises
    ------
    DateFormatError
        For any other shape
    """
    if not isinstance(date_string, str):
        raise DateFormatError(f"Expected a date string, got {type(date_string).__name__}")
    match = CANONICAL_PATTERN.fullmatch(date_string)
    if not match:
        raise DateFormatError(
            f"Invalid date format: {date_string!r} (expected YYYY-DDD HH:MM)"
        )
    year, day, hour, minute = (int(g) for g in match.groups())
    return CampaignDate(year, day, hour, minute)


def compare_dates(a: str, b: str) -> int:
    """
    Order two canonical dates.

    Returns
    -------
    int
        -1 if ``a`` is earlier, 1 if later, 0 if equal
    """
    difference = minutes_between(b, a)
    if difference < 0:
        return -1
    if difference > 0:
        return 1
    return 0


def minutes_between(a: str, b: str) -> int:
    """Minutes from canonical date ``a`` to ``b`` (positive when ``b`` is later)."""
    return parse_canonical(b).total_minutes - parse_canonical(a).total_minutes


def hours_between(a: str, b: str) -> float:
    """Hours from canonical date ``a`` to ``b``."""
    return minutes_between(a, b) / 60


def advance_date(date_string: DateLike, hours: int = 0, minutes: int = 0) -> str:
    """
    Move a date forward by hours and minutes, rolling over days and years.

    Returns
    -------
    str
        Canonical "YYYY-DDD HH:MM" string
    """
    return str(parse_date(date_string).advance(hours, minutes))


def to_canonical(date_string: DateLike) -> str:
    """Canonical form of a leniently parsed date."""
    return str(parse_date(date_string))
