"""Reconstruct absolute timestamps from the partial dates a forecast page shows.

The page prints the issue time as a sentence with a 12-hour clock and a
timezone abbreviation, and labels forecast days with a day-of-month only.
"""

import logging
import re
from collections.abc import Sequence
from datetime import datetime, tzinfo
from enum import StrEnum

import pytz

from glassy.ingest.errors import FieldParseError, UnexpectedFormat, UnknownTimezone, stage
from glassy.ingest.timezones import TimezoneResolver

logger = logging.getLogger(__name__)

# "Surf forecast was issued at 4 PM on 18 Oct 2026 PDT"
ISSUE_TOKEN_COUNT = 12
_ISSUE_HOUR = 5
_ISSUE_CLOCK_PERIOD = 6
_ISSUE_DAY = 8
_ISSUE_MONTH = 9
_ISSUE_YEAR = 10
_ISSUE_TIMEZONE = 11

MONTHS_SHORT = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

_OFFSET_RE = re.compile(r"^([+-])(\d{2})$")
MAX_OFFSET_HOURS = 14


class ClockPeriod(StrEnum):
    AM = "AM"
    PM = "PM"


def parse_twelve_clock_hour(s: str) -> int:
    """Parse a 12-hour clock hour. "0" is read as 12 o'clock."""
    try:
        hour = int(s)
    except ValueError:
        raise FieldParseError(f"not integer: {s!r}") from None
    if hour < 0 or hour > 12:
        raise FieldParseError(f"not 12 clock hour: {s!r}")
    if hour == 0:
        return 12
    return hour


def parse_clock_period(s: str) -> ClockPeriod:
    try:
        return ClockPeriod(s.strip().upper())
    except ValueError:
        raise FieldParseError(f"invalid clock period: {s!r}") from None


def to_twenty_four_clock_hour(hour: int, period: ClockPeriod) -> int:
    if period == ClockPeriod.AM:
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12


def parse_hour(hour_text: str, period_text: str) -> int:
    """Convert a 12-hour clock reading such as ("4", "PM") to 0-23."""
    hour = parse_twelve_clock_hour(hour_text.strip())
    period = parse_clock_period(period_text)
    return to_twenty_four_clock_hour(hour, period)


def parse_month_day(s: str) -> int:
    try:
        day = int(s)
    except ValueError:
        raise FieldParseError(f"not integer: {s!r}") from None
    if day < 0 or day > 31:
        raise FieldParseError(f"not month day: {s!r}")
    return day


def parse_month_short(s: str) -> int:
    try:
        return MONTHS_SHORT[s]
    except KeyError:
        raise FieldParseError(f"invalid short month: {s!r}") from None


def localize(tz: tzinfo, naive: datetime) -> datetime:
    """Attach tz to a naive datetime, going through pytz's localize when available."""
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def resolve_timezone(token: str, resolver: TimezoneResolver) -> tzinfo:
    """Resolve a timezone token: either a raw "+06"/"-05" offset or an abbreviation.

    Abbreviations shared by several zones resolve to the first zone the
    resolver returns. That zone is not guaranteed to be the break's zone, so
    the ambiguity is logged.
    """
    if token.startswith(("+", "-")):
        m = _OFFSET_RE.match(token)
        if m is None or int(m.group(2)) > MAX_OFFSET_HOURS:
            raise UnexpectedFormat(f"could not parse timezone offset {token!r}")
        minutes = int(m.group(2)) * 60
        return pytz.FixedOffset(-minutes if m.group(1) == "-" else minutes)

    zones = resolver.lookup(token)
    if not zones:
        raise UnknownTimezone(f"could not find timezones for {token!r} abbreviation")
    if len(zones) > 1:
        logger.warning(
            "Timezone abbreviation %s matches %d zones, using %s",
            token, len(zones), zones[0],
        )
    try:
        return pytz.timezone(zones[0])
    except pytz.exceptions.UnknownTimeZoneError:
        raise UnknownTimezone(f"could not find time location for {zones[0]!r}") from None


def parse_issue_timestamp(text: str, resolver: TimezoneResolver) -> datetime:
    """Parse the "issued at" banner sentence into a timezone-aware datetime."""
    parts = text.split()
    if len(parts) != ISSUE_TOKEN_COUNT:
        raise UnexpectedFormat(f"unexpected issue text: {text!r}")

    with stage("issue hour"):
        hour = parse_hour(parts[_ISSUE_HOUR], parts[_ISSUE_CLOCK_PERIOD])
    with stage("issue day"):
        day = parse_month_day(parts[_ISSUE_DAY])
    with stage("issue month"):
        month = parse_month_short(parts[_ISSUE_MONTH])

    year_text = parts[_ISSUE_YEAR]
    with stage("issue year"):
        if not (year_text.isascii() and year_text.isdecimal()):
            raise FieldParseError(f"not integer: {year_text!r}")

    with stage("issue timezone"):
        tz = resolve_timezone(parts[_ISSUE_TIMEZONE], resolver)

    try:
        naive = datetime(int(year_text), month, day, hour)
    except ValueError:
        raise UnexpectedFormat(f"invalid issue date: {text!r}") from None
    return localize(tz, naive)


def infer_dates(issued_at: datetime, days: Sequence[int]) -> list[datetime]:
    """Attach month and year to a run of consecutive days-of-month.

    Starts from the issue month and year. A day-of-month smaller than the one
    before it starts the next month; a month smaller than the one before it
    starts the next year. Only holds for short runs of consecutive days, which
    is all a forecast table covers.
    Dates must come out strictly increasing; a repeated day fails.
    """
    tz = issued_at.tzinfo
    year, month = issued_at.year, issued_at.month

    dates: list[datetime] = []
    previous: datetime | None = None
    for day in days:
        if previous is not None:
            if day < previous.day:
                month = month % 12 + 1
            if month < previous.month:
                year += 1

        try:
            naive = datetime(year, month, day)
        except ValueError:
            raise UnexpectedFormat(
                f"invalid forecast date: {year:04d}-{month:02d}-{day:02d}"
            ) from None

        current = localize(tz, naive)
        if previous is not None and current <= previous:
            raise UnexpectedFormat(
                f"forecast dates not increasing: {previous.date()} then {current.date()}"
            )
        dates.append(current)
        previous = current
    return dates
