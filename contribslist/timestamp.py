"""
Timestamp utilities for contribution date ranges.

Provides functions to parse the free-form dates accepted by the datefrom and
dateto arguments, and to convert between Python datetime objects and
MediaWiki's 14-digit database timestamp format (TS_MW).
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union


log = logging.getLogger(__name__)

# 14-digit database timestamp, e.g. "20250819193200"
MW_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
MW_TIMESTAMP_RE = re.compile(r"^\d{14}$")

# Formats tried in order by parse_date(). Day-first and month-first
# spelled-out forms are both accepted, numeric forms are year-first only.
DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%Y%m%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %Y",
    "%H:%M, %d %B %Y (UTC)",
]

RELATIVE_DAYS = {
    "yesterday": -1,
    "today": 0,
    "midnight": 0,
    "tomorrow": 1,
}


def _today(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a user-supplied date into an aware UTC datetime.

    Accepts ISO-style dates, spelled-out dates ("1 March 2024", "March 1, 2024"),
    14-digit MediaWiki timestamps and the words "now", "today", "yesterday"
    and "tomorrow". Relative words are resolved against now (default: current time).

    Args:
        text: The date string
        now: Reference time for relative words

    Returns:
        Parsed datetime in UTC, or None if the text is not a recognizable date
    """
    text = (text or "").strip()
    if not text:
        return None

    if now is None:
        now = datetime.now(tz=timezone.utc)
    lower = text.lower()
    if lower == "now":
        return now
    if lower in RELATIVE_DAYS:
        return _today(now) + timedelta(days=RELATIVE_DAYS[lower])

    if MW_TIMESTAMP_RE.match(text):
        return from_mw_timestamp(text)

    # Collapse runs of whitespace so "1  March 2024" still parses
    text = " ".join(text.split())

    # ISO 8601 with offsets, fractional seconds or minutes-only times
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        datetime_obj = datetime.fromisoformat(iso_text)
    except ValueError:
        pass
    else:
        if datetime_obj.tzinfo is None:
            return datetime_obj.replace(tzinfo=timezone.utc)
        return datetime_obj.astimezone(timezone.utc)

    for fmt in DATE_FORMATS:
        try:
            datetime_obj = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return datetime_obj.replace(tzinfo=timezone.utc)
    return None


def to_mw_timestamp(datetime_obj: datetime) -> str:
    """
    Convert a datetime -> "YYYYMMDDHHMMSS" in UTC. Naive datetimes are taken as UTC.
    """
    if datetime_obj.tzinfo is None:
        datetime_obj = datetime_obj.replace(tzinfo=timezone.utc)
    return datetime_obj.astimezone(timezone.utc).strftime(MW_TIMESTAMP_FORMAT)


def from_mw_timestamp(timestamp_value: Union[str, bytes]) -> datetime:
    """
    Parse a TS_MW value as stored in the revision table (str or bytes) into aware UTC datetime.
    """
    if isinstance(timestamp_value, bytes):
        timestamp_value = timestamp_value.decode("ascii")
    datetime_obj = datetime.strptime(timestamp_value, MW_TIMESTAMP_FORMAT)
    return datetime_obj.replace(tzinfo=timezone.utc)


def start_timestamp(text: str, now: Optional[datetime] = None) -> Optional[str]:
    """
    Lower bound for a datefrom argument: the parsed instant as TS_MW.

    Returns None (and logs a warning) when the date cannot be parsed.
    """
    datetime_obj = parse_date(text, now=now)
    if datetime_obj is None:
        log.warning("Ignoring unparseable start date %r", text)
        return None
    return to_mw_timestamp(datetime_obj)


def end_of_day_timestamp(text: str, now: Optional[datetime] = None) -> Optional[str]:
    """
    Upper bound for a dateto argument as TS_MW.

    The end of the given day is wanted, not its beginning: midnight of the
    following day minus one second, whatever time of day was given.

    Returns None (and logs a warning) when the date cannot be parsed.
    """
    datetime_obj = parse_date(text, now=now)
    if datetime_obj is None:
        log.warning("Ignoring unparseable end date %r", text)
        return None
    tomorrow = _today(datetime_obj) + timedelta(days=1)
    return to_mw_timestamp(tomorrow - timedelta(seconds=1))


__all__ = [
    'MW_TIMESTAMP_FORMAT',
    'DATE_FORMATS',
    'parse_date',
    'to_mw_timestamp',
    'from_mw_timestamp',
    'start_timestamp',
    'end_of_day_timestamp',
]
