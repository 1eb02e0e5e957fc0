# dates.py
from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

import dateparser

_HAS_DIGIT = re.compile(r"\d")

_DATEPARSER_SETTINGS = {
    "STRICT_PARSING": True,
    "DATE_ORDER": "MDY",
    "PARSERS": ["custom-formats", "absolute-time"],
}


def local_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware datetime in the process's local zone.

    A naive ``now`` is read as local wall-clock time.
    """
    if now is None:
        return datetime.now().astimezone()
    return now.astimezone()


def local_wall_clock(day: date, hour: int, minute: int, days_ahead: int = 0) -> datetime:
    """Build an aware local datetime for a wall-clock time on ``day``."""
    naive = datetime.combine(day + timedelta(days=days_ahead), time(hour, minute))
    return naive.astimezone()


def truncate_to_millis(dt: datetime) -> datetime:
    return dt.replace(microsecond=(dt.microsecond // 1000) * 1000)


def to_utc(dt: datetime) -> datetime:
    return truncate_to_millis(dt.astimezone(timezone.utc))


def format_timestamp(dt: datetime) -> str:
    """Render ``dt`` as ISO-8601 UTC with milliseconds, e.g. 2030-01-01T09:45:00.000Z."""
    utc = to_utc(dt)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"


def _parse_iso(text: str) -> Optional[datetime]:
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_absolute(text: str) -> Optional[datetime]:
    # Absolute timestamps always carry digits; skip dateparser otherwise.
    if not _HAS_DIGIT.search(text):
        return None
    try:
        return dateparser.parse(text, languages=["en"], settings=_DATEPARSER_SETTINGS)
    except (ValueError, OverflowError):
        return None


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an absolute timestamp into an aware UTC datetime.

    ISO-8601 strings (with ``Z``, an offset, or naive local time) are
    handled directly; other absolute spellings such as ``Jan 1 2030 10:00``
    go through dateparser in strict mode. Returns None when the value is
    empty or not a timestamp.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed: Optional[datetime] = value
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = _parse_iso(text) or _parse_absolute(text)
    if parsed is None:
        return None
    return to_utc(parsed)


def format_countdown(seconds: int) -> str:
    """Render a non-negative number of seconds as ``"<m>m <s>s"``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}m {seconds % 60}s"
