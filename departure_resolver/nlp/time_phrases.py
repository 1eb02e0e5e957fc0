"""Resolution of free-text scheduling phrases into absolute times.

Matchers are tried in a fixed order and the first one that produces a
time wins:

1. compact clock time ("1130am", "930pm")
2. named anchors ("noon", then "midnight")
3. clock time with a separator ("11:30", "11.30am", "11 45 am")
4. bare hour with am/pm ("3pm", "3 pm")
5. bare hour after "at" ("at 3"), only when the text has no " in "
6. relative offsets after " in " ("in half an hour", "in 1h 15m")

Absolute matchers read the clock time in the process's local zone and
pick the day with :func:`roll_forward`. Relative offsets are added to
"now" as-is. A phrase that does not match, or a clock time whose hour or
minute cannot exist, resolves to None. A bare hour with am/pm that cannot
exist ("45pm") leaves only the relative matcher in play.

Example
-------
    >>> now = datetime(2030, 1, 1, 9, 0)
    >>> resolve_time_phrase("dentist at 11:30am", now).strategy
    'clock'
    >>> resolve_time_phrase("no time mentioned", now) is None
    True
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..config import ResolverConfig, get_config
from ..dates import local_now, local_wall_clock, to_utc
from ..domain.models import TemporalPhrase

logger = logging.getLogger(__name__)

RELATIVE_MARKER = " in "

_TOMORROW = re.compile(r"\btomorrow\b")
_COMPACT = re.compile(r"\b(\d{3,4})(am|pm)\b")
_NOON = re.compile(r"\bnoon\b")
_MIDNIGHT = re.compile(r"\bmidnight\b")
_CLOCK = re.compile(r"\b(\d{1,2})[:.](\d{2})\s*(am|pm)?\b")
_CLOCK_SPACED = re.compile(r"\b(\d{1,2})\s+(\d{2})\s*(am|pm)\b")
_HOUR_MERIDIEM = re.compile(r"\b(\d{1,2})\s*(am|pm)\b")
_AT_HOUR = re.compile(r"\bat\s+(\d{1,2})\b")
_HALF_HOUR = re.compile(r"\bhalf (?:an )?hour\b|\b(?:a )?half hour\b")
_QUARTER_HOUR = re.compile(r"\b(?:a )?quarter (?:of )?an? hour\b|\bquarter hour\b")
_OFFSET_TOKEN = re.compile(r"(\d+)\s*(hours?|hrs?|h|minutes?|mins?|m)\b")
_HOUR_UNITS = frozenset({"h", "hr", "hrs", "hour", "hours"})


class _OutOfRange(Exception):
    """A clock time matched but its hour or minute cannot exist."""


class _SkipToRelative(Exception):
    """A bare am/pm hour matched but cannot exist; the "at" matcher is skipped."""


@dataclass(frozen=True)
class _Context:
    text: str
    now: datetime
    tomorrow: bool
    config: ResolverConfig


Matcher = Callable[[_Context], Optional[datetime]]


def roll_forward(
    hour: int,
    minute: int,
    now: datetime,
    *,
    tomorrow: bool,
    grace_minutes: int = 5,
) -> datetime:
    """Choose the day on which a wall-clock time is meant.

    Parameters
    ----------
    hour, minute : int
        24-hour local wall-clock time.
    now : datetime
        Aware local "now".
    tomorrow : bool
        Whether the phrase said "tomorrow".
    grace_minutes : int
        How far in the past a time may lie and still mean today.

    Returns
    -------
    datetime
        Today's occurrence, or tomorrow's when the phrase said
        "tomorrow" or today's occurrence is already more than
        ``grace_minutes`` gone.
    """
    today = local_wall_clock(now.date(), hour, minute)
    if tomorrow or today < now - timedelta(minutes=grace_minutes):
        return local_wall_clock(now.date(), hour, minute, days_ahead=1)
    return today


def _on_clock(ctx: _Context, hour: int, minute: int) -> datetime:
    return roll_forward(
        hour,
        minute,
        ctx.now,
        tomorrow=ctx.tomorrow,
        grace_minutes=ctx.config.rollover_grace_minutes,
    )


def _to_24h(hour: int, meridiem: str) -> int:
    if meridiem == "am" and hour == 12:
        return 0
    if meridiem == "pm" and hour < 12:
        return hour + 12
    return hour


def _prefer_evening(hour: int, ctx: _Context) -> int:
    # "at 3" said at 6pm means 3pm, not 3am tomorrow.
    if 1 <= hour <= ctx.config.evening_hour_max and ctx.now.hour > hour + 1:
        return (hour + 12) % 24
    return hour


def _match_compact(ctx: _Context) -> Optional[datetime]:
    match = _COMPACT.search(ctx.text)
    if not match:
        return None
    digits, meridiem = match.groups()
    hour, minute = int(digits[:-2]), int(digits[-2:])
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        return None
    return _on_clock(ctx, _to_24h(hour, meridiem), minute)


def _match_noon(ctx: _Context) -> Optional[datetime]:
    if _NOON.search(ctx.text):
        return _on_clock(ctx, 12, 0)
    return None


def _match_midnight(ctx: _Context) -> Optional[datetime]:
    if _MIDNIGHT.search(ctx.text):
        return _on_clock(ctx, 0, 0)
    return None


def _match_clock(ctx: _Context) -> Optional[datetime]:
    match = _CLOCK.search(ctx.text) or _CLOCK_SPACED.search(ctx.text)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    meridiem = match.group(3)
    if hour > 23 or minute > 59:
        raise _OutOfRange(match.group(0))
    hour = _to_24h(hour, meridiem) if meridiem else _prefer_evening(hour, ctx)
    return _on_clock(ctx, hour, minute)


def _match_hour_meridiem(ctx: _Context) -> Optional[datetime]:
    match = _HOUR_MERIDIEM.search(ctx.text)
    if not match:
        return None
    hour = int(match.group(1))
    if hour > 23:
        raise _SkipToRelative(match.group(0))
    return _on_clock(ctx, _to_24h(hour, match.group(2)), 0)


def _match_at_hour(ctx: _Context) -> Optional[datetime]:
    # Street numbers after " in " are not hours.
    if RELATIVE_MARKER in ctx.text:
        return None
    match = _AT_HOUR.search(ctx.text)
    if not match:
        return None
    hour = int(match.group(1))
    if hour > 23:
        return None
    return _on_clock(ctx, _prefer_evening(hour, ctx), 0)


def _relative_minutes(after: str) -> int:
    if _HALF_HOUR.search(after):
        return 30
    if _QUARTER_HOUR.search(after):
        return 15
    return sum(
        int(value) * (60 if unit in _HOUR_UNITS else 1)
        for value, unit in _OFFSET_TOKEN.findall(after)
    )


def _match_relative(ctx: _Context) -> Optional[datetime]:
    index = ctx.text.find(RELATIVE_MARKER)
    if index == -1:
        return None
    minutes = _relative_minutes(ctx.text[index + len(RELATIVE_MARKER):].strip())
    if minutes <= 0:
        return None
    return ctx.now + timedelta(minutes=minutes)


MATCHERS: tuple[tuple[str, Matcher], ...] = (
    ("compact", _match_compact),
    ("noon", _match_noon),
    ("midnight", _match_midnight),
    ("clock", _match_clock),
    ("hour_meridiem", _match_hour_meridiem),
    ("at_hour", _match_at_hour),
    ("relative", _match_relative),
)


def _resolved(strategy: str, instant: datetime) -> TemporalPhrase:
    phrase = TemporalPhrase(instant=to_utc(instant), strategy=strategy)
    logger.debug(
        "Time phrase resolved",
        extra={"strategy": strategy, "instant": phrase.to_iso()},
    )
    return phrase


def resolve_time_phrase(
    text: Optional[str],
    now: Optional[datetime] = None,
    config: Optional[ResolverConfig] = None,
) -> Optional[TemporalPhrase]:
    """Resolve the scheduling phrase embedded in ``text``.

    Parameters
    ----------
    text : str
        Free text, e.g. "Doctor appointment at 11:30am in 1805 Deer Drive PA".
    now : datetime, optional
        Reference time; defaults to the current wall-clock time. A naive
        value is read as local time.
    config : ResolverConfig, optional
        Thresholds for the rollover and evening heuristics.

    Returns
    -------
    TemporalPhrase or None
        The resolved UTC instant and the matcher that produced it, or
        None when nothing matched or the matched time cannot exist.
    """
    if not text or not text.strip():
        return None

    lowered = text.lower()
    ctx = _Context(
        text=lowered,
        now=local_now(now),
        tomorrow=bool(_TOMORROW.search(lowered)),
        config=config or get_config().resolver,
    )

    try:
        for name, matcher in MATCHERS:
            instant = matcher(ctx)
            if instant is not None:
                return _resolved(name, instant)
    except _OutOfRange as exc:
        logger.debug("Clock time out of range", extra={"token": str(exc)})
        return None
    except _SkipToRelative as exc:
        logger.debug("Bare hour out of range", extra={"token": str(exc)})
        instant = _match_relative(ctx)
        if instant is not None:
            return _resolved("relative", instant)

    logger.debug("No time phrase found", extra={"text_length": len(text)})
    return None
