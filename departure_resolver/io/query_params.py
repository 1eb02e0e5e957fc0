"""Input acquisition for the Departure Resolver.

This module turns a deep-link query string (``?origin=...&destination=...``)
into a :class:`QueryContext`. Parsing never fails: missing or invalid
values fall back to defaults and are reported in ``warnings``.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional, Union
from urllib.parse import parse_qs

from ..config import PlannerConfig, get_config
from ..domain.models import QueryContext, TravelMode
from ..planner import clamp_buffer


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _to_int(raw: str) -> int:
    """Read the leading integer of ``raw`` ("25.5" -> 25), 0 if there is none."""
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def _first_values(search: Union[str, Mapping[str, str]]) -> dict[str, str]:
    if isinstance(search, Mapping):
        return {key: str(value) for key, value in search.items() if value is not None}
    parsed = parse_qs(search.lstrip("?"), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items() if values}


def parse_query(
    search: Union[str, Mapping[str, str]],
    defaults: Optional[Mapping[str, str]] = None,
    config: Optional[PlannerConfig] = None,
) -> QueryContext:
    """Parse deep-link parameters into a query context.

    Args:
        search: Raw query string (leading "?" optional) or a mapping of
            already-decoded parameters.
        defaults: Fallback origin/destination/mode/units values.
        config: Planner limits for the buffer and refresh interval.

    Returns:
        The query context, with any problems listed in ``warnings``.
    """
    cfg = config or get_config().planner
    params = _first_values(search)
    fallback = dict(defaults or {})
    warnings: list[str] = []

    origin = params.get("origin") or fallback.get("origin") or None
    destination = params.get("destination") or fallback.get("destination") or None
    if not origin:
        warnings.append("Missing required parameter: origin")
    if not destination:
        warnings.append("Missing required parameter: destination")

    mode_raw = (params.get("mode") or fallback.get("mode") or "driving").lower()
    try:
        mode = TravelMode(mode_raw)
    except ValueError:
        warnings.append(f"Invalid mode '{mode_raw}', falling back to 'driving'")
        mode = TravelMode.DRIVING

    refresh_seconds = None
    refresh_raw = params.get("refreshSec")
    if refresh_raw:
        value = _to_int(refresh_raw)
        if value > 0:
            refresh_seconds = max(cfg.min_refresh_seconds, value)
        else:
            warnings.append("Invalid refreshSec value ignored")

    buffer_raw = params.get("bufferMin")
    if buffer_raw:
        buffer_minutes = clamp_buffer(_to_int(buffer_raw), cfg)
    else:
        buffer_minutes = cfg.default_buffer_minutes

    return QueryContext(
        origin=origin,
        destination=destination,
        mode=mode,
        appt_time=params.get("apptTime") or None,
        intent=params.get("intent") or None,
        cuisine=params.get("cuisine") or None,
        buffer_minutes=buffer_minutes,
        refresh_seconds=refresh_seconds,
        units=(params.get("units") or fallback.get("units") or "").lower(),
        lang=params.get("lang") or "en",
        warnings=tuple(warnings),
    )
