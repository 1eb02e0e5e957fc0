"""Immutable domain models for the Departure Resolver.

All models are frozen dataclasses with slots. Timestamps are aware
UTC datetimes with millisecond precision; they cross the package
boundary as ISO-8601 UTC strings.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..dates import format_countdown, format_timestamp, local_now, parse_timestamp


class Intent(str, Enum):
    """Classified purpose of a travel query."""

    TRAVEL_TIME = "TravelTime"
    NEARBY_FOOD = "NearbyFood"
    APPOINTMENT_LEAVE_TIME = "AppointmentLeaveTime"
    UNKNOWN = "Unknown"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional[Intent]:
        """Look up an intent by its wire name, case-insensitively."""
        if not value:
            return None
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


class PlanStatus(str, Enum):
    """Where "now" falls relative to the depart-by and appointment times."""

    FUTURE = "Future"
    LEAVE_NOW = "LeaveNow"
    LATE = "Late"


class PlanError(str, Enum):
    MISSING_TIME = "MissingTime"
    INVALID_TIME = "InvalidTime"


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


@dataclass(frozen=True, slots=True)
class TemporalPhrase:
    """A successfully resolved scheduling phrase.

    Attributes:
        instant: Absolute UTC time, truncated to milliseconds
        strategy: Name of the matcher that produced it ("iso" when built
            from an already-normalized timestamp)
    """

    instant: datetime
    strategy: str = "iso"

    def to_iso(self) -> str:
        return format_timestamp(self.instant)

    @classmethod
    def from_iso(cls, text: Optional[str]) -> Optional[TemporalPhrase]:
        """Wrap an already-ISO timestamp, or return None if it does not parse."""
        instant = parse_timestamp(text)
        if instant is None:
            return None
        return cls(instant=instant)


@dataclass(frozen=True, slots=True)
class IntentResult:
    """Intent plus its auxiliary fields.

    Attributes:
        intent: The classified intent
        cuisine: Specific cuisine for NearbyFood, otherwise None
    """

    intent: Intent
    cuisine: Optional[str] = None

    @property
    def is_nearby_food(self) -> bool:
        return self.intent is Intent.NEARBY_FOOD

    @property
    def is_appointment(self) -> bool:
        return self.intent is Intent.APPOINTMENT_LEAVE_TIME


@dataclass(frozen=True, slots=True)
class AppointmentPlan:
    """Departure plan for one appointment, evaluated against one "now".

    Invalid plans only carry ``error``; every other field keeps its
    default. ``depart_time <= appt_time`` always holds for valid plans.

    Attributes:
        valid: Whether the appointment time could be read
        error: Why the plan is invalid
        appt_time: Appointment instant (UTC)
        duration_seconds: Travel duration, clamped to >= 0
        buffer_minutes: Safety buffer, clamped to the configured range
        depart_time: appt_time - duration - buffer
        lead_seconds: Whole seconds from evaluated_at until depart_time, >= 0
        status: Future, LeaveNow or Late at evaluated_at
        evaluated_at: The "now" this plan was computed for
    """

    valid: bool
    error: Optional[PlanError] = None
    appt_time: Optional[datetime] = None
    duration_seconds: int = 0
    buffer_minutes: int = 0
    depart_time: Optional[datetime] = None
    lead_seconds: int = 0
    status: Optional[PlanStatus] = None
    evaluated_at: Optional[datetime] = None

    @property
    def appt_time_iso(self) -> Optional[str]:
        return format_timestamp(self.appt_time) if self.appt_time else None

    @property
    def depart_time_iso(self) -> Optional[str]:
        return format_timestamp(self.depart_time) if self.depart_time else None

    def reevaluate(self, now: Optional[datetime] = None) -> AppointmentPlan:
        """Recompute the plan against a fresh "now" (refresh-loop hook)."""
        if not self.valid:
            return self
        # Import here to avoid a circular import with the planner
        from ..planner import evaluate_plan

        return evaluate_plan(
            self.appt_time, self.duration_seconds, self.buffer_minutes, now
        )

    def countdown(self, now: Optional[datetime] = None) -> Optional[str]:
        """Countdown line shown next to the plan, or None for invalid plans."""
        if not self.valid or self.appt_time is None or self.depart_time is None:
            return None
        current = local_now(now)
        appt_in = math.floor((self.appt_time - current).total_seconds())
        leave_in = math.floor((self.depart_time - current).total_seconds())
        if appt_in <= 0:
            return "Appointment time reached"
        if leave_in > 0:
            return f"Time until depart: {format_countdown(leave_in)}"
        return f"Time until appointment: {format_countdown(appt_in)}"

    def to_dict(self) -> Dict[str, Any]:
        """Render the boundary form (camelCase keys, ISO strings)."""
        if not self.valid:
            return {"valid": False, "error": self.error.value if self.error else None}
        return {
            "valid": True,
            "apptTime": self.appt_time_iso,
            "durationSeconds": self.duration_seconds,
            "bufferMinutes": self.buffer_minutes,
            "departTime": self.depart_time_iso,
            "leadSeconds": self.lead_seconds,
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class QueryContext:
    """Caller-owned query fields, as read from a deep link.

    Attributes:
        origin: Raw origin text
        destination: Raw destination text, possibly with an embedded
            appointment phrase
        mode: Travel mode used for duration estimates
        appt_time: Explicit appointment time, expected ISO-8601
        intent: Explicit intent override (wire name)
        cuisine: Cuisine override
        buffer_minutes: Buffer before the appointment
        refresh_seconds: Requested plan refresh interval, if any
        units: Distance units hint
        lang: Language hint
        warnings: Problems found while parsing the query
    """

    origin: Optional[str] = None
    destination: Optional[str] = None
    mode: TravelMode = TravelMode.DRIVING
    appt_time: Optional[str] = None
    intent: Optional[str] = None
    cuisine: Optional[str] = None
    buffer_minutes: int = 10
    refresh_seconds: Optional[int] = None
    units: str = ""
    lang: str = "en"
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TripPlan:
    """Everything the service derives for one query.

    Attributes:
        query: The query the plan was built from
        intent: Classified intent
        appointment: Resolved appointment time, if any
        routed_destination: Destination text to hand to routing APIs
        duration_seconds: Travel duration used for the plan
        duration_source: "live", "mock" or "none"
        plan: Departure plan, only for appointment intents
    """

    query: QueryContext
    intent: IntentResult
    appointment: Optional[TemporalPhrase] = None
    routed_destination: Optional[str] = None
    duration_seconds: int = 0
    duration_source: str = "none"
    plan: Optional[AppointmentPlan] = None

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.query.warnings
