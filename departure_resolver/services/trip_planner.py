"""Trip planner service - Main orchestrator.

Drives the four core operations in the order the serving layer needs
them: find the appointment time, clean the destination for routing,
classify the query, and, for appointment trips, plan the departure with
a travel-duration estimate.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..adapters.routing.mock_estimator import MockDurationEstimator
from ..config import PlannerConfig, get_config
from ..dates import local_now
from ..domain.errors import RoutingError
from ..domain.models import (
    Intent,
    IntentResult,
    QueryContext,
    TemporalPhrase,
    TravelMode,
    TripPlan,
)
from ..nlp.destination import sanitize_destination
from ..nlp.intent import classify_intent
from ..nlp.time_phrases import resolve_time_phrase
from ..planner import plan_departure
from ..ports.routing import TravelDurationPort


@dataclass
class TripPlannerService:
    """Main service for planning a trip from a parsed query.

    Attributes:
        duration_estimator: Live travel-duration collaborator
        fallback_estimator: Used when the live estimator fails
        planner_config: Buffer limits and the default refresh interval
    """

    duration_estimator: TravelDurationPort
    fallback_estimator: TravelDurationPort = field(default_factory=MockDurationEstimator)
    planner_config: PlannerConfig = field(default_factory=lambda: get_config().planner)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def find_appointment(
        self, query: QueryContext, now: Optional[datetime] = None
    ) -> Optional[TemporalPhrase]:
        """Explicit apptTime first, then the destination text, then the origin text."""
        if query.appt_time:
            return TemporalPhrase.from_iso(query.appt_time)
        for text in (query.destination, query.origin):
            phrase = resolve_time_phrase(text, now)
            if phrase is not None:
                return phrase
        return None

    def plan(self, query: QueryContext, now: Optional[datetime] = None) -> TripPlan:
        """Plan a trip.

        Args:
            query: Parsed query context.
            now: Reference time; defaults to the current wall-clock time.

        Returns:
            TripPlan with the intent, routed destination and, for
            appointment trips, the departure plan. Never raises for
            unparseable times or routing failures; those show up as an
            invalid plan or a mock duration.
        """
        current = local_now(now)
        appointment = self.find_appointment(query, current)
        appt_text = query.appt_time or (appointment.to_iso() if appointment else None)
        routed_destination = sanitize_destination(query.destination, appointment)

        if appt_text and not (query.origin and query.destination):
            # Appointment-only: nothing to route, still show the plan.
            intent = IntentResult(Intent.APPOINTMENT_LEAVE_TIME)
        else:
            intent = classify_intent(
                query.origin,
                query.destination,
                explicit_intent=query.intent,
                explicit_cuisine=query.cuisine,
                appt_time_present=bool(appt_text),
            )
        self._logger.info(
            "Query classified",
            extra={"intent": intent.intent.value, "has_appointment": bool(appt_text)},
        )

        if not (intent.is_appointment and appt_text):
            return TripPlan(
                query=query,
                intent=intent,
                appointment=appointment,
                routed_destination=routed_destination,
            )

        duration, source = self._estimate_duration(
            query.origin, routed_destination, query.mode
        )
        plan = plan_departure(
            appt_text, duration, query.buffer_minutes, current, config=self.planner_config
        )
        self._logger.info(
            "Departure planned",
            extra={
                "valid": plan.valid,
                "status": plan.status.value if plan.status else None,
                "duration_source": source,
            },
        )

        return TripPlan(
            query=query,
            intent=intent,
            appointment=appointment,
            routed_destination=routed_destination,
            duration_seconds=duration,
            duration_source=source,
            plan=plan,
        )

    def refresh(self, trip: TripPlan, now: Optional[datetime] = None) -> TripPlan:
        """Re-evaluate the departure plan of ``trip`` for a fresh "now"."""
        if trip.plan is None:
            return trip
        return dataclasses.replace(trip, plan=trip.plan.reevaluate(now))

    def refresh_interval(self, query: QueryContext) -> int:
        """Seconds between two calls to :meth:`refresh` for this query.

        The query's own refreshSec wins; otherwise the configured default.
        """
        return query.refresh_seconds or self.planner_config.refresh_interval_seconds

    def _estimate_duration(
        self, origin: Optional[str], destination: Optional[str], mode: TravelMode
    ) -> tuple[int, str]:
        if not origin or not destination:
            return 0, "none"
        try:
            return self.duration_estimator.estimate(origin, destination, mode), "live"
        except RoutingError as e:
            self._logger.warning(
                "Travel duration unavailable, using mock estimate",
                extra={"error": e.message, **e.log_fields()},
            )
            return self.fallback_estimator.estimate(origin, destination, mode), "mock"
