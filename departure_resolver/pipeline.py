"""Text front-end for the Departure Resolver.

Turns a deep-link query string into a short human-readable summary. This
helper is designed to be reused from other front-ends (CLI, web handlers,
tests).

    python -m departure_resolver.pipeline "?origin=Home&destination=Doctor appointment at 11:30am in 1805 Deer Drive PA"
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import List, Optional

from .container import get_container
from .domain.models import TripPlan
from .io.query_params import parse_query
from .monitoring import setup_logging
from .services import TripPlannerService

DEMO_QUERY = (
    "?origin=30th Street Station, Philadelphia"
    "&destination=Doctor appointment at 11:30am in 1805 Deer Drive PA"
    "&bufferMin=15"
)


def _local(dt: Optional[datetime]) -> str:
    return dt.astimezone().strftime("%Y-%m-%d %H:%M") if dt else "-"


def format_trip(
    trip: TripPlan,
    now: Optional[datetime] = None,
    refresh_seconds: Optional[int] = None,
) -> str:
    """Render a trip plan as a few lines of text.

    ``refresh_seconds``, when given, is shown for valid plans as the
    interval at which the caller re-evaluates the plan.
    """
    lines = [f"Warning: {warning}" for warning in trip.warnings]
    lines.append(f"Intent: {trip.intent.intent.value}")
    if trip.intent.cuisine:
        lines.append(f"Cuisine: {trip.intent.cuisine}")
    if trip.routed_destination and trip.routed_destination != trip.query.destination:
        lines.append(f"Route to: {trip.routed_destination}")

    plan = trip.plan
    if plan is None:
        return "\n".join(lines)
    if not plan.valid:
        lines.append("Invalid appointment time")
        return "\n".join(lines)

    lines.extend(
        [
            f"Appointment: {_local(plan.appt_time)}",
            f"Travel: {round(plan.duration_seconds / 60)} min ({trip.duration_source})",
            f"Buffer: {plan.buffer_minutes} min",
            f"Depart by: {_local(plan.depart_time)}",
            f"Status: {plan.status.value if plan.status else '-'}",
        ]
    )
    if refresh_seconds:
        lines.append(f"Refresh every: {refresh_seconds}s")
    countdown = plan.countdown(now)
    if countdown:
        lines.append(countdown)
    return "\n".join(lines)


def solve_trip_query(
    search: str,
    now: Optional[datetime] = None,
    service: Optional[TripPlannerService] = None,
) -> str:
    """Run the full pipeline on a query string and return a summary."""
    query = parse_query(search)
    planner = service or get_container().resolve(TripPlannerService)
    trip = planner.plan(query, now)
    return format_trip(trip, now, planner.refresh_interval(query))


def run_pipeline(argv: Optional[List[str]] = None) -> None:
    """Run the pipeline for the query given on the command line, or a demo query."""
    setup_logging()
    search = argv[0] if argv else DEMO_QUERY
    print("Query:", search)
    print(solve_trip_query(search))


if __name__ == "__main__":
    run_pipeline(sys.argv[1:])
