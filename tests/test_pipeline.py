"""End-to-end tests for the text front-end (no network)."""

from datetime import datetime

import pytest

from departure_resolver.adapters.routing import MockDurationEstimator
from departure_resolver.config import PlannerConfig
from departure_resolver.io import parse_query
from departure_resolver.pipeline import format_trip, solve_trip_query
from departure_resolver.services import TripPlannerService

NOW = datetime(2030, 1, 1, 9, 0)


@pytest.fixture
def service():
    return TripPlannerService(MockDurationEstimator(1800), MockDurationEstimator(5100))


@pytest.fixture
def configured_service():
    return TripPlannerService(
        MockDurationEstimator(1800), planner_config=PlannerConfig(refresh_interval_seconds=45)
    )


def test_appointment_summary(service):
    summary = solve_trip_query(
        "?origin=Home&destination=Doctor appointment at 11:30am in 1805 Deer Drive PA&bufferMin=15",
        now=NOW,
        service=service,
    )
    lines = summary.splitlines()

    assert "Intent: AppointmentLeaveTime" in lines
    assert "Route to: 1805 Deer Drive PA" in lines
    assert "Appointment: 2030-01-01 11:30" in lines
    assert "Travel: 30 min (live)" in lines
    assert "Buffer: 15 min" in lines
    assert "Depart by: 2030-01-01 10:45" in lines
    assert "Status: Future" in lines
    assert lines[-1] == "Time until depart: 105m 0s"


def test_food_summary(service):
    summary = solve_trip_query("origin=Home&destination=best thai food", now=NOW, service=service)
    assert summary.splitlines() == ["Intent: NearbyFood", "Cuisine: thai"]


def test_warnings_come_first(service):
    summary = solve_trip_query("origin=Home", now=NOW, service=service)
    lines = summary.splitlines()
    assert lines[0] == "Warning: Missing required parameter: destination"
    assert "Intent: TravelTime" in lines


def test_invalid_appointment_time(service):
    summary = solve_trip_query(
        "origin=Home&destination=Work&apptTime=whenever&intent=AppointmentLeaveTime",
        now=NOW,
        service=service,
    )
    assert summary.splitlines()[-1] == "Invalid appointment time"


def test_format_trip_after_refresh(service):
    trip = service.plan(parse_query("origin=Home&destination=Dentist at 1130am"), NOW)
    later = datetime(2030, 1, 1, 11, 35)
    summary = format_trip(service.refresh(trip, later), later)

    assert "Status: Late" in summary
    assert summary.splitlines()[-1] == "Appointment time reached"


def test_refresh_interval_is_shown_for_appointments(configured_service):
    summary = solve_trip_query(
        "origin=Home&destination=Dentist at 1130am&refreshSec=60", now=NOW, service=configured_service
    )
    assert "Refresh every: 60s" in summary.splitlines()


def test_default_refresh_interval(configured_service):
    summary = solve_trip_query("origin=Home&destination=Dentist at 1130am", now=NOW, service=configured_service)
    assert "Refresh every: 45s" in summary.splitlines()


def test_no_refresh_interval_without_plan(configured_service):
    summary = solve_trip_query("origin=Home&destination=best thai food", now=NOW, service=configured_service)
    assert "Refresh every" not in summary
