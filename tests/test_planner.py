"""Tests for departure planning."""

from datetime import datetime, timedelta, timezone

import pytest

from departure_resolver.config import PlannerConfig
from departure_resolver.domain.models import PlanError, PlanStatus
from departure_resolver.planner import classify_status, clamp_buffer, evaluate_plan, plan_departure

APPT = "2030-01-01T11:00:00Z"


def _utc(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2030, 1, 1, hour, minute, second, tzinfo=timezone.utc)


def test_future_plan():
    plan = plan_departure(APPT, 3600, 15, _utc(9))
    assert plan.valid
    assert plan.status is PlanStatus.FUTURE
    assert plan.depart_time_iso == "2030-01-01T09:45:00.000Z"
    assert plan.appt_time_iso == "2030-01-01T11:00:00.000Z"
    assert plan.lead_seconds == 45 * 60


def test_leave_now_plan():
    plan = plan_departure(APPT, 3600, 15, _utc(9, 50))
    assert plan.status is PlanStatus.LEAVE_NOW
    assert plan.lead_seconds == 0


def test_late_plan():
    plan = plan_departure(APPT, 3600, 15, _utc(11, 1))
    assert plan.status is PlanStatus.LATE
    assert plan.lead_seconds == 0


def test_boundaries_are_inclusive():
    assert plan_departure(APPT, 3600, 15, _utc(9, 45)).status is PlanStatus.LEAVE_NOW
    assert plan_departure(APPT, 3600, 15, _utc(11)).status is PlanStatus.LATE


@pytest.mark.parametrize("appt_time", [None, "", "   "])
def test_missing_time(appt_time):
    plan = plan_departure(appt_time, 3600, 15, _utc(9))
    assert not plan.valid
    assert plan.error is PlanError.MISSING_TIME
    assert plan.depart_time is None
    assert plan.status is None


@pytest.mark.parametrize("appt_time", ["not-a-date", "soon"])
def test_invalid_time(appt_time):
    plan = plan_departure(appt_time, 3600, 15, _utc(9))
    assert not plan.valid
    assert plan.error is PlanError.INVALID_TIME
    assert plan.to_dict() == {"valid": False, "error": "InvalidTime"}


def test_negative_duration_counts_as_zero():
    plan = plan_departure(APPT, -500, 0, _utc(9))
    assert plan.duration_seconds == 0
    assert plan.depart_time == plan.appt_time


@pytest.mark.parametrize("buffer,expected", [(-5, 0), (0, 0), (15, 15), (180, 180), (500, 180), (None, 0)])
def test_buffer_is_clamped(buffer, expected):
    plan = plan_departure(APPT, 0, buffer, _utc(9))
    assert plan.buffer_minutes == expected
    assert plan.depart_time == _utc(11) - timedelta(minutes=expected)


def test_clamp_buffer_uses_config():
    assert clamp_buffer(90, PlannerConfig(max_buffer_minutes=60)) == 60


@pytest.mark.parametrize("duration", [0, 1, 600, 3600, 86400])
@pytest.mark.parametrize("buffer", [0, 10, 180])
def test_depart_never_after_appointment(duration, buffer):
    plan = plan_departure(APPT, duration, buffer, _utc(9))
    assert plan.depart_time <= plan.appt_time


def test_offset_timestamp():
    plan = plan_departure("2030-01-01T13:00:00+02:00", 3600, 15, _utc(9))
    assert plan.appt_time == _utc(11)


def test_datetime_input():
    plan = plan_departure(_utc(11), 3600, 15, _utc(9))
    assert plan.depart_time_iso == "2030-01-01T09:45:00.000Z"


def test_lenient_absolute_timestamp():
    plan = plan_departure("January 1, 2030 11:00", 0, 0, _utc(9))
    assert plan.valid
    assert plan.appt_time == datetime(2030, 1, 1, 11, 0).astimezone()


def test_lead_seconds_are_floored():
    plan = plan_departure(APPT, 3600, 15, datetime(2030, 1, 1, 9, 0, 0, 500000, tzinfo=timezone.utc))
    assert plan.lead_seconds == 45 * 60 - 1


def test_plan_is_deterministic():
    assert plan_departure(APPT, 3600, 15, _utc(9)) == plan_departure(APPT, 3600, 15, _utc(9))


def test_to_dict():
    plan = plan_departure(APPT, 3600, 15, _utc(9))
    assert plan.to_dict() == {
        "valid": True,
        "apptTime": "2030-01-01T11:00:00.000Z",
        "durationSeconds": 3600,
        "bufferMinutes": 15,
        "departTime": "2030-01-01T09:45:00.000Z",
        "leadSeconds": 2700,
        "status": "Future",
    }


def test_reevaluate_moves_through_statuses():
    plan = plan_departure(APPT, 3600, 15, _utc(9))
    assert plan.reevaluate(_utc(9, 50)).status is PlanStatus.LEAVE_NOW
    assert plan.reevaluate(_utc(11)).status is PlanStatus.LATE
    assert plan.reevaluate(_utc(9)) == plan


def test_reevaluate_keeps_buffer_above_default_cap():
    config = PlannerConfig(max_buffer_minutes=300)
    plan = plan_departure("2030-01-01T20:00:00Z", 0, 240, _utc(9), config=config)
    later = plan.reevaluate(_utc(10))
    assert later.buffer_minutes == 240
    assert later.depart_time == plan.depart_time == _utc(16)
    assert later.lead_seconds == 6 * 3600


def test_evaluate_plan_does_not_clamp():
    plan = evaluate_plan(_utc(20), 0, 240, _utc(9))
    assert plan.buffer_minutes == 240
    assert plan.depart_time == _utc(16)


def test_reevaluate_invalid_plan_is_unchanged():
    plan = plan_departure("nope", 0, 0, _utc(9))
    assert plan.reevaluate(_utc(10)) is plan


@pytest.mark.parametrize(
    "now,expected",
    [
        (_utc(9), "Time until depart: 45m 0s"),
        (_utc(9, 44, 30), "Time until depart: 0m 30s"),
        (_utc(9, 50), "Time until appointment: 70m 0s"),
        (_utc(11), "Appointment time reached"),
        (_utc(12), "Appointment time reached"),
    ],
)
def test_countdown(now, expected):
    plan = plan_departure(APPT, 3600, 15, _utc(9))
    assert plan.countdown(now) == expected


def test_countdown_for_invalid_plan():
    assert plan_departure(None, 0, 0, _utc(9)).countdown(_utc(9)) is None


def test_classify_status():
    appt, depart = _utc(11), _utc(9, 45)
    assert classify_status(appt, depart, _utc(9)) is PlanStatus.FUTURE
    assert classify_status(appt, depart, _utc(10)) is PlanStatus.LEAVE_NOW
    assert classify_status(appt, depart, _utc(11, 30)) is PlanStatus.LATE


@pytest.mark.parametrize(
    "appt_time,duration,buffer,now,status",
    [
        ("2030-01-01T11:00:00Z", 3600, 15, _utc(9), PlanStatus.FUTURE),
        ("2030-01-01T10:00:00Z", 900, 5, _utc(9, 40), PlanStatus.LEAVE_NOW),
        ("2030-01-01T10:00:00Z", 600, 0, _utc(10, 5), PlanStatus.LATE),
    ],
)
def test_status_examples(appt_time, duration, buffer, now, status):
    assert plan_departure(appt_time, duration, buffer, now).status is status
