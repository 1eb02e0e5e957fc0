"""Departure planning for appointment-driven trips.

``plan_departure`` is pure: given the same inputs and the same "now" it
returns the same plan, so callers can re-run it on every refresh tick.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Union

from .config import PlannerConfig, get_config
from .dates import local_now, parse_timestamp, to_utc
from .domain.models import AppointmentPlan, PlanError, PlanStatus

logger = logging.getLogger(__name__)


def classify_status(appt_time: datetime, depart_time: datetime, now: datetime) -> PlanStatus:
    """Late once the appointment is due, LeaveNow once departure is due."""
    if appt_time <= now:
        return PlanStatus.LATE
    if depart_time <= now:
        return PlanStatus.LEAVE_NOW
    return PlanStatus.FUTURE


def clamp_buffer(buffer_minutes: Optional[int], config: Optional[PlannerConfig] = None) -> int:
    cfg = config or get_config().planner
    return max(0, min(cfg.max_buffer_minutes, int(buffer_minutes or 0)))


def plan_departure(
    appt_time: Union[str, datetime, None],
    duration_seconds: Optional[int],
    buffer_minutes: Optional[int],
    now: Optional[datetime] = None,
    config: Optional[PlannerConfig] = None,
) -> AppointmentPlan:
    """Compute when to leave for an appointment.

    Args:
        appt_time: Appointment time as an ISO-8601 string or datetime.
        duration_seconds: Estimated travel duration; negatives count as 0.
        buffer_minutes: Safety margin before the appointment.
        now: Reference time; defaults to the current wall-clock time.
        config: Planner limits (buffer range).

    Returns:
        A valid plan, or an invalid one whose ``error`` is MissingTime
        (no appointment time given) or InvalidTime (not a timestamp).
    """
    if appt_time is None or (isinstance(appt_time, str) and not appt_time.strip()):
        return AppointmentPlan(valid=False, error=PlanError.MISSING_TIME)

    appointment = parse_timestamp(appt_time)
    if appointment is None:
        logger.debug("Appointment time not parseable", extra={"appt_time": str(appt_time)})
        return AppointmentPlan(valid=False, error=PlanError.INVALID_TIME)

    duration = max(0, int(duration_seconds or 0))
    buffer = clamp_buffer(buffer_minutes, config)
    return evaluate_plan(appointment, duration, buffer, now)


def evaluate_plan(
    appointment: datetime,
    duration_seconds: int,
    buffer_minutes: int,
    now: Optional[datetime] = None,
) -> AppointmentPlan:
    """Plan from an aware appointment time and already-normalized inputs.

    The buffer is taken as given; clamping happens once, in
    :func:`plan_departure`, so a re-evaluated plan keeps its buffer.
    """
    current = to_utc(local_now(now))
    depart = appointment - timedelta(seconds=duration_seconds, minutes=buffer_minutes)
    status = classify_status(appointment, depart, current)
    lead_seconds = max(0, math.floor((depart - current).total_seconds()))

    logger.debug(
        "Departure planned",
        extra={"status": status.value, "lead_seconds": lead_seconds},
    )

    return AppointmentPlan(
        valid=True,
        appt_time=appointment,
        duration_seconds=duration_seconds,
        buffer_minutes=buffer_minutes,
        depart_time=depart,
        lead_seconds=lead_seconds,
        status=status,
        evaluated_at=current,
    )
