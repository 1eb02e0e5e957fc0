"""Services layer - Application orchestration.

Available services:
- TripPlannerService: Appointment resolution, intent and departure planning
"""

from .trip_planner import TripPlannerService

__all__ = ["TripPlannerService"]
