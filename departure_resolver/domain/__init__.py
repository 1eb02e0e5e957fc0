"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application.
"""

from .errors import (
    ConfigurationError,
    DepartureResolverError,
    GeocodingError,
    RoutingError,
)
from .models import (
    AppointmentPlan,
    GeoLocation,
    Intent,
    IntentResult,
    PlanError,
    PlanStatus,
    QueryContext,
    TemporalPhrase,
    TravelMode,
    TripPlan,
)

__all__ = [
    # Models
    "TemporalPhrase",
    "Intent",
    "IntentResult",
    "PlanStatus",
    "PlanError",
    "AppointmentPlan",
    "TravelMode",
    "QueryContext",
    "GeoLocation",
    "TripPlan",
    # Errors
    "DepartureResolverError",
    "GeocodingError",
    "RoutingError",
    "ConfigurationError",
]
