"""Fixed travel-duration estimator.

Stands in for a live routing provider when none is reachable (no
network, no credentials, upstream failure) and in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...config import get_config
from ...domain.models import TravelMode


@dataclass
class MockDurationEstimator:
    """Returns the same duration for every trip.

    Attributes:
        duration_seconds: The duration to report
    """

    duration_seconds: int = field(
        default_factory=lambda: get_config().routing.mock_duration_seconds
    )

    def estimate(self, origin: str, destination: str, mode: TravelMode) -> int:
        return max(0, self.duration_seconds)
