"""Routing port - Travel-duration estimates for the departure planner."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import TravelMode


class TravelDurationPort(Protocol):
    """Port for travel-duration estimation.

    Implementations:
    - adapters/routing/geodesic_estimator.py (GeodesicDurationEstimator)
    - adapters/routing/mock_estimator.py (MockDurationEstimator)
    """

    def estimate(self, origin: str, destination: str, mode: TravelMode) -> int:
        """Estimate the travel time between two addresses.

        Args:
            origin: Origin address text.
            destination: Sanitized destination address text.
            mode: Travel mode.

        Returns:
            Estimated duration in whole seconds (>= 0).

        Raises:
            RoutingError: If no estimate can be produced.
        """
        ...
