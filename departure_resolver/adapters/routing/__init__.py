"""Routing adapters - Implementations of the TravelDurationPort.

Available implementations:
- GeodesicDurationEstimator: Geocoded distance over per-mode average speed
- MockDurationEstimator: Fixed duration for offline use and tests
"""

from .geodesic_estimator import GeodesicDurationEstimator
from .mock_estimator import MockDurationEstimator

__all__ = ["GeodesicDurationEstimator", "MockDurationEstimator"]
