"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and the
external collaborators (geocoding, routing, caching). They enable
dependency injection and make the system testable.
"""

from .cache import CachePort
from .geocoding import GeocoderPort
from .routing import TravelDurationPort

__all__ = [
    "CachePort",
    "GeocoderPort",
    "TravelDurationPort",
]
