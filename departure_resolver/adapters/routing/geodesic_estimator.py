"""Geodesic travel-duration estimator.

Geocodes both endpoints, measures the great-circle distance between
them with geopy, stretches it by a route factor to approximate the road
network and divides by the average speed of the travel mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from geopy.distance import geodesic

from ...config import RoutingConfig, get_config
from ...domain.errors import ConfigurationError, GeocodingError, RoutingError
from ...domain.models import TravelMode
from ...ports.cache import CachePort
from ...ports.geocoding import GeocoderPort
from ..cache.memory_cache import InMemoryCache


def _default_cache() -> InMemoryCache[int]:
    routing = get_config().routing
    return InMemoryCache(
        name="durations",
        default_ttl_seconds=routing.cache_ttl_seconds,
        max_size=routing.cache_max_size,
    )


@dataclass
class GeodesicDurationEstimator:
    """Distance-over-speed duration estimator.

    Implements TravelDurationPort.

    Attributes:
        geocoder: Resolves addresses to coordinates
        config: Speeds, route factor and cache limits
        cache: Estimates keyed by origin, destination and mode
    """

    geocoder: GeocoderPort
    config: RoutingConfig = field(default_factory=lambda: get_config().routing)
    cache: CachePort[int] = field(default_factory=_default_cache)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _speed_kmh(self, mode: TravelMode) -> float:
        speed = self.config.speeds_kmh.get(mode.value)
        if not speed or speed <= 0:
            raise ConfigurationError(
                f"No average speed configured for mode {mode.value!r}",
                setting_name="speeds_kmh",
                expected_type="positive float",
            )
        return speed

    def estimate(self, origin: str, destination: str, mode: TravelMode) -> int:
        """Estimate the travel time between two addresses.

        Raises:
            RoutingError: If either endpoint cannot be located.
            ConfigurationError: If the mode has no usable average speed.
        """
        cache_key = "|".join((origin, destination, mode.value)).lower()
        cached = self.cache.get(cache_key)
        if cached is not None:
            self._logger.debug("Duration cache hit", extra={"key": cache_key})
            return cached

        speed = self._speed_kmh(mode)
        try:
            start = self.geocoder.geocode(origin)
            end = self.geocoder.geocode(destination)
        except GeocodingError as e:
            raise RoutingError(
                "Could not geocode trip endpoints",
                cause=e,
                origin=origin,
                destination=destination,
                mode=mode.value,
            ) from e

        if start is None or end is None:
            raise RoutingError(
                "Origin or destination not found",
                origin=origin,
                destination=destination,
                mode=mode.value,
            )

        distance_km = geodesic(
            (start.latitude, start.longitude), (end.latitude, end.longitude)
        ).km
        seconds = int(round(distance_km * self.config.route_factor / speed * 3600))

        self._logger.debug(
            "Duration estimated",
            extra={"distance_km": round(distance_km, 2), "seconds": seconds, "mode": mode.value},
        )
        self.cache.set(cache_key, seconds)
        return seconds
