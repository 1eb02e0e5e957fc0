"""Nominatim geocoder adapter.

Looks addresses up on OpenStreetMap's Nominatim service. Calls go
through geopy's RateLimiter (Nominatim's usage policy allows one request
per second); only successful lookups are cached, so a place that could
not be found is retried on the next query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from geopy.exc import GeocoderRateLimited, GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, get_config
from ...domain.errors import GeocodingError
from ...domain.models import GeoLocation
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


def _rate_limited_nominatim(config: GeocodingConfig) -> Callable[..., Any]:
    client = Nominatim(user_agent=config.user_agent, timeout=config.timeout_seconds)
    return RateLimiter(
        client.geocode,
        min_delay_seconds=config.rate_limit_delay,
        max_retries=config.max_retries,
        error_wait_seconds=config.error_wait_seconds,
        swallow_exceptions=False,
    )


@dataclass
class NominatimGeocoderAdapter:
    """GeocoderPort backed by Nominatim.

    Attributes:
        config: User agent, timeout and rate-limit settings
        cache: Successful lookups, keyed by normalized address
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    cache: CachePort[GeoLocation] = field(
        default_factory=lambda: InMemoryCache(name="geocode", max_size=500)
    )

    # Built on first lookup so that constructing the adapter stays offline.
    _geocode_fn: Optional[Callable[..., Any]] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _lookup(self, query: str) -> Any:
        if self._geocode_fn is None:
            self._logger.debug(
                "Initializing Nominatim client",
                extra={"user_agent": self.config.user_agent},
            )
            self._geocode_fn = _rate_limited_nominatim(self.config)
        return self._geocode_fn(query)

    def geocode(self, query: str) -> Optional[GeoLocation]:
        """Coordinates of the best match for ``query``.

        Returns:
            The location, or None for blank input or when Nominatim has
            no match.

        Raises:
            GeocodingError: If the service failed after retries.
        """
        if not query or not query.strip():
            return None

        key = query.strip().lower()
        hit = self.cache.get(key)
        if hit is not None:
            return hit

        try:
            place = self._lookup(query)
        except GeopyError as e:
            error = GeocodingError(
                "Geocoding service failed",
                cause=e,
                query=query,
                is_rate_limited=isinstance(e, GeocoderRateLimited),
            )
            self._logger.warning("Geocode failed", extra=error.log_fields())
            raise error from e

        if place is None:
            self._logger.debug("No geocode match", extra={"query": query})
            return None

        location = GeoLocation(float(place.latitude), float(place.longitude))
        self.cache.set(key, location)
        return location
