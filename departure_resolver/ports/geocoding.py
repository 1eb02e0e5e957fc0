"""Geocoding port - Abstraction for turning addresses into coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoLocation


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: adapters/geocoding/nominatim_adapter.py
    """

    def geocode(self, query: str) -> Optional[GeoLocation]:
        """Geocode a free-text address.

        Args:
            query: Address or place name, e.g. "1805 Deer Drive PA".

        Returns:
            Coordinates of the best match, or None if not found.
        """
        ...
