"""Cache port - bounded key-value store for upstream lookups.

Geocoded addresses and travel-duration estimates are slow to fetch and
rarely change within a session, so adapters keep them in a store that
the serving layer owns and sizes.
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """What the geocoding and routing adapters need from a cache.

    Implementation: adapters/cache/memory_cache.py (InMemoryCache)
    """

    def get(self, key: str) -> Optional[T]:
        """Return the live value for ``key``, or None if absent or expired."""
        ...

    def set(self, key: str, value: T) -> None:
        """Store ``value`` under ``key``, evicting the oldest entry if full."""
        ...
