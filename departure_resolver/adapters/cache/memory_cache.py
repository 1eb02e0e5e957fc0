"""Bounded, thread-safe in-memory cache.

Entries live for ``default_ttl_seconds`` and the store holds at most
``max_size`` of them; when it is full, expired entries are purged first
and then the oldest insertion is evicted (FIFO).
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class _Entry(NamedTuple):
    value: Any
    expires_at: float


@dataclass
class InMemoryCache(Generic[T]):
    """Fixed-capacity key-value store with TTL and FIFO eviction.

    Implements the CachePort protocol.

    Attributes:
        default_ttl_seconds: Lifetime of an entry; None keeps it until evicted
        max_size: Entry cap; None means unbounded
        name: Suffix of the logger name
        clock: Monotonic time source, injectable for tests

    Example:
        cache = InMemoryCache[int](name="durations", default_ttl_seconds=300, max_size=200)
        cache.set("home|clinic|driving", 1800)
        cache.get("home|clinic|driving")
    """

    default_ttl_seconds: Optional[float] = None
    max_size: Optional[int] = None
    name: str = "cache"
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    _store: Dict[str, _Entry] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _expired(self, entry: _Entry) -> bool:
        return self.clock() > entry.expires_at

    def _purge_expired(self) -> None:
        for key in [k for k, entry in self._store.items() if self._expired(entry)]:
            del self._store[key]

    def _make_room(self, incoming_key: str) -> None:
        if self.max_size is None or incoming_key in self._store:
            return
        if len(self._store) >= self.max_size:
            self._purge_expired()
        while self._store and len(self._store) >= self.max_size:
            oldest_key = next(iter(self._store))
            del self._store[oldest_key]
            self._logger.debug(
                "Cache evicted entry",
                extra={"key": oldest_key, "reason": "max_size"},
            )

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None or self._expired(entry):
                if entry is not None:
                    del self._store[key]
                    self._logger.debug("Cache entry expired", extra={"key": key})
                return None
            return entry.value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store ``value``; ``ttl`` overrides the default time-to-live."""
        with self._lock:
            self._make_room(key)
            effective_ttl = ttl if ttl is not None else self.default_ttl_seconds
            expires_at = (
                self.clock() + effective_ttl if effective_ttl is not None else float("inf")
            )
            # Re-inserting moves the key to the back of the eviction order.
            self._store.pop(key, None)
            self._store[key] = _Entry(value, expires_at)
