"""Wiring of ports to adapters.

Each port type is bound to a zero-argument factory. Bindings are lazy:
nothing (in particular no geocoder client) is built until a service is
first resolved.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, NamedTuple, Optional

from .config import AppConfig, get_config


class _Binding(NamedTuple):
    factory: Callable[[], Any]
    shared: bool


@dataclass
class Container:
    """Registry of port bindings.

    Usage:
        container = Container.create_default()
        service = container.resolve(TripPlannerService)

        # Offline: swap the live estimator before the service is built
        container.register(TravelDurationPort, lambda: MockDurationEstimator(600))

    Attributes:
        config: Configuration the default bindings are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _instances: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``port_type`` to ``factory``, replacing any earlier binding.

        With ``singleton`` the first instance built is handed out on every
        later ``resolve``; otherwise each call builds a new one.
        """
        with self._lock:
            self._bindings[port_type] = _Binding(factory, singleton)
            self._instances.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build or fetch the instance bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the type.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"Type not registered: {port_type}")
            if not binding.shared:
                return binding.factory()
            if port_type not in self._instances:
                self._instances[port_type] = binding.factory()
            return self._instances[port_type]

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._bindings

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()
            self._instances.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind Nominatim geocoding, geodesic durations and the trip planner."""
        from .adapters.cache import InMemoryCache
        from .adapters.geocoding import NominatimGeocoderAdapter
        from .adapters.routing import GeodesicDurationEstimator, MockDurationEstimator
        from .ports.geocoding import GeocoderPort
        from .ports.routing import TravelDurationPort
        from .services import TripPlannerService

        config = config or get_config()
        container = cls(config=config)
        routing = config.routing

        container.register(
            GeocoderPort,
            lambda: NominatimGeocoderAdapter(
                config.geocoding,
                InMemoryCache(name="geocode", max_size=routing.cache_max_size),
            ),
        )
        container.register(
            TravelDurationPort,
            lambda: GeodesicDurationEstimator(
                geocoder=container.resolve(GeocoderPort),
                config=routing,
                cache=InMemoryCache(
                    name="durations",
                    default_ttl_seconds=routing.cache_ttl_seconds,
                    max_size=routing.cache_max_size,
                ),
            ),
        )
        container.register(
            TripPlannerService,
            lambda: TripPlannerService(
                duration_estimator=container.resolve(TravelDurationPort),
                fallback_estimator=MockDurationEstimator(routing.mock_duration_seconds),
                planner_config=config.planner,
            ),
        )
        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Process-wide container with the default bindings, built on first use."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Drop the process-wide container (tests, config reloads)."""
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
