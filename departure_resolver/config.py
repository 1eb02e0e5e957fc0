"""Settings for the resolver, planner, routing and logging.

Every value can be set from the environment, e.g.:
- DR_RESOLVER_ROLLOVER_GRACE_MINUTES=10
- DR_PLANNER_DEFAULT_BUFFER_MINUTES=15
- DR_ROUTING_MOCK_DURATION_SECONDS=1800
- DR_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResolverConfig(BaseSettings):
    """Time-phrase resolver configuration.

    Environment variables prefixed with DR_RESOLVER_.
    """

    model_config = SettingsConfigDict(env_prefix="DR_RESOLVER_")

    # A clock time this many minutes in the past still means "today".
    rollover_grace_minutes: int = 5
    # Hours 1..evening_hour_max without am/pm may be read as PM.
    evening_hour_max: int = 7


class PlannerConfig(BaseSettings):
    """Departure planner configuration.

    Environment variables prefixed with DR_PLANNER_.
    """

    model_config = SettingsConfigDict(env_prefix="DR_PLANNER_")

    default_buffer_minutes: int = 10
    max_buffer_minutes: int = 180
    min_refresh_seconds: int = 15
    refresh_interval_seconds: int = 30


class RoutingConfig(BaseSettings):
    """Travel-duration estimation configuration.

    Environment variables prefixed with DR_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="DR_ROUTING_")

    mock_duration_seconds: int = 5100
    route_factor: float = 1.3
    speeds_kmh: Dict[str, float] = Field(
        default_factory=lambda: {
            "driving": 50.0,
            "walking": 5.0,
            "bicycling": 15.0,
            "transit": 30.0,
        }
    )
    cache_ttl_seconds: float = 300.0
    cache_max_size: int = 200


class GeocodingConfig(BaseSettings):
    """Nominatim client configuration.

    Environment variables prefixed with DR_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="DR_GEO_")

    user_agent: str = "departure-resolver"
    timeout_seconds: int = 10
    rate_limit_delay: float = 1.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with DR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="DR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    # One JSON object per log line instead of the text format.
    structured: bool = False


class AppConfig(BaseSettings):
    """All settings, one attribute per concern.

        get_config().planner.default_buffer_minutes
        get_config().routing.speeds_kmh["walking"]
    """

    model_config = SettingsConfigDict(env_prefix="DR_")

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Process-wide settings, read from the environment on first call."""
    return AppConfig()


def reset_config() -> None:
    """Forget the cached settings so the next get_config() re-reads the environment."""
    get_config.cache_clear()
