"""Exceptions raised by the I/O-bound collaborators.

Time-phrase resolution, destination sanitizing, intent classification
and departure planning report failure as values (None, an invalid plan)
and never raise. Geocoding, travel-duration estimation and configuration
lookups raise the errors below so the service can pick a fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class DepartureResolverError(Exception):
    """Root of the package's exceptions.

    Attributes:
        message: What went wrong, for humans
        cause: The lower-level exception, also chained as ``__cause__``
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        super().__init__(self.message)
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self) -> str:
        return f"{self.message}: {self.cause}" if self.cause else self.message

    def log_fields(self) -> Dict[str, Any]:
        """Subclass attributes, ready to pass as logging ``extra``."""
        skip = {"message", "cause"}
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in skip}


@dataclass
class GeocodingError(DepartureResolverError):
    """The geocoding service failed (as opposed to finding nothing).

    Attributes:
        query: Address text that was looked up
        is_rate_limited: The service refused because of rate limits
    """

    query: str = ""
    is_rate_limited: bool = False


@dataclass
class RoutingError(DepartureResolverError):
    """No travel duration could be estimated for a trip.

    Attributes:
        origin: Origin text passed to the estimator
        destination: Destination text passed to the estimator
        mode: Travel mode requested
    """

    origin: str = ""
    destination: str = ""
    mode: str = ""


@dataclass
class ConfigurationError(DepartureResolverError):
    """A setting is missing or unusable.

    Attributes:
        setting_name: Name of the setting
        expected_type: What a usable value looks like
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
