"""
Domain Errors

Error taxonomy shared by the caches, the dataset services and the
on-demand query use cases.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UpstreamError(DomainError):
    """Transient failure talking to the context broker.

    Covers network errors, non-success status codes and payloads that
    cannot be decoded. Background refreshes record it and retry.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class ConfigurationError(DomainError):
    """Caller supplied an invalid or incomplete request. Never retried."""


class AggregationConfigError(ConfigurationError):
    """Unsupported aggregation window duration or function name."""


class EntityNotFoundError(DomainError):
    """Raised when an id is absent from the current snapshot.

    ``cache_ready`` is False while no refresh has ever succeeded, which lets
    callers tell "not loaded yet" apart from "loaded, but no such entity".
    """

    entity_kind = "entity"

    def __init__(
        self,
        entity_id: str,
        cache_ready: bool = True,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.entity_id = entity_id
        self.cache_ready = cache_ready
        super().__init__(f"no such {self.entity_kind}: {entity_id}", details)


class NoSuchBeachError(EntityNotFoundError):
    entity_kind = "beach"


class NoSuchExerciseTrailError(EntityNotFoundError):
    entity_kind = "exercise trail"


class NoSuchSportsFieldError(EntityNotFoundError):
    entity_kind = "sports field"


class NoSuchSportsVenueError(EntityNotFoundError):
    entity_kind = "sports venue"


class NoSuchRoadAccidentError(EntityNotFoundError):
    entity_kind = "road accident"


class NoSuchCityworkError(EntityNotFoundError):
    entity_kind = "cityworks"


class NoSuchAirQualityError(EntityNotFoundError):
    entity_kind = "air quality"


class NoSuchWaterQualityError(EntityNotFoundError):
    entity_kind = "water quality"


class NoSuchWeatherError(EntityNotFoundError):
    entity_kind = "weather observation"
