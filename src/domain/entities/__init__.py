"""
Domain Entities Package

Value objects for the open datasets re-served by the gateway, plus the
error taxonomy and health entities.
"""

from .air_quality import AirQuality
from .beach import Beach
from .citywork import Citywork
from .errors import (
    AggregationConfigError,
    ConfigurationError,
    DomainError,
    EntityNotFoundError,
    UpstreamError,
)
from .exercise_trail import ExerciseTrail
from .geo import LineString, MultiPolygon, Point, distance_m
from .health import (
    ApplicationInfo,
    DatasetStatus,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from .road_accident import RoadAccident
from .sports import SportsField, SportsVenue
from .time_series import (
    AggregateFunction,
    AggregateWindow,
    TimeSeriesSample,
    WindowDuration,
)
from .traffic_flow import TrafficFlowObserved, TrafficFlowSummary
from .water_quality import WaterQualityObserved, WaterQualityReading
from .weather import CalendarResolution, TemperatureSummary, WeatherObserved

__all__ = [
    "AirQuality",
    "Beach",
    "Citywork",
    "ExerciseTrail",
    "RoadAccident",
    "SportsField",
    "SportsVenue",
    "TrafficFlowObserved",
    "TrafficFlowSummary",
    "WaterQualityObserved",
    "WaterQualityReading",
    "WeatherObserved",
    "TemperatureSummary",
    "CalendarResolution",
    "Point",
    "LineString",
    "MultiPolygon",
    "distance_m",
    "TimeSeriesSample",
    "AggregateWindow",
    "AggregateFunction",
    "WindowDuration",
    "SystemHealth",
    "DependencyStatus",
    "DatasetStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "UpstreamError",
    "ConfigurationError",
    "AggregationConfigError",
    "EntityNotFoundError",
]
