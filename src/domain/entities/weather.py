"""Weather observations and temperature series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from src.domain.entities.geo import Point
from src.domain.entities.time_series import TimeSeriesSample


class CalendarResolution(str, Enum):
    """Calendar grouping for weather temperature series."""

    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True, slots=True)
class TemperatureSummary:
    """Aggregate over a run of temperatures, bounded by first/last instants."""

    average: float
    min: float
    max: float
    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class WeatherObserved:
    id: str
    location: Optional[Point] = None
    date_observed: Optional[datetime] = None
    temperature: Optional[float] = None
    series: List[TimeSeriesSample] = field(default_factory=list)
    groups: List[TemperatureSummary] = field(default_factory=list)
    summary: Optional[TemperatureSummary] = None
