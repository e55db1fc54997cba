"""Air quality observation domain entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from src.domain.entities.geo import Point

# Measured properties carried over from AirQualityObserved entities.
AIR_QUALITY_PROPERTIES = (
    "atmosphericPressure",
    "temperature",
    "relativeHumidity",
    "particleCount",
    "PM1",
    "PM4",
    "PM10",
    "PM25",
    "totalSuspendedParticulate",
    "CO2",
    "NO",
    "NO2",
    "NOx",
    "voltage",
    "windDirection",
    "windSpeed",
)


@dataclass(frozen=True, slots=True)
class AirQuality:
    id: str
    location: Optional[Point] = None
    date_observed: Optional[datetime] = None
    pollutants: Dict[str, float] = field(default_factory=dict)
