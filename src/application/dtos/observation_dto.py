"""DTOs for point-located observations: road accidents, city works, air and water quality."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.application.dtos.geojson_dto import SelectableDTO
from src.application.dtos.ngsi_dto import ensure_utc
from src.domain.entities.air_quality import AirQuality
from src.domain.entities.citywork import Citywork
from src.domain.entities.road_accident import RoadAccident
from src.domain.entities.water_quality import WaterQualityObserved

ROAD_ACCIDENT_LIST_FIELDS = ("id", "location", "accidentDate")
CITYWORK_LIST_FIELDS = ("id", "location", "dateCreated")
AIR_QUALITY_FEATURE_FIELDS = ("type", "location", "dateObserved")
WATER_QUALITY_FEATURE_FIELDS = ("type", "location", "temperature", "dateObserved")


class RoadAccidentDTO(SelectableDTO):
    entity_type = "RoadAccident"

    description: str = ""
    location: Dict[str, Any]
    accident_date: Optional[datetime] = None
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    status: str = ""

    @classmethod
    def from_domain(cls, accident: RoadAccident) -> "RoadAccidentDTO":
        return cls(
            id=accident.id,
            description=accident.description,
            location=accident.location.to_geojson(),
            accident_date=accident.accident_date,
            date_created=accident.date_created,
            date_modified=accident.date_modified,
            status=accident.status,
        )


class CityworkDTO(SelectableDTO):
    entity_type = "CityWork"

    description: str = ""
    location: Dict[str, Any]
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @classmethod
    def from_domain(cls, citywork: Citywork) -> "CityworkDTO":
        return cls(
            id=citywork.id,
            description=citywork.description,
            location=citywork.location.to_geojson(),
            date_created=citywork.date_created,
            date_modified=citywork.date_modified,
            start_date=citywork.start_date,
            end_date=citywork.end_date,
        )


class AirQualityDTO(SelectableDTO):
    """Pollutant values are flattened next to the id and location."""

    entity_type = "AirQualityObserved"

    model_config = ConfigDict(extra="allow")

    location: Optional[Dict[str, Any]] = None
    date_observed: Optional[datetime] = None

    @classmethod
    def from_domain(cls, observation: AirQuality) -> "AirQualityDTO":
        return cls(
            id=observation.id,
            location=(
                observation.location.to_geojson() if observation.location else None
            ),
            date_observed=observation.date_observed,
            **observation.pollutants,
        )

    def pollutants(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class WaterTemperatureDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    value: float
    observed_at: datetime


class WaterQualityTemporalDTO(BaseModel):
    """Single water quality sensor with its temperature history, newest first."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    location: Optional[Dict[str, Any]] = None
    source: Optional[str] = None
    temperature: List[WaterTemperatureDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls,
        observed: WaterQualityObserved,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> "WaterQualityTemporalDTO":
        readings = observed.readings_between(ensure_utc(start), ensure_utc(end))
        readings.sort(key=lambda reading: reading.observed_at, reverse=True)
        return cls(
            id=observed.id,
            location=observed.location.to_geojson() if observed.location else None,
            source=observed.latest.source,
            temperature=[
                WaterTemperatureDTO(value=r.temperature, observed_at=r.observed_at)
                for r in readings
            ],
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
