"""
NGSI-LD Record DTOs - Application Layer

Pydantic models for the keyValues records returned by the context broker.
They absorb the quirks of the upstream data (typed DateTime wrappers,
fields that are either a string or a list of strings) and convert each
record into its domain entity.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

from src.domain.entities.air_quality import AIR_QUALITY_PROPERTIES, AirQuality
from src.domain.entities.beach import Beach
from src.domain.entities.citywork import Citywork
from src.domain.entities.exercise_trail import ExerciseTrail
from src.domain.entities.geo import LineString, MultiPolygon, Point
from src.domain.entities.road_accident import RoadAccident
from src.domain.entities.sports import SportsField, SportsVenue
from src.domain.entities.traffic_flow import LANE_COUNT, TrafficFlowObserved
from src.domain.entities.time_series import TimeSeriesSample
from src.domain.entities.water_quality import WaterQualityObserved, WaterQualityReading
from src.domain.entities.weather import WeatherObserved


def as_string_list(value: Any) -> List[str]:
    """Normalise a string-or-array field into a list of strings.

    Absent values become ``[]``. Anything that is neither a string nor a
    list of strings becomes a single-element list holding its text form,
    so a malformed field never drops the record it belongs to.
    """

    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [item if isinstance(item, str) else str(item) for item in value]
    return [str(value)]


def unwrap_datetime(value: Any) -> Any:
    """Accept both ``{"@type": "DateTime", "@value": ...}`` and plain strings."""

    if isinstance(value, dict):
        value = value.get("@value")
    if value == "":
        return None
    return value


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


StringList = Annotated[List[str], BeforeValidator(as_string_list)]
NgsiInstant = Annotated[
    datetime, BeforeValidator(unwrap_datetime), AfterValidator(ensure_utc)
]
NgsiDateTime = Annotated[
    Optional[datetime], BeforeValidator(unwrap_datetime), AfterValidator(ensure_utc)
]


def _rounded(value: Optional[float], digits: int) -> float:
    if value is None:
        return 0.0
    return round(value, digits)


class _RecordDTO(BaseModel):
    """Base for broker records; unknown attributes are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(description="NGSI-LD entity id")


class PointDTO(BaseModel):
    type: str = "Point"
    coordinates: List[float] = Field(min_length=2)

    def to_domain(self) -> Point:
        return Point.from_coordinates(self.coordinates)


class LineStringDTO(BaseModel):
    type: str = "LineString"
    coordinates: List[List[float]] = Field(default_factory=list)

    def to_domain(self) -> LineString:
        return LineString(coordinates=self.coordinates)


class MultiPolygonDTO(BaseModel):
    type: str = "MultiPolygon"
    coordinates: List[List[List[List[float]]]] = Field(default_factory=list)

    def to_domain(self) -> MultiPolygon:
        return MultiPolygon(coordinates=self.coordinates)


class BeachRecordDTO(_RecordDTO):
    name: str = ""
    description: Optional[str] = None
    location: MultiPolygonDTO
    see_also: StringList = Field(default_factory=list, alias="seeAlso")
    source: Optional[str] = None
    date_modified: NgsiDateTime = Field(default=None, alias="dateModified")

    def to_domain(self) -> Beach:
        polygon = self.location.to_domain()
        return Beach(
            id=self.id,
            name=self.name,
            location=polygon,
            centroid=polygon.centroid(),
            description=self.description,
            see_also=self.see_also,
            source=self.source,
            date_modified=self.date_modified,
        )


class ExerciseTrailRecordDTO(_RecordDTO):
    name: str = ""
    description: str = ""
    category: StringList = Field(default_factory=list)
    see_also: StringList = Field(default_factory=list, alias="seeAlso")
    location: LineStringDTO
    length: Optional[float] = None
    difficulty: Optional[float] = None
    payment_required: Optional[str] = Field(default=None, alias="paymentRequired")
    status: str = ""
    source: str = ""
    area_served: str = Field(default="", alias="areaServed")
    date_modified: NgsiDateTime = Field(default=None, alias="dateModified")
    date_last_preparation: NgsiDateTime = Field(
        default=None, alias="dateLastPreparation"
    )

    def to_domain(self) -> ExerciseTrail:
        return ExerciseTrail(
            id=self.id,
            name=self.name,
            location=self.location.to_domain(),
            description=self.description,
            categories=self.category,
            see_also=self.see_also,
            length=_rounded(self.length, 1),
            difficulty=_rounded(self.difficulty, 2),
            payment_required=self.payment_required == "yes",
            status=self.status,
            source=self.source,
            area_served=self.area_served,
            date_last_preparation=self.date_last_preparation,
            date_modified=self.date_modified,
        )


class _SportsRecordDTO(_RecordDTO):
    name: str = ""
    description: str = ""
    category: StringList = Field(default_factory=list)
    see_also: StringList = Field(default_factory=list, alias="seeAlso")
    location: MultiPolygonDTO
    public_access: str = Field(default="", alias="publicAccess")
    source: str = ""
    managed_by: str = Field(default="", alias="managedBy")
    owner: str = ""
    date_created: NgsiDateTime = Field(default=None, alias="dateCreated")
    date_modified: NgsiDateTime = Field(default=None, alias="dateModified")


class SportsFieldRecordDTO(_SportsRecordDTO):
    date_last_prepared: NgsiDateTime = Field(
        default=None, alias="dateLastPrepared"
    )

    def to_domain(self) -> SportsField:
        return SportsField(
            id=self.id,
            name=self.name,
            location=self.location.to_domain(),
            description=self.description,
            categories=self.category,
            see_also=self.see_also,
            public_access=self.public_access,
            source=self.source,
            managed_by=self.managed_by,
            owner=self.owner,
            date_created=self.date_created,
            date_modified=self.date_modified,
            date_last_prepared=self.date_last_prepared,
        )


class SportsVenueRecordDTO(_SportsRecordDTO):
    def to_domain(self) -> SportsVenue:
        return SportsVenue(
            id=self.id,
            name=self.name,
            location=self.location.to_domain(),
            description=self.description,
            categories=self.category,
            see_also=self.see_also,
            public_access=self.public_access,
            source=self.source,
            managed_by=self.managed_by,
            owner=self.owner,
            date_created=self.date_created,
            date_modified=self.date_modified,
        )


class RoadAccidentRecordDTO(_RecordDTO):
    description: str = ""
    status: str = ""
    location: PointDTO
    accident_date: NgsiDateTime = Field(default=None, alias="accidentDate")
    date_created: NgsiDateTime = Field(default=None, alias="dateCreated")
    date_modified: NgsiDateTime = Field(default=None, alias="dateModified")

    def to_domain(self) -> RoadAccident:
        return RoadAccident(
            id=self.id,
            location=self.location.to_domain(),
            description=self.description,
            status=self.status,
            accident_date=self.accident_date,
            date_created=self.date_created,
            date_modified=self.date_modified,
        )


class CityworkRecordDTO(_RecordDTO):
    description: str = ""
    location: PointDTO
    date_created: NgsiDateTime = Field(default=None, alias="dateCreated")
    date_modified: NgsiDateTime = Field(default=None, alias="dateModified")
    start_date: NgsiDateTime = Field(default=None, alias="startDate")
    end_date: NgsiDateTime = Field(default=None, alias="endDate")

    def to_domain(self) -> Citywork:
        return Citywork(
            id=self.id,
            location=self.location.to_domain(),
            description=self.description,
            date_created=self.date_created,
            date_modified=self.date_modified,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class AirQualityRecordDTO(_RecordDTO):
    """Pollutant attributes are kept as extras and filtered on conversion."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    location: Optional[PointDTO] = None
    date_observed: NgsiDateTime = Field(default=None, alias="dateObserved")

    def to_domain(self) -> AirQuality:
        extras = self.model_extra or {}
        pollutants: Dict[str, float] = {}
        for name in AIR_QUALITY_PROPERTIES:
            value = extras.get(name)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                if math.isfinite(value):
                    pollutants[name] = float(value)
        return AirQuality(
            id=self.id,
            location=self.location.to_domain() if self.location else None,
            date_observed=self.date_observed,
            pollutants=pollutants,
        )


class WaterQualityRecordDTO(_RecordDTO):
    location: Optional[PointDTO] = None
    temperature: float
    source: Optional[str] = None
    date_observed: NgsiInstant = Field(alias="dateObserved")

    def to_reading(self) -> WaterQualityReading:
        return WaterQualityReading(
            temperature=round(self.temperature, 1),
            observed_at=self.date_observed,
            source=self.source,
            entity_id=self.id,
        )

    def to_domain(self, history: List[TimeSeriesSample]) -> WaterQualityObserved:
        return WaterQualityObserved(
            id=self.id,
            latest=self.to_reading(),
            location=self.location.to_domain() if self.location else None,
            history=history,
        )


class WeatherRecordDTO(_RecordDTO):
    location: Optional[PointDTO] = None
    temperature: Optional[float] = None
    date_observed: NgsiDateTime = Field(default=None, alias="dateObserved")

    def to_domain(self) -> WeatherObserved:
        return WeatherObserved(
            id=self.id,
            location=self.location.to_domain() if self.location else None,
            date_observed=self.date_observed,
            temperature=self.temperature,
        )


class TrafficFlowRecordDTO(_RecordDTO):
    date_observed: NgsiInstant = Field(alias="dateObserved")
    lane_id: int = Field(
        validation_alias=AliasChoices("laneID", "laneId", "lane_id"),
        ge=0,
        lt=LANE_COUNT,
    )
    intensity: float = 0.0
    average_vehicle_speed: float = Field(default=0.0, alias="averageVehicleSpeed")
    ref_road_segment: Optional[str] = Field(default=None, alias="refRoadSegment")

    def to_domain(self) -> TrafficFlowObserved:
        return TrafficFlowObserved(
            id=self.id,
            date_observed=self.date_observed,
            lane_id=self.lane_id,
            intensity=int(self.intensity),
            average_vehicle_speed=self.average_vehicle_speed,
            road_segment=self.ref_road_segment or "",
        )


class TemporalValueDTO(BaseModel):
    """One instance of a temporal property (normalized representation)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: float
    observed_at: NgsiInstant = Field(alias="observedAt")


class TemporalEntityDTO(BaseModel):
    """Temporal evolution of an entity as returned by the temporal API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    temperature: List[TemporalValueDTO] = Field(default_factory=list)

    @field_validator("temperature", mode="before")
    @classmethod
    def wrap_single_instance(cls, value: Any) -> Any:
        """A property with one instance may come back as an object."""
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value

    def samples(self, digits: Optional[int] = None) -> List[TimeSeriesSample]:
        """Temperature instances as ascending samples."""
        samples = [
            TimeSeriesSample(
                timestamp=item.observed_at,
                value=round(item.value, digits) if digits is not None else item.value,
            )
            for item in self.temperature
        ]
        samples.sort(key=lambda sample: sample.timestamp)
        return samples
