"""
Weather and Temperature DTOs - Application Layer

Responses for the on-demand air temperature and weather queries. Keys
follow the public API (``avg``, ``when``, ``from``, ``to``), so several
fields carry explicit aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.time_series import AggregateWindow, TimeSeriesSample
from src.domain.entities.weather import TemperatureSummary, WeatherObserved


class TemperatureValueDTO(BaseModel):
    """A raw temperature or an aggregate over ``[from, to)``."""

    model_config = ConfigDict(populate_by_name=True)

    average: Optional[float] = Field(default=None, alias="avg")
    max: Optional[float] = None
    min: Optional[float] = None
    value: Optional[float] = None
    when: Optional[datetime] = None
    start: Optional[datetime] = Field(default=None, alias="from")
    end: Optional[datetime] = Field(default=None, alias="to")

    @classmethod
    def from_domain(
        cls, item: Union[TimeSeriesSample, AggregateWindow, TemperatureSummary]
    ) -> "TemperatureValueDTO":
        if isinstance(item, TimeSeriesSample):
            return cls(value=item.value, when=item.timestamp)
        if isinstance(item, AggregateWindow):
            return cls(
                average=item.average,
                max=item.max,
                min=item.min,
                start=item.start,
                end=item.end,
            )
        return cls(
            average=item.average,
            max=item.max,
            min=item.min,
            when=item.start,
            start=item.start,
            end=item.end,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TemperatureSensorDTO(BaseModel):
    """A device that reports air temperature through WeatherObserved."""

    id: str = Field(description="Device identifier, usable as the sensor parameter")


class SensorTemperaturesDTO(BaseModel):
    id: str = Field(description="Sensor (device) identifier")
    values: List[TemperatureValueDTO] = Field(default_factory=list)


class TemperatureResponseDTO(BaseModel):
    """Payload of ``/api/temperature/air``."""

    sensors: List[SensorTemperaturesDTO] = Field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    model_config = {
        "json_schema_extra": {
            "example": {
                "sensors": [
                    {
                        "id": "se:trafikverket:temp:2207",
                        "values": [
                            {
                                "avg": 4.6,
                                "max": 5.2,
                                "min": 4.0,
                                "from": "2024-01-01T11:00:00Z",
                                "to": "2024-01-01T12:00:00Z",
                            }
                        ],
                    }
                ]
            }
        }
    }


class WeatherTemperatureDTO(TemperatureValueDTO):
    values: Optional[List[TemperatureValueDTO]] = None


class WeatherDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    location: Optional[Dict[str, Any]] = None
    date_observed: Optional[datetime] = Field(default=None, alias="dateObserved")
    temperature: WeatherTemperatureDTO

    @classmethod
    def from_domain(cls, weather: WeatherObserved) -> "WeatherDTO":
        values: Optional[Sequence[Union[TimeSeriesSample, TemperatureSummary]]]
        values = weather.groups or weather.series or None
        summary = weather.summary
        temperature = WeatherTemperatureDTO(
            value=None if values else weather.temperature,
            when=None if values else weather.date_observed,
            average=summary.average if summary else None,
            max=summary.max if summary else None,
            min=summary.min if summary else None,
            start=summary.start if summary else None,
            end=summary.end if summary else None,
            values=(
                [TemperatureValueDTO.from_domain(item) for item in values]
                if values
                else None
            ),
        )
        return cls(
            id=weather.id,
            location=weather.location.to_geojson() if weather.location else None,
            date_observed=weather.date_observed,
            temperature=temperature,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
