"""DTOs and CSV rendering for beaches and their water temperatures."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import Field

from src.application.dtos.geojson_dto import SelectableDTO
from src.domain.entities.beach import Beach
from src.domain.entities.water_quality import WaterQualityReading
from src.shared.consts import BEACH_CSV_HEADER


class WaterQualityReadingDTO(SelectableDTO):
    """Water temperature reading as attached to beaches and listed by sensor."""

    entity_type = "WaterQualityObserved"

    temperature: float = Field(description="Water temperature in Celsius")
    date_observed: datetime = Field(description="Observation timestamp")
    source: Optional[str] = Field(default=None, description="Data source")
    location: Optional[Dict[str, Any]] = Field(
        default=None, description="GeoJSON point of the sensor"
    )

    @classmethod
    def from_domain(
        cls, reading: WaterQualityReading, location: Optional[Dict[str, Any]] = None
    ) -> "WaterQualityReadingDTO":
        return cls(
            id=reading.entity_id or "",
            temperature=reading.temperature,
            date_observed=reading.observed_at,
            source=reading.source,
            location=location,
        )


class BeachDTO(SelectableDTO):
    """Beach list item: centroid location and the latest water reading."""

    entity_type = "Beach"

    name: str = Field(description="Beach name")
    location: Optional[Dict[str, Any]] = Field(
        default=None, description="Centroid of the beach area as a GeoJSON point"
    )
    water_quality: Optional[WaterQualityReadingDTO] = Field(
        default=None, alias="waterquality", description="Latest water reading"
    )

    @classmethod
    def from_domain(cls, beach: Beach) -> "BeachDTO":
        return cls(
            id=beach.id,
            name=beach.name,
            location=beach.centroid.to_geojson() if beach.centroid else None,
            water_quality=(
                WaterQualityReadingDTO.from_domain(beach.water_quality)
                if beach.water_quality
                else None
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "urn:ngsi-ld:Beach:se:sundsvall:anlaggning:283",
                "name": "Stömne",
                "location": {"type": "Point", "coordinates": [17.3055, 62.4331]},
                "waterquality": {
                    "id": "urn:ngsi-ld:WaterQualityObserved:temp:1",
                    "temperature": 18.2,
                    "dateObserved": "2024-07-01T09:00:00Z",
                    "source": "https://example.org/sensors",
                },
            }
        }
    }


class BeachDetailsDTO(SelectableDTO):
    entity_type = "Beach"

    name: str
    description: Optional[str] = None
    location: Dict[str, Any] = Field(description="Beach area as GeoJSON MultiPolygon")
    water_quality: Optional[List[WaterQualityReadingDTO]] = Field(
        default=None, alias="waterquality"
    )
    see_also: Optional[List[str]] = None
    source: Optional[str] = None

    @classmethod
    def from_domain(cls, beach: Beach) -> "BeachDetailsDTO":
        return cls(
            id=beach.id,
            name=beach.name,
            description=beach.description,
            location=beach.location.to_geojson(),
            water_quality=(
                [WaterQualityReadingDTO.from_domain(beach.water_quality)]
                if beach.water_quality
                else None
            ),
            see_also=beach.see_also or None,
            source=beach.source,
        )


def _csv_row(beach: Beach, broker_url: str) -> str:
    centroid = beach.centroid
    latitude = centroid.latitude if centroid else 0.0
    longitude = centroid.longitude if centroid else 0.0
    updated = beach.date_modified.strftime("%Y-%m-%d") if beach.date_modified else ""
    temp_url = (
        f'"{broker_url}/ngsi-ld/v1/entities?type=WaterQualityObserved'
        f"&georel=near%3BmaxDistance==500&geometry=Point"
        f'&coordinates=[{longitude:f},{latitude:f}]"'
    )
    description = (beach.description or "").replace('"', '""')
    return ";".join(
        [
            beach.id,
            beach.name,
            f"{latitude:f}",
            f"{longitude:f}",
            beach.nuts_code,
            beach.wikidata_id,
            updated,
            temp_url,
            f'"{description}"',
        ]
    )


def render_beaches_csv(beaches: Sequence[Beach], broker_url: str) -> str:
    """Semicolon separated export, one CRLF separated row per beach."""
    rows = [BEACH_CSV_HEADER]
    rows.extend(_csv_row(beach, broker_url) for beach in beaches)
    return "\r\n".join(rows)
