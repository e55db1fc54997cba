"""DTOs for sports fields and sports venues."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from src.application.dtos.geojson_dto import SelectableDTO
from src.domain.entities.sports import SportsField, SportsVenue

SPORTS_LIST_FIELDS = ("id", "name", "categories", "location")
SPORTS_FEATURE_FIELDS = ("type", "name", "categories")


class _SportsDTO(SelectableDTO):
    name: str
    description: str = ""
    location: Dict[str, Any] = Field(description="Area as a GeoJSON MultiPolygon")
    categories: List[str] = Field(default_factory=list)
    public_access: Optional[str] = None
    source: Optional[str] = None
    managed_by: Optional[str] = None
    owner: Optional[str] = None
    see_also: Optional[List[str]] = None
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    @staticmethod
    def _common(item: Union[SportsField, SportsVenue]) -> Dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "location": item.location.to_geojson(),
            "categories": item.categories,
            "public_access": item.public_access or None,
            "source": item.source or None,
            "managed_by": item.managed_by or None,
            "owner": item.owner or None,
            "see_also": item.see_also or None,
            "date_created": item.date_created,
            "date_modified": item.date_modified,
        }


class SportsFieldDTO(_SportsDTO):
    entity_type = "SportsField"

    date_last_prepared: Optional[datetime] = None

    @classmethod
    def from_domain(cls, field: SportsField) -> "SportsFieldDTO":
        return cls(**cls._common(field), date_last_prepared=field.date_last_prepared)


class SportsVenueDTO(_SportsDTO):
    entity_type = "SportsVenue"

    @classmethod
    def from_domain(cls, venue: SportsVenue) -> "SportsVenueDTO":
        return cls(**cls._common(venue))
