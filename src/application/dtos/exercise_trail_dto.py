"""DTOs for exercise trails."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from src.application.dtos.geojson_dto import SelectableDTO
from src.domain.entities.exercise_trail import ExerciseTrail

TRAIL_LIST_FIELDS = ("id", "name", "categories", "length")
TRAIL_FEATURE_FIELDS = ("type", "name", "categories", "length")


class ExerciseTrailDTO(SelectableDTO):
    entity_type = "ExerciseTrail"

    name: str = Field(description="Trail name")
    description: str = Field(default="", description="Free text description")
    location: Dict[str, Any] = Field(description="Trail as a GeoJSON LineString")
    categories: List[str] = Field(default_factory=list, description="Trail categories")
    length: float = Field(default=0.0, description="Length in kilometres")
    difficulty: float = Field(default=0.0, description="Difficulty between 0 and 1")
    payment_required: bool = False
    status: str = ""
    date_last_preparation: Optional[datetime] = None
    source: str = ""
    area_served: str = ""
    see_also: Optional[List[str]] = None

    @classmethod
    def from_domain(cls, trail: ExerciseTrail) -> "ExerciseTrailDTO":
        return cls(
            id=trail.id,
            name=trail.name,
            description=trail.description,
            location=trail.location.to_geojson(),
            categories=trail.categories,
            length=trail.length,
            difficulty=trail.difficulty,
            payment_required=trail.payment_required,
            status=trail.status,
            date_last_preparation=trail.date_last_preparation,
            source=trail.source,
            area_served=trail.area_served,
            see_also=trail.see_also or None,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "urn:ngsi-ld:ExerciseTrail:se:sundsvall:facilities:650",
                "name": "Motionsspår Södra stadsberget",
                "location": {
                    "type": "LineString",
                    "coordinates": [[17.3, 62.38], [17.31, 62.39]],
                },
                "categories": ["floodlit", "ski-classic"],
                "length": 2.5,
                "difficulty": 0.25,
                "paymentRequired": False,
                "status": "open",
            }
        }
    }
