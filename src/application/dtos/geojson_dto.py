"""
Response DTO base and GeoJSON wrappers - Application Layer

Dataset responses are pydantic models serialised with camelCase keys.
List endpoints return a projection of each model (a default field set
plus any extra ``fields`` the caller asks for), either as plain JSON
objects or as GeoJSON features.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.entities.errors import ConfigurationError


def parse_field_list(raw: Optional[str]) -> List[str]:
    """Split a ``fields``/``categories`` query value on commas."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


class SelectableDTO(BaseModel):
    """Dataset DTO that can be projected onto a subset of its fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    entity_type: ClassVar[str] = ""

    id: str = Field(description="NGSI-LD entity id")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def project(
        self, fields: Iterable[str], location: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build a dict with the requested fields, in request order.

        Field names are matched case-insensitively against the serialised
        keys. ``type`` yields the entity type and ``location`` can be
        replaced by a caller-supplied geometry. Unknown names raise
        ``ConfigurationError``.
        """

        payload = self.to_json()
        if location is not None:
            payload["location"] = location
        keys = {key.lower(): key for key in payload}
        keys.update({name.lower(): name for name in self._all_keys()})

        result: Dict[str, Any] = {}
        for name in fields:
            if name.lower() == "type":
                result["type"] = self.entity_type
                continue
            key = keys.get(name.lower())
            if key is None:
                raise ConfigurationError(
                    f"unknown field: {name}", details={"field": name}
                )
            if payload.get(key) is not None:
                result[key] = payload[key]
        return result

    def to_feature(
        self, fields: Iterable[str], geometry: Optional[Dict[str, Any]]
    ) -> "FeatureDTO":
        return FeatureDTO(id=self.id, geometry=geometry, properties=self.project(fields))

    @classmethod
    def _all_keys(cls) -> List[str]:
        return [info.alias or name for name, info in cls.model_fields.items()]


class FeatureDTO(BaseModel):
    type: Literal["Feature"] = "Feature"
    id: str
    geometry: Optional[Dict[str, Any]] = None
    properties: Dict[str, Any] = Field(default_factory=dict)


class FeatureCollectionDTO(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[FeatureDTO] = Field(default_factory=list)

    @classmethod
    def from_features(cls, features: Sequence[FeatureDTO]) -> "FeatureCollectionDTO":
        return cls(features=list(features))

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "id": "urn:ngsi-ld:ExerciseTrail:1",
                        "geometry": {
                            "type": "LineString",
                            "coordinates": [[17.3, 62.4], [17.31, 62.41]],
                        },
                        "properties": {
                            "type": "ExerciseTrail",
                            "name": "Motionsspår",
                            "categories": ["floodlit"],
                            "length": 2.5,
                        },
                    }
                ],
            }
        }
    }
