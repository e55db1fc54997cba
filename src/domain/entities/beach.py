"""Beach domain entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.domain.entities.geo import MultiPolygon, Point
from src.domain.entities.water_quality import WaterQualityReading

NUTS_CODE_PREFIX = "https://badplatsen.havochvatten.se/badplatsen/karta/#/bath/"
WIKIDATA_PREFIX = "https://www.wikidata.org/wiki/"


@dataclass(frozen=True, slots=True)
class Beach:
    id: str
    name: str
    location: MultiPolygon
    centroid: Optional[Point] = None
    description: Optional[str] = None
    see_also: List[str] = field(default_factory=list)
    source: Optional[str] = None
    date_modified: Optional[datetime] = None
    water_quality: Optional[WaterQualityReading] = None

    def _reference(self, prefix: str) -> str:
        for ref in self.see_also:
            if ref.startswith(prefix):
                return ref[len(prefix) :]
        return ""

    @property
    def nuts_code(self) -> str:
        """Bathing water id from the national registry link, if any."""
        return self._reference(NUTS_CODE_PREFIX)

    @property
    def wikidata_id(self) -> str:
        return self._reference(WIKIDATA_PREFIX)
