"""Exercise trail domain entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.domain.entities.geo import LineString


@dataclass(frozen=True, slots=True)
class ExerciseTrail:
    id: str
    name: str
    location: LineString
    description: str = ""
    categories: List[str] = field(default_factory=list)
    see_also: List[str] = field(default_factory=list)
    length: float = 0.0
    difficulty: float = 0.0
    payment_required: bool = False
    status: str = ""
    source: str = ""
    area_served: str = ""
    date_last_preparation: Optional[datetime] = None
    date_modified: Optional[datetime] = None
