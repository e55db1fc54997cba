"""Road accident domain entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.domain.entities.geo import Point


@dataclass(frozen=True, slots=True)
class RoadAccident:
    id: str
    location: Point
    description: str = ""
    status: str = ""
    accident_date: Optional[datetime] = None
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
