"""City works (road and construction work) domain entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.domain.entities.geo import Point


@dataclass(frozen=True, slots=True)
class Citywork:
    id: str
    location: Point
    description: str = ""
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
