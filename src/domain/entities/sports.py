"""Sports fields and sports venues."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.domain.entities.geo import MultiPolygon


@dataclass(frozen=True, slots=True)
class SportsField:
    id: str
    name: str
    location: MultiPolygon
    description: str = ""
    categories: List[str] = field(default_factory=list)
    see_also: List[str] = field(default_factory=list)
    public_access: str = ""
    source: str = ""
    managed_by: str = ""
    owner: str = ""
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    date_last_prepared: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class SportsVenue:
    id: str
    name: str
    location: MultiPolygon
    description: str = ""
    categories: List[str] = field(default_factory=list)
    see_also: List[str] = field(default_factory=list)
    public_access: str = ""
    source: str = ""
    managed_by: str = ""
    owner: str = ""
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
