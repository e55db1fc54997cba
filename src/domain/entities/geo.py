"""Geometry value objects and helpers used across datasets."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

EARTH_RADIUS_M = 6371000.0

Position = List[float]


@dataclass(frozen=True, slots=True)
class Point:
    """WGS84 point. GeoJSON order is (longitude, latitude)."""

    latitude: float
    longitude: float

    @classmethod
    def from_coordinates(cls, coordinates: Sequence[float]) -> "Point":
        return cls(latitude=float(coordinates[1]), longitude=float(coordinates[0]))

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


@dataclass(frozen=True, slots=True)
class LineString:
    coordinates: List[Position] = field(default_factory=list)

    def start(self) -> Point | None:
        """First vertex, used as a rough location for the whole line."""
        if not self.coordinates:
            return None
        return Point.from_coordinates(self.coordinates[0])

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "LineString", "coordinates": self.coordinates}


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    coordinates: List[List[List[Position]]] = field(default_factory=list)

    def outer_ring(self) -> List[Position]:
        if not self.coordinates or not self.coordinates[0]:
            return []
        return self.coordinates[0][0]

    def first_vertex(self) -> Point | None:
        ring = self.outer_ring()
        return Point.from_coordinates(ring[0]) if ring else None

    def centroid(self) -> Point | None:
        """Vertex mean of the first outer ring, rounded to 6 decimals.

        The closing vertex repeats the first one and is left out.
        """
        ring = self.outer_ring()
        vertices = ring[1:] if len(ring) > 1 else ring
        if not vertices:
            return None

        lon = sum(vertex[0] for vertex in vertices) / len(vertices)
        lat = sum(vertex[1] for vertex in vertices) / len(vertices)
        return Point(latitude=round(lat, 6), longitude=round(lon, 6))

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "MultiPolygon", "coordinates": self.coordinates}


def distance_m(a: Point, b: Point) -> int:
    """Great-circle distance in whole metres (haversine)."""

    lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # float rounding can push h just outside [0, 1]
    h = min(1.0, max(0.0, h))

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return int(round(EARTH_RADIUS_M * c))
