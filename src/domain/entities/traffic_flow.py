"""Traffic flow observations, one per lane of a road segment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

# Lanes L0-L3 followed by R0-R3.
LANE_COUNT = 8


@dataclass(frozen=True, slots=True)
class TrafficFlowObserved:
    id: str
    date_observed: datetime
    lane_id: int
    intensity: int = 0
    average_vehicle_speed: float = 0.0
    road_segment: str = ""


@dataclass(frozen=True, slots=True)
class TrafficFlowSummary:
    """Vehicle count and average speed per lane for one segment and instant."""

    date_observed: datetime
    road_segment: str
    intensity: Tuple[int, ...] = (0,) * LANE_COUNT
    average_speed: Tuple[float, ...] = (0.0,) * LANE_COUNT
