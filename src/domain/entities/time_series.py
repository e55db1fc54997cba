"""Domain entities for time-series data and windowed aggregates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class AggregateFunction(str, Enum):
    AVERAGE = "avg"
    MAX = "max"
    MIN = "min"


class WindowDuration(str, Enum):
    """ISO-8601 durations accepted for aggregation windows."""

    PT15M = "PT15M"
    PT1H = "PT1H"
    PT24H = "PT24H"
    P7D = "P7D"

    @property
    def delta(self) -> timedelta:
        return _WINDOW_DELTAS[self]


_WINDOW_DELTAS = {
    WindowDuration.PT15M: timedelta(minutes=15),
    WindowDuration.PT1H: timedelta(hours=1),
    WindowDuration.PT24H: timedelta(hours=24),
    WindowDuration.P7D: timedelta(days=7),
}


@dataclass(frozen=True, slots=True)
class TimeSeriesSample:
    """Single observed value for one sensor or entity."""

    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class AggregateWindow:
    """Aggregates over ``[start, end)``; only requested functions are set."""

    start: datetime
    end: datetime
    average: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
