"""Water quality observations collected near bathing sites."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from src.domain.entities.geo import Point
from src.domain.entities.time_series import TimeSeriesSample


@dataclass(frozen=True, slots=True)
class WaterQualityReading:
    """One water temperature reading attached to a location."""

    temperature: float
    observed_at: datetime
    source: Optional[str] = None
    entity_id: Optional[str] = None

    def age(self, now: datetime) -> timedelta:
        return now - self.observed_at


@dataclass(frozen=True, slots=True)
class WaterQualityObserved:
    """A water quality sensor with its latest reading and recent history."""

    id: str
    latest: WaterQualityReading
    location: Optional[Point] = None
    history: List[TimeSeriesSample] = field(default_factory=list)

    def readings_between(
        self, start: Optional[datetime], end: Optional[datetime]
    ) -> List[WaterQualityReading]:
        """Latest reading plus history entries inside ``[start, end]``."""

        def _inside(instant: datetime) -> bool:
            if start is not None and instant < start:
                return False
            if end is not None and instant > end:
                return False
            return True

        readings = [self.latest] if _inside(self.latest.observed_at) else []
        readings.extend(
            WaterQualityReading(
                temperature=sample.value,
                observed_at=sample.timestamp,
                source=self.latest.source,
                entity_id=self.id,
            )
            for sample in self.history
            if _inside(sample.timestamp) and sample.timestamp != self.latest.observed_at
        )
        return readings
