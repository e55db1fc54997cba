"""Water quality observations with their recent temperature history."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from src.application.dtos.ngsi_dto import TemporalEntityDTO, WaterQualityRecordDTO
from src.application.services.dataset_service import DatasetService
from src.domain.entities.errors import NoSuchWaterQualityError, UpstreamError
from src.domain.entities.geo import Point, distance_m
from src.domain.entities.time_series import TimeSeriesSample
from src.domain.entities.water_quality import WaterQualityObserved, WaterQualityReading
from src.shared import get_logger

logger = get_logger(__name__)

HISTORY_WINDOW = timedelta(hours=24)


class WaterQualityService(DatasetService[WaterQualityObserved]):
    name = "waterquality"
    entity_type = "WaterQualityObserved"
    not_found_error = NoSuchWaterQualityError

    def transform(self, record: Dict[str, Any]) -> WaterQualityObserved:
        dto = WaterQualityRecordDTO.model_validate(record)
        return dto.to_domain(history=self._history(dto.id))

    def _history(self, entity_id: str) -> List[TimeSeriesSample]:
        end = self._clock()
        try:
            payload = self._gateway.retrieve_temporal(
                entity_id,
                self._tenant,
                attrs=["temperature"],
                start=end - HISTORY_WINDOW,
                end=end,
            )
        except UpstreamError as exc:
            logger.warning(
                "waterquality.temporal.unavailable",
                entity_id=entity_id,
                error=str(exc),
            )
            return []
        return TemporalEntityDTO.model_validate(payload).samples(digits=1)

    def get_observed_near_point(
        self, point: Point, max_distance: int
    ) -> List[WaterQualityObserved]:
        """Sensors closer than ``max_distance`` metres to ``point``."""
        return [
            observed
            for observed in self.get_all()
            if observed.location is not None
            and distance_m(observed.location, point) < max_distance
        ]

    def get_all_near_point(
        self,
        point: Point,
        max_distance: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[WaterQualityReading]:
        """Newest reading inside ``[start, end]`` per sensor near ``point``."""

        readings: List[WaterQualityReading] = []
        for observed in self.get_observed_near_point(point, max_distance):
            candidates = observed.readings_between(start, end)
            if candidates:
                readings.append(max(candidates, key=lambda r: r.observed_at))
        return readings
