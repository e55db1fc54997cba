"""Beaches enriched with the newest nearby water temperature."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta
from typing import Any, Dict

from src.application.dtos.ngsi_dto import BeachRecordDTO
from src.application.services.dataset_service import DatasetService
from src.application.services.water_quality_service import WaterQualityService
from src.domain.entities.beach import Beach
from src.domain.entities.errors import NoSuchBeachError
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.shared import DEFAULT_TENANT

DEFAULT_MAX_WQO_DISTANCE = 1000
WATER_QUALITY_WINDOW = timedelta(hours=24)


class BeachService(DatasetService[Beach]):
    name = "beaches"
    entity_type = "Beach"
    not_found_error = NoSuchBeachError

    def __init__(
        self,
        gateway: IContextBrokerGateway,
        water_quality: WaterQualityService,
        tenant: str = DEFAULT_TENANT,
        *,
        max_wqo_distance: int = DEFAULT_MAX_WQO_DISTANCE,
        **kwargs: Any,
    ) -> None:
        """
        Args:
            gateway: Context broker gateway used for the Beach query.
            water_quality: Service holding the water quality readings.
            tenant: NGSI-LD tenant to query.
            max_wqo_distance: Radius in metres for attaching readings.
        """
        super().__init__(gateway, tenant, **kwargs)
        self._water_quality = water_quality
        self._max_wqo_distance = max_wqo_distance

    @property
    def max_wqo_distance(self) -> int:
        return self._max_wqo_distance

    def transform(self, record: Dict[str, Any]) -> Beach:
        beach = BeachRecordDTO.model_validate(record).to_domain()
        if beach.centroid is None:
            return beach

        now = self._clock()
        readings = [
            reading
            for reading in self._water_quality.get_all_near_point(
                beach.centroid, self._max_wqo_distance, end=now
            )
            if reading.age(now) <= WATER_QUALITY_WINDOW
        ]
        if not readings:
            return beach
        return replace(
            beach, water_quality=max(readings, key=lambda r: r.observed_at)
        )
