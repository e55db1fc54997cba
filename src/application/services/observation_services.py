"""Point-located datasets: road accidents, city works and air quality."""

from __future__ import annotations

from typing import Any, Dict

from src.application.dtos.ngsi_dto import (
    AirQualityRecordDTO,
    CityworkRecordDTO,
    RoadAccidentRecordDTO,
)
from src.application.services.dataset_service import DatasetService
from src.domain.entities.air_quality import AirQuality
from src.domain.entities.citywork import Citywork
from src.domain.entities.errors import (
    NoSuchAirQualityError,
    NoSuchCityworkError,
    NoSuchRoadAccidentError,
)
from src.domain.entities.road_accident import RoadAccident


class RoadAccidentService(DatasetService[RoadAccident]):
    name = "roadaccidents"
    entity_type = "RoadAccident"
    not_found_error = NoSuchRoadAccidentError

    def transform(self, record: Dict[str, Any]) -> RoadAccident:
        return RoadAccidentRecordDTO.model_validate(record).to_domain()


class CityworkService(DatasetService[Citywork]):
    name = "cityworks"
    entity_type = "CityWork"
    not_found_error = NoSuchCityworkError

    def transform(self, record: Dict[str, Any]) -> Citywork:
        return CityworkRecordDTO.model_validate(record).to_domain()


class AirQualityService(DatasetService[AirQuality]):
    name = "airquality"
    entity_type = "AirQualityObserved"
    not_found_error = NoSuchAirQualityError

    def transform(self, record: Dict[str, Any]) -> AirQuality:
        return AirQualityRecordDTO.model_validate(record).to_domain()
