"""
Point Observation Routers - Presentation Layer

Road accidents, city works and air quality observations, all located
by a single GeoJSON point.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from src.application.dtos.geojson_dto import FeatureCollectionDTO
from src.application.dtos.observation_dto import (
    AIR_QUALITY_FEATURE_FIELDS,
    CITYWORK_LIST_FIELDS,
    ROAD_ACCIDENT_LIST_FIELDS,
    AirQualityDTO,
    CityworkDTO,
    RoadAccidentDTO,
)
from src.application.services.observation_services import (
    AirQualityService,
    CityworkService,
    RoadAccidentService,
)
from src.domain.entities.errors import DomainError
from src.presentation.responses import (
    GEOJSON_CONTENT_TYPE,
    ITEM_MAX_AGE,
    LIST_MAX_AGE,
    accepts,
    data_response,
    geojson_response,
    http_error,
    with_defaults,
)

logger = structlog.get_logger(__name__)

roadaccidents_router = APIRouter(prefix="/api/roadaccidents", tags=["Road accidents"])
cityworks_router = APIRouter(prefix="/api/cityworks", tags=["City works"])
airquality_router = APIRouter(prefix="/api/airquality", tags=["Air quality"])

_FIELDS = Query(None, description="Comma separated extra fields to include")


@roadaccidents_router.get("")
@inject
async def get_road_accidents(
    fields: Optional[str] = _FIELDS,
    service: RoadAccidentService = Depends(Provide["road_accident_service"]),
) -> Response:
    """List road accidents as id, location and accident date."""
    selected = with_defaults(ROAD_ACCIDENT_LIST_FIELDS, fields)
    try:
        data = [RoadAccidentDTO.from_domain(a).project(selected) for a in service.get_all()]
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(data)


@roadaccidents_router.get("/{accident_id}")
@inject
async def get_road_accident(
    accident_id: str,
    service: RoadAccidentService = Depends(Provide["road_accident_service"]),
) -> Response:
    try:
        accident = service.get_by_id(accident_id)
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(RoadAccidentDTO.from_domain(accident).to_json(), ITEM_MAX_AGE)


@cityworks_router.get("")
@inject
async def get_cityworks(
    fields: Optional[str] = _FIELDS,
    service: CityworkService = Depends(Provide["citywork_service"]),
) -> Response:
    """List ongoing city works as id, location and creation date."""
    selected = with_defaults(CITYWORK_LIST_FIELDS, fields)
    try:
        data = [CityworkDTO.from_domain(c).project(selected) for c in service.get_all()]
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(data)


@cityworks_router.get("/{citywork_id}")
@inject
async def get_citywork(
    citywork_id: str,
    service: CityworkService = Depends(Provide["citywork_service"]),
) -> Response:
    try:
        citywork = service.get_by_id(citywork_id)
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(CityworkDTO.from_domain(citywork).to_json(), ITEM_MAX_AGE)


@airquality_router.get("")
@inject
async def get_air_qualities(
    request: Request,
    fields: Optional[str] = _FIELDS,
    service: AirQualityService = Depends(Provide["air_quality_service"]),
) -> Response:
    """List air quality observations with every reported pollutant."""
    observations = service.get_all()

    if not accepts(request, GEOJSON_CONTENT_TYPE):
        return data_response([AirQualityDTO.from_domain(o).to_json() for o in observations])

    selected = with_defaults(AIR_QUALITY_FEATURE_FIELDS, fields)
    try:
        features = [
            AirQualityDTO.from_domain(o).to_feature(
                selected, o.location.to_geojson() if o.location else None
            )
            for o in observations
        ]
    except DomainError as exc:
        raise http_error(exc) from exc
    logger.debug("airquality.geojson.rendered", count=len(features))
    return geojson_response(FeatureCollectionDTO.from_features(features), LIST_MAX_AGE)


@airquality_router.get("/{observation_id}")
@inject
async def get_air_quality(
    observation_id: str,
    service: AirQualityService = Depends(Provide["air_quality_service"]),
) -> Response:
    try:
        observation = service.get_by_id(observation_id)
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(AirQualityDTO.from_domain(observation).to_json(), ITEM_MAX_AGE)
