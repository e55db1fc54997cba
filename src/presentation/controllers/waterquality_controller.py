"""
Water Quality Router - Presentation Layer

Water temperature sensors, optionally limited to those near a point, and
single sensors with their temperature history.
"""

from datetime import datetime
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from src.application.dtos.beach_dto import WaterQualityReadingDTO
from src.application.dtos.geojson_dto import FeatureCollectionDTO
from src.application.dtos.observation_dto import (
    WATER_QUALITY_FEATURE_FIELDS,
    WaterQualityTemporalDTO,
)
from src.application.services.water_quality_service import WaterQualityService
from src.domain.entities.errors import DomainError
from src.presentation.responses import (
    GEOJSON_CONTENT_TYPE,
    LIST_MAX_AGE,
    accepts,
    data_response,
    geojson_response,
    http_error,
    parse_point,
    with_defaults,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/waterquality", tags=["Water quality"])


@router.get("")
@inject
async def get_water_qualities(
    request: Request,
    max_distance: int = Query(
        0,
        alias="maxDistance",
        ge=0,
        description="Radius in metres around coordinates, 0 lists every sensor",
    ),
    coordinates: Optional[str] = Query(
        None, description="Point as longitude,latitude"
    ),
    fields: Optional[str] = Query(
        None, description="Comma separated extra properties for GeoJSON"
    ),
    service: WaterQualityService = Depends(Provide["water_quality_service"]),
) -> Response:
    """Latest water temperature per sensor."""
    try:
        if max_distance:
            point = parse_point(coordinates or "0,0")
            observations = service.get_observed_near_point(point, max_distance)
        else:
            observations = list(service.get_all())

        if accepts(request, GEOJSON_CONTENT_TYPE):
            selected = with_defaults(WATER_QUALITY_FEATURE_FIELDS, fields)
            features = [
                WaterQualityReadingDTO.from_domain(o.latest).to_feature(
                    selected, o.location.to_geojson() if o.location else None
                )
                for o in observations
            ]
            return geojson_response(
                FeatureCollectionDTO.from_features(features), LIST_MAX_AGE
            )
    except DomainError as exc:
        raise http_error(exc) from exc

    data = [
        WaterQualityReadingDTO.from_domain(
            o.latest, location=o.location.to_geojson() if o.location else None
        ).to_json()
        for o in observations
    ]
    return data_response(data)


@router.get("/{observation_id}")
@inject
async def get_water_quality(
    observation_id: str,
    start: Optional[datetime] = Query(
        None, alias="from", description="Earliest reading to include (RFC 3339)"
    ),
    end: Optional[datetime] = Query(
        None, alias="to", description="Latest reading to include (RFC 3339)"
    ),
    service: WaterQualityService = Depends(Provide["water_quality_service"]),
) -> Response:
    """One sensor with its readings in ``[from, to]``, newest first."""
    try:
        observed = service.get_by_id(observation_id)
    except DomainError as exc:
        raise http_error(exc) from exc

    dto = WaterQualityTemporalDTO.from_domain(observed, start, end)
    logger.debug(
        "waterquality.history.rendered",
        entity_id=observation_id,
        count=len(dto.temperature),
    )
    return data_response(dto.to_json(), LIST_MAX_AGE)
