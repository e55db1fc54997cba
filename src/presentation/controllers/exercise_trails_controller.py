"""
Exercise Trails Router - Presentation Layer

Lists are returned as ``{"data": [...]}`` projections, or as a GeoJSON
FeatureCollection when the client accepts ``application/geo+json``.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from src.application.dtos.exercise_trail_dto import (
    TRAIL_FEATURE_FIELDS,
    TRAIL_LIST_FIELDS,
    ExerciseTrailDTO,
)
from src.application.dtos.geojson_dto import FeatureCollectionDTO, parse_field_list
from src.application.services.exercise_trail_service import ExerciseTrailService
from src.domain.entities.errors import DomainError
from src.presentation.responses import (
    GEOJSON_CONTENT_TYPE,
    ITEM_MAX_AGE,
    accepts,
    data_response,
    geojson_response,
    http_error,
    with_defaults,
)

router = APIRouter(prefix="/api/exercise-trails", tags=["Exercise trails"])


@router.get("")
@inject
async def get_exercise_trails(
    request: Request,
    categories: Optional[str] = Query(
        None, description="Comma separated categories, any match is returned"
    ),
    fields: Optional[str] = Query(
        None, description="Comma separated extra fields to include"
    ),
    trail_service: ExerciseTrailService = Depends(Provide["exercise_trail_service"]),
) -> Response:
    """List exercise trails, optionally filtered by category."""
    trails = trail_service.get_all(categories=parse_field_list(categories))

    try:
        if accepts(request, GEOJSON_CONTENT_TYPE):
            selected = with_defaults(TRAIL_FEATURE_FIELDS, fields)
            features = [
                ExerciseTrailDTO.from_domain(trail).to_feature(
                    selected, trail.location.to_geojson()
                )
                for trail in trails
            ]
            return geojson_response(FeatureCollectionDTO.from_features(features))

        selected = with_defaults(TRAIL_LIST_FIELDS, fields)
        data = []
        for trail in trails:
            start = trail.location.start()
            data.append(
                ExerciseTrailDTO.from_domain(trail).project(
                    selected, location=start.to_geojson() if start else None
                )
            )
    except DomainError as exc:
        raise http_error(exc) from exc

    return data_response(data)


@router.get("/{trail_id}")
@inject
async def get_exercise_trail(
    trail_id: str,
    request: Request,
    fields: Optional[str] = Query(
        None, description="Extra properties for GeoJSON responses"
    ),
    trail_service: ExerciseTrailService = Depends(Provide["exercise_trail_service"]),
) -> Response:
    """One exercise trail as JSON or as a GeoJSON Feature."""
    try:
        trail = trail_service.get_by_id(trail_id)
        dto = ExerciseTrailDTO.from_domain(trail)
        if accepts(request, GEOJSON_CONTENT_TYPE):
            feature = dto.to_feature(
                with_defaults(TRAIL_FEATURE_FIELDS, fields),
                trail.location.to_geojson(),
            )
            return geojson_response(feature, ITEM_MAX_AGE)
    except DomainError as exc:
        raise http_error(exc) from exc

    return data_response(dto.to_json(), ITEM_MAX_AGE)
