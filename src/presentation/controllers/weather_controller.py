"""
Weather Router - Presentation Layer

Weather observations near a point, and one observation with its
temperature series.
"""

from datetime import datetime
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.application.use_cases.weather_use_cases import (
    DEFAULT_MAX_DISTANCE,
    GetWeatherByIdUseCase,
    GetWeatherNearPointUseCase,
)
from src.domain.entities.errors import DomainError
from src.presentation.responses import http_error, parse_point

router = APIRouter(prefix="/api/weather", tags=["Weather"])


@router.get("")
@inject
def get_weather(
    max_distance: int = Query(
        DEFAULT_MAX_DISTANCE, alias="maxDistance", ge=0, description="Metres"
    ),
    coordinates: Optional[str] = Query(
        None, description="Point as longitude,latitude, defaults to Sundsvall"
    ),
    use_case: GetWeatherNearPointUseCase = Depends(
        Provide["get_weather_near_point_use_case"]
    ),
) -> JSONResponse:
    """Weather observations within ``maxDistance`` metres of a point."""
    try:
        point = parse_point(coordinates) if coordinates else None
        weather = use_case.execute(point=point, max_distance=max_distance)
    except DomainError as exc:
        raise http_error(exc) from exc
    return JSONResponse({"data": [w.to_json() for w in weather]})


@router.get("/{weather_id}")
@inject
def get_weather_by_id(
    weather_id: str,
    time_at: Optional[datetime] = Query(None, alias="timeAt"),
    end_time_at: Optional[datetime] = Query(None, alias="endTimeAt"),
    aggr: Optional[str] = Query(
        None, description="Group the series by hour, day, month or year"
    ),
    use_case: GetWeatherByIdUseCase = Depends(Provide["get_weather_by_id_use_case"]),
) -> JSONResponse:
    """One weather observation with temperatures in the requested range."""
    try:
        weather = use_case.execute(
            weather_id, start=time_at, end=end_time_at, resolution=aggr
        )
    except DomainError as exc:
        raise http_error(exc) from exc
    return JSONResponse({"data": weather.to_json()})
