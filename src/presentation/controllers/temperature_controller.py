"""
Temperature Router - Presentation Layer

On-demand air temperature series per sensor, raw or aggregated into
fixed windows.
"""

from datetime import datetime
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.application.dtos.weather_dto import TemperatureResponseDTO
from src.application.use_cases.temperature_use_cases import (
    GetAirTemperatureSensorsUseCase,
    GetAirTemperaturesUseCase,
    TemperatureQuery,
)
from src.domain.entities.errors import DomainError
from src.presentation.responses import LIST_MAX_AGE, data_response, http_error

router = APIRouter(prefix="/api/temperature", tags=["Temperature"])


@router.get("/air", response_model=TemperatureResponseDTO)
@inject
def get_air_temperatures(
    sensor: str = Query("", description="Device id referenced by WeatherObserved"),
    time_at: Optional[datetime] = Query(
        None, alias="timeAt", description="Start of the range, defaults to 24h ago"
    ),
    end_time_at: Optional[datetime] = Query(
        None, alias="endTimeAt", description="End of the range, defaults to now"
    ),
    options: Optional[str] = Query(
        None, description="Set to aggregatedValues to aggregate the series"
    ),
    aggr_methods: Optional[str] = Query(
        None, alias="aggrMethods", description="Comma separated avg, min and max"
    ),
    aggr_period_duration: Optional[str] = Query(
        None, alias="aggrPeriodDuration", description="PT15M, PT1H, PT24H or P7D"
    ),
    use_case: GetAirTemperaturesUseCase = Depends(
        Provide["get_air_temperatures_use_case"]
    ),
) -> JSONResponse:
    """Temperatures for one sensor between ``timeAt`` and ``endTimeAt``."""
    query = TemperatureQuery(
        sensor=sensor,
        start=time_at,
        end=end_time_at,
        options=options,
        aggr_methods=aggr_methods,
        aggr_period_duration=aggr_period_duration,
    )
    try:
        response = use_case.execute(query)
    except DomainError as exc:
        raise http_error(exc) from exc
    return JSONResponse(response.to_json())


@router.get("/air/sensors")
@inject
def get_air_temperature_sensors(
    use_case: GetAirTemperatureSensorsUseCase = Depends(
        Provide["get_air_temperature_sensors_use_case"]
    ),
) -> JSONResponse:
    """Devices that can be passed as ``sensor`` to ``/api/temperature/air``."""
    try:
        sensors = use_case.execute()
    except DomainError as exc:
        raise http_error(exc) from exc
    return data_response(
        [sensor.model_dump(mode="json") for sensor in sensors], LIST_MAX_AGE
    )
