"""
Weather Use Cases - Application Layer

On-demand lookups of ``WeatherObserved`` entities near a point, and of a
single observation with its temperature history.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import ValidationError

from src.application.dtos.ngsi_dto import TemporalEntityDTO, WeatherRecordDTO
from src.application.dtos.weather_dto import WeatherDTO
from src.domain.entities.errors import ConfigurationError, NoSuchWeatherError
from src.domain.entities.geo import Point
from src.domain.entities.weather import CalendarResolution
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.domain.services.temperature_summary import group_by_calendar, summarise
from src.shared import DEFAULT_TENANT, get_logger

logger = get_logger(__name__)

DEFAULT_MAX_DISTANCE = 5000
# Sundsvall city centre.
DEFAULT_POINT = Point(latitude=62.390802, longitude=17.306982)
DEFAULT_QUERY_SPAN = timedelta(hours=24)


def parse_resolution(value: Optional[str]) -> Optional[CalendarResolution]:
    if not value:
        return None
    try:
        return CalendarResolution(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"unsupported aggregation {value}, expected hour, day, month or year",
            details={"aggr": value},
        ) from exc


class GetWeatherNearPointUseCase:
    """List weather observations within ``max_distance`` metres of a point."""

    def __init__(
        self,
        context_broker_gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
    ) -> None:
        self._gateway = context_broker_gateway
        self._tenant = tenant

    def execute(
        self,
        point: Optional[Point] = None,
        max_distance: int = DEFAULT_MAX_DISTANCE,
    ) -> List[WeatherDTO]:
        point = point or DEFAULT_POINT
        records = self._gateway.query_entities(
            "WeatherObserved",
            self._tenant,
            params={
                "geoproperty": "location",
                "georel": f"near;maxDistance=={max_distance}",
                "geometry": "Point",
                "coordinates": f"[{point.longitude:f},{point.latitude:f}]",
            },
        )

        weather: List[WeatherDTO] = []
        for record in records:
            try:
                observed = WeatherRecordDTO.model_validate(record).to_domain()
            except ValidationError as exc:
                logger.warning(
                    "weather.record.skipped",
                    entity_id=record.get("id"),
                    error=str(exc),
                )
                continue
            weather.append(WeatherDTO.from_domain(observed))
        return weather


class GetWeatherByIdUseCase:
    """One weather observation with its temperature series in a time range."""

    def __init__(
        self,
        context_broker_gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
    ) -> None:
        self._gateway = context_broker_gateway
        self._tenant = tenant

    def execute(
        self,
        entity_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        resolution: Optional[str] = None,
    ) -> WeatherDTO:
        """
        Raises:
            NoSuchWeatherError: The broker has no entity with this id.
            ConfigurationError: ``resolution`` is not hour/day/month/year.
        """
        grouping = parse_resolution(resolution)

        record = self._gateway.retrieve_entity(entity_id, self._tenant)
        if record is None:
            raise NoSuchWeatherError(entity_id)
        observed = WeatherRecordDTO.model_validate(record).to_domain()

        end = end or datetime.now(timezone.utc)
        start = start or end - DEFAULT_QUERY_SPAN
        payload = self._gateway.retrieve_temporal(
            entity_id,
            self._tenant,
            attrs=["temperature"],
            start=start,
            end=end,
            last_n=None,
        )
        series = TemporalEntityDTO.model_validate(payload).samples()

        observed = replace(
            observed,
            series=series,
            groups=group_by_calendar(series, grouping) if grouping else [],
            summary=summarise(series),
        )
        return WeatherDTO.from_domain(observed)
