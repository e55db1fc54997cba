"""
Temperature Use Cases - Application Layer

On-demand air temperature queries. Readings are looked up through the
``WeatherObserved`` entities that reference a sensor, and can be
aggregated into fixed time windows.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from src.application.dtos.ngsi_dto import TemporalEntityDTO, ensure_utc
from src.application.dtos.weather_dto import (
    SensorTemperaturesDTO,
    TemperatureResponseDTO,
    TemperatureSensorDTO,
    TemperatureValueDTO,
)
from src.domain.entities.errors import ConfigurationError
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.domain.services.windowed_aggregator import (
    WindowedAggregator,
    parse_functions,
    parse_window,
)
from src.shared import DEFAULT_TENANT, get_logger

logger = get_logger(__name__)

AGGREGATED_VALUES_OPTION = "aggregatedValues"
DEFAULT_QUERY_SPAN = timedelta(hours=24)


@dataclass(frozen=True)
class TemperatureQuery:
    """Parameters of an air temperature request."""

    sensor: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    options: Optional[str] = None
    aggr_methods: Optional[str] = None
    aggr_period_duration: Optional[str] = None

    @property
    def aggregated(self) -> bool:
        return self.options == AGGREGATED_VALUES_OPTION


class GetAirTemperaturesUseCase:
    """Fetch (and optionally aggregate) temperatures for one sensor."""

    def __init__(
        self,
        context_broker_gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
        aggregator: Optional[WindowedAggregator] = None,
    ) -> None:
        self._gateway = context_broker_gateway
        self._tenant = tenant
        self._aggregator = aggregator or WindowedAggregator()

    def execute(self, query: TemperatureQuery) -> TemperatureResponseDTO:
        """
        Raises:
            ConfigurationError: Missing sensor, or an aggregation request with
                an unsupported window or function.
            UpstreamError: The context broker could not be queried.
        """
        if not query.sensor:
            raise ConfigurationError("no sensor specified in temperature request")

        if query.aggregated:
            if not query.aggr_methods or not query.aggr_period_duration:
                raise ConfigurationError(
                    "aggregatedValues requires aggrMethods and aggrPeriodDuration",
                    details={
                        "aggrMethods": query.aggr_methods,
                        "aggrPeriodDuration": query.aggr_period_duration,
                    },
                )
            # Reject bad aggregation input before touching the broker.
            parse_window(query.aggr_period_duration)
            parse_functions(query.aggr_methods)

        # Offset-less timeAt/endTimeAt values are read as UTC.
        requested_start = ensure_utc(query.start)
        end = ensure_utc(query.end) or datetime.now(timezone.utc)
        start = requested_start or end - DEFAULT_QUERY_SPAN

        observations = self._gateway.query_entities(
            "WeatherObserved",
            self._tenant,
            params={"q": f'refDevice=="{query.sensor}"'},
        )
        logger.info(
            "temperature.query.observations",
            sensor=query.sensor,
            count=len(observations),
        )

        sensors = []
        for observation in observations:
            payload = self._gateway.retrieve_temporal(
                observation["id"],
                self._tenant,
                attrs=["temperature"],
                start=start,
                end=end,
                last_n=None,
            )
            samples = TemporalEntityDTO.model_validate(payload).samples()

            if query.aggregated:
                values = self._aggregator.aggregate(
                    samples,
                    query.aggr_period_duration,
                    query.aggr_methods,
                    start=requested_start,
                )
            else:
                values = samples

            sensors.append(
                SensorTemperaturesDTO(
                    id=query.sensor,
                    values=[TemperatureValueDTO.from_domain(v) for v in values],
                )
            )

        return TemperatureResponseDTO(sensors=sensors)


class GetAirTemperatureSensorsUseCase:
    """List the devices that WeatherObserved entities report readings for."""

    def __init__(
        self,
        context_broker_gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
    ) -> None:
        self._gateway = context_broker_gateway
        self._tenant = tenant

    def execute(self) -> List[TemperatureSensorDTO]:
        observations = self._gateway.query_entities(
            "WeatherObserved", self._tenant, params={"attrs": "refDevice"}
        )
        devices = sorted(
            {
                observation["refDevice"]
                for observation in observations
                if isinstance(observation.get("refDevice"), str)
                and observation["refDevice"]
            }
        )
        logger.info("temperature.sensors.listed", count=len(devices))
        return [TemperatureSensorDTO(id=device) for device in devices]
