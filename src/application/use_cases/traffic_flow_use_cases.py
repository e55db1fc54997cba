"""
Traffic Flow Use Cases - Application Layer

On-demand traffic flow query. The broker holds one observation per lane
and instant; they are folded into one summary per road segment and
instant, with vehicle count and average speed for every lane.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from src.application.dtos.ngsi_dto import TrafficFlowRecordDTO, ensure_utc
from src.domain.entities.errors import ConfigurationError
from src.domain.entities.traffic_flow import (
    LANE_COUNT,
    TrafficFlowObserved,
    TrafficFlowSummary,
)
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.shared import DEFAULT_TENANT, get_logger

logger = get_logger(__name__)


def _format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def summarise_lanes(
    observations: List[TrafficFlowObserved],
) -> List[TrafficFlowSummary]:
    """Group lane observations by segment and instant, ordered by time."""

    groups: Dict[Tuple[datetime, str], Tuple[List[int], List[float]]] = {}
    for observation in observations:
        key = (observation.date_observed, observation.road_segment)
        intensity, speed = groups.setdefault(
            key, ([0] * LANE_COUNT, [0.0] * LANE_COUNT)
        )
        # A later observation for the same lane replaces the earlier one.
        intensity[observation.lane_id] = observation.intensity
        speed[observation.lane_id] = observation.average_vehicle_speed

    return [
        TrafficFlowSummary(
            date_observed=observed,
            road_segment=segment,
            intensity=tuple(intensity),
            average_speed=tuple(speed),
        )
        for (observed, segment), (intensity, speed) in sorted(groups.items())
    ]


class GetTrafficFlowsUseCase:
    """Traffic flow summaries, optionally limited to ``[start, end]``."""

    def __init__(
        self,
        context_broker_gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
    ) -> None:
        self._gateway = context_broker_gateway
        self._tenant = tenant

    def execute(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[TrafficFlowSummary]:
        """
        Raises:
            ConfigurationError: Only one of ``start`` and ``end`` was given,
                or ``end`` precedes ``start``.
            UpstreamError: The context broker could not be queried.
        """
        start, end = ensure_utc(start), ensure_utc(end)
        if (start is None) != (end is None):
            raise ConfigurationError(
                "from and to must be given together",
                details={"from": start, "to": end},
            )

        params: Dict[str, str] = {}
        if start is not None and end is not None:
            if end < start:
                raise ConfigurationError(
                    "to must not precede from", details={"from": start, "to": end}
                )
            params = {
                "timerel": "between",
                "timeAt": _format_instant(start),
                "endTimeAt": _format_instant(end),
            }

        records = self._gateway.query_entities(
            "TrafficFlowObserved", self._tenant, params=params or None
        )

        observations: List[TrafficFlowObserved] = []
        for record in records:
            try:
                observation = TrafficFlowRecordDTO.model_validate(record).to_domain()
            except ValidationError as exc:
                logger.warning(
                    "trafficflow.record.skipped",
                    entity_id=record.get("id"),
                    error=str(exc),
                )
                continue
            if start is not None and not start <= observation.date_observed <= end:
                continue
            observations.append(observation)

        summaries = summarise_lanes(observations)
        logger.info(
            "trafficflow.query.completed",
            observations=len(observations),
            rows=len(summaries),
        )
        return summaries
