"""
Traffic Flow Router - Presentation Layer

Per-lane traffic counts and average speeds as a semicolon separated file.
"""

from datetime import datetime
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from src.application.dtos.traffic_flow_dto import render_traffic_flow_csv
from src.application.use_cases.traffic_flow_use_cases import GetTrafficFlowsUseCase
from src.domain.entities.errors import DomainError
from src.presentation.responses import ITEM_MAX_AGE, csv_response, http_error
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/trafficflow", tags=["Traffic flow"])


@router.get("")
@inject
def get_traffic_flows(
    start: Optional[datetime] = Query(
        None, alias="from", description="Earliest observation (RFC 3339)"
    ),
    end: Optional[datetime] = Query(
        None, alias="to", description="Latest observation (RFC 3339)"
    ),
    use_case: GetTrafficFlowsUseCase = Depends(Provide["get_traffic_flows_use_case"]),
) -> Response:
    """One row per road segment and observation time, lanes L0-L3 and R0-R3."""
    try:
        summaries = use_case.execute(start=start, end=end)
    except DomainError as exc:
        raise http_error(exc) from exc

    logger.debug("trafficflow.response.rendered", rows=len(summaries))
    return csv_response(render_traffic_flow_csv(summaries), ITEM_MAX_AGE)
