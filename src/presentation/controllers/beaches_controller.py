"""
Beaches Router - Presentation Layer

Beaches are served as semicolon separated CSV unless the client asks
for JSON.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from src.application.dtos.beach_dto import (
    BeachDetailsDTO,
    BeachDTO,
    render_beaches_csv,
)
from src.application.services.beach_service import BeachService
from src.domain.entities.errors import DomainError
from src.presentation.responses import (
    ITEM_MAX_AGE,
    JSON_CONTENT_TYPE,
    accepts,
    csv_response,
    data_response,
    http_error,
)
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/beaches", tags=["Beaches"])


@router.get(
    "",
    responses={
        200: {
            "content": {"application/json": {}, "text/csv": {}},
            "description": "Beaches as JSON or CSV depending on the Accept header",
        }
    },
)
@inject
async def get_beaches(
    request: Request,
    beach_service: BeachService = Depends(Provide["beach_service"]),
) -> Response:
    """List all beaches with the newest nearby water temperature."""
    beaches = beach_service.get_all()

    if accepts(request, JSON_CONTENT_TYPE):
        return data_response([BeachDTO.from_domain(b).to_json() for b in beaches])

    logger.debug("beaches.csv.rendered", count=len(beaches))
    return csv_response(render_beaches_csv(beaches, beach_service.broker))


@router.get("/{beach_id}")
@inject
async def get_beach(
    beach_id: str,
    beach_service: BeachService = Depends(Provide["beach_service"]),
) -> Response:
    """Beach details including its full area and water temperature."""
    try:
        beach = beach_service.get_by_id(beach_id)
    except DomainError as exc:
        raise http_error(exc) from exc

    return data_response(BeachDetailsDTO.from_domain(beach).to_json(), ITEM_MAX_AGE)
