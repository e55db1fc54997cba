"""
Sports Fields and Sports Venues Routers - Presentation Layer

Both datasets share their shape: a MultiPolygon area with categories.
List items are located by the first vertex of the area.
"""

from typing import Optional, Sequence, Type, Union

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from src.application.dtos.geojson_dto import FeatureCollectionDTO, parse_field_list
from src.application.dtos.sports_dto import (
    SPORTS_FEATURE_FIELDS,
    SPORTS_LIST_FIELDS,
    SportsFieldDTO,
    SportsVenueDTO,
)
from src.application.services.sports_service import (
    SportsFieldService,
    SportsVenueService,
)
from src.domain.entities.errors import DomainError
from src.domain.entities.sports import SportsField, SportsVenue
from src.presentation.responses import (
    GEOJSON_CONTENT_TYPE,
    ITEM_MAX_AGE,
    accepts,
    data_response,
    geojson_response,
    http_error,
    with_defaults,
)

SportsItem = Union[SportsField, SportsVenue]
SportsDTO = Union[Type[SportsFieldDTO], Type[SportsVenueDTO]]

sportsfields_router = APIRouter(prefix="/api/sportsfields", tags=["Sports fields"])
sportsvenues_router = APIRouter(prefix="/api/sportsvenues", tags=["Sports venues"])

_CATEGORIES = Query(None, description="Comma separated categories, any match")
_FIELDS = Query(None, description="Comma separated extra fields to include")


def _render_list(
    request: Request,
    items: Sequence[SportsItem],
    dto_type: SportsDTO,
    fields: Optional[str],
) -> Response:
    try:
        if accepts(request, GEOJSON_CONTENT_TYPE):
            selected = with_defaults(SPORTS_FEATURE_FIELDS, fields)
            features = [
                dto_type.from_domain(item).to_feature(
                    selected, item.location.to_geojson()
                )
                for item in items
            ]
            return geojson_response(FeatureCollectionDTO.from_features(features))

        selected = with_defaults(SPORTS_LIST_FIELDS, fields)
        data = []
        for item in items:
            vertex = item.location.first_vertex()
            data.append(
                dto_type.from_domain(item).project(
                    selected, location=vertex.to_geojson() if vertex else None
                )
            )
    except DomainError as exc:
        raise http_error(exc) from exc

    return data_response(data)


def _render_item(
    request: Request,
    item: SportsItem,
    dto_type: SportsDTO,
    fields: Optional[str],
) -> Response:
    dto = dto_type.from_domain(item)
    if accepts(request, GEOJSON_CONTENT_TYPE):
        try:
            feature = dto.to_feature(
                with_defaults(SPORTS_FEATURE_FIELDS, fields),
                item.location.to_geojson(),
            )
        except DomainError as exc:
            raise http_error(exc) from exc
        return geojson_response(feature, ITEM_MAX_AGE)
    return data_response(dto.to_json(), ITEM_MAX_AGE)


@sportsfields_router.get("")
@inject
async def get_sports_fields(
    request: Request,
    categories: Optional[str] = _CATEGORIES,
    fields: Optional[str] = _FIELDS,
    service: SportsFieldService = Depends(Provide["sports_field_service"]),
) -> Response:
    """List sports fields, optionally filtered by category."""
    items = service.get_all(categories=parse_field_list(categories))
    return _render_list(request, items, SportsFieldDTO, fields)


@sportsfields_router.get("/{field_id}")
@inject
async def get_sports_field(
    field_id: str,
    request: Request,
    fields: Optional[str] = _FIELDS,
    service: SportsFieldService = Depends(Provide["sports_field_service"]),
) -> Response:
    try:
        item = service.get_by_id(field_id)
    except DomainError as exc:
        raise http_error(exc) from exc
    return _render_item(request, item, SportsFieldDTO, fields)


@sportsvenues_router.get("")
@inject
async def get_sports_venues(
    request: Request,
    categories: Optional[str] = _CATEGORIES,
    fields: Optional[str] = _FIELDS,
    service: SportsVenueService = Depends(Provide["sports_venue_service"]),
) -> Response:
    """List sports venues, optionally filtered by category."""
    items = service.get_all(categories=parse_field_list(categories))
    return _render_list(request, items, SportsVenueDTO, fields)


@sportsvenues_router.get("/{venue_id}")
@inject
async def get_sports_venue(
    venue_id: str,
    request: Request,
    fields: Optional[str] = _FIELDS,
    service: SportsVenueService = Depends(Provide["sports_venue_service"]),
) -> Response:
    try:
        item = service.get_by_id(venue_id)
    except DomainError as exc:
        raise http_error(exc) from exc
    return _render_item(request, item, SportsVenueDTO, fields)
