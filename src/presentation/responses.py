"""
Response helpers - Presentation Layer

Content negotiation, cache headers and error mapping shared by the
dataset routers.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from src.application.dtos.geojson_dto import parse_field_list
from src.domain.entities.errors import (
    ConfigurationError,
    DomainError,
    EntityNotFoundError,
    UpstreamError,
)
from src.domain.entities.geo import Point
from src.shared import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"
GEOJSON_CONTENT_TYPE = "application/geo+json"
CSV_CONTENT_TYPE = "text/csv"

LIST_MAX_AGE = 3600
ITEM_MAX_AGE = 600


def accepts(request: Request, content_type: str) -> bool:
    """True when the Accept header starts with ``content_type``."""
    return request.headers.get("accept", "").startswith(content_type)


def with_defaults(defaults: Iterable[str], raw_fields: Optional[str]) -> List[str]:
    """Default field list followed by the caller's extra ``fields``."""
    return [*defaults, *parse_field_list(raw_fields)]


def _cache_headers(max_age: int) -> dict:
    return {"Cache-Control": f"max-age={max_age}"}


def data_response(payload: Any, max_age: int = LIST_MAX_AGE) -> JSONResponse:
    """Wrap ``payload`` as ``{"data": ...}``."""
    return JSONResponse({"data": payload}, headers=_cache_headers(max_age))


def geojson_response(payload: BaseModel, max_age: int = ITEM_MAX_AGE) -> JSONResponse:
    return JSONResponse(
        payload.model_dump(mode="json", exclude_none=True),
        media_type=GEOJSON_CONTENT_TYPE,
        headers=_cache_headers(max_age),
    )


def csv_response(body: str, max_age: int = LIST_MAX_AGE) -> Response:
    return Response(
        content=body.encode("utf-8"),
        media_type=f"{CSV_CONTENT_TYPE}; charset=utf-8",
        headers=_cache_headers(max_age),
    )


def http_error(exc: DomainError) -> HTTPException:
    """Map a domain error onto the matching HTTP status."""

    if isinstance(exc, EntityNotFoundError):
        logger.info(
            "request.entity.not_found",
            entity_id=exc.entity_id,
            cache_ready=exc.cache_ready,
        )
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConfigurationError):
        logger.info("request.invalid", error=str(exc), details=exc.details)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, UpstreamError):
        logger.error(
            "request.upstream.failed", error=str(exc), status_code=exc.status_code
        )
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Context broker request failed",
        )

    logger.error("request.failed", error=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def parse_point(raw: str) -> Point:
    """Parse ``lon,lat`` (optionally wrapped in brackets) into a point."""
    parts = raw.strip().lstrip("[").rstrip("]").split(",")
    if len(parts) != 2:
        raise ConfigurationError(
            "invalid coordinates specified", details={"coordinates": raw}
        )
    try:
        longitude, latitude = (float(part) for part in parts)
    except ValueError as exc:
        raise ConfigurationError(
            "invalid coordinates specified", details={"coordinates": raw}
        ) from exc
    return Point(latitude=latitude, longitude=longitude)
