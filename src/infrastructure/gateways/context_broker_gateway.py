"""
Infrastructure Gateway - NGSI-LD Context Broker

HTTP implementation of ``IContextBrokerGateway`` using a synchronous
httpx client, since callers run on cache refresh threads.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx

from src.domain.entities.errors import UpstreamError
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.shared import DEFAULT_TENANT, get_logger
from src.shared.consts import NGSI_LD_LINK_HEADER

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 1000
DEFAULT_TEMPORAL_LAST_N = 50


def _format_instant(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ContextBrokerGateway(IContextBrokerGateway):
    """Reads entities and temporal evolutions from an NGSI-LD broker."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = 50,
    ) -> None:
        """
        Args:
            base_url: Broker root, e.g. ``http://context-broker:8080``.
            timeout: Per-request timeout in seconds.
            page_size: ``limit`` sent with entity queries.
            max_pages: Upper bound on pages fetched for a single query.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._page_size = page_size
        self._max_pages = max_pages

    @property
    def base_url(self) -> str:
        return self._base_url

    def query_entities(
        self,
        entity_type: str,
        tenant: str,
        *,
        params: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """Query entities page by page until a short page is returned."""

        url = f"{self._base_url}/ngsi-ld/v1/entities"
        entities: List[Dict[str, Any]] = []

        for page in range(self._max_pages):
            query = {
                "type": entity_type,
                "limit": str(self._page_size),
                "options": "keyValues",
                **(params or {}),
            }
            if page:
                query["offset"] = str(page * self._page_size)

            batch = self._get_json(url, tenant, params=query, event="query")
            if not isinstance(batch, list):
                raise UpstreamError(
                    f"unexpected payload querying {entity_type}",
                    details={"entity_type": entity_type},
                )
            entities.extend(batch)
            if len(batch) < self._page_size:
                break
        else:
            logger.warning(
                "context_broker.query.truncated",
                entity_type=entity_type,
                pages=self._max_pages,
            )

        logger.debug(
            "context_broker.query.completed",
            entity_type=entity_type,
            tenant=tenant,
            count=len(entities),
        )
        return entities

    def retrieve_entity(self, entity_id: str, tenant: str) -> Optional[Dict[str, Any]]:
        url = f"{self._base_url}/ngsi-ld/v1/entities/{quote(entity_id, safe='')}"
        try:
            payload = self._get_json(
                url, tenant, params={"options": "keyValues"}, event="retrieve"
            )
        except UpstreamError as exc:
            if exc.status_code == httpx.codes.NOT_FOUND:
                return None
            raise

        if not isinstance(payload, dict):
            raise UpstreamError(
                f"unexpected payload retrieving {entity_id}",
                details={"entity_id": entity_id},
            )
        return payload

    def retrieve_temporal(
        self,
        entity_id: str,
        tenant: str,
        *,
        attrs: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        last_n: Optional[int] = DEFAULT_TEMPORAL_LAST_N,
    ) -> Dict[str, Any]:
        """Fetch temporal values, defaulting to the last 24 hours."""

        if start is None and end is None:
            end = datetime.now(timezone.utc)
            start = end - timedelta(hours=24)

        params: Dict[str, str] = {}
        if start is not None and end is not None:
            params.update(
                timerel="between",
                timeAt=_format_instant(start),
                endTimeAt=_format_instant(end),
            )
        elif start is not None:
            params.update(timerel="after", timeAt=_format_instant(start))
        elif end is not None:
            params.update(timerel="before", timeAt=_format_instant(end))
        if attrs:
            params["attrs"] = ",".join(attrs)
        if last_n:
            params["lastN"] = str(last_n)

        url = (
            f"{self._base_url}/ngsi-ld/v1/temporal/entities/"
            f"{quote(entity_id, safe='')}"
        )
        payload = self._get_json(
            url,
            tenant,
            params=params,
            event="temporal",
            accepted=(httpx.codes.OK, httpx.codes.PARTIAL_CONTENT),
        )
        if not isinstance(payload, dict):
            raise UpstreamError(
                f"unexpected temporal payload for {entity_id}",
                details={"entity_id": entity_id},
            )
        return payload

    def _headers(self, tenant: str) -> Dict[str, str]:
        headers = {"Accept": "application/ld+json", "Link": NGSI_LD_LINK_HEADER}
        if tenant and tenant != DEFAULT_TENANT:
            headers["NGSILD-Tenant"] = tenant
        return headers

    def _get_json(
        self,
        url: str,
        tenant: str,
        *,
        params: Mapping[str, str],
        event: str,
        accepted: Sequence[int] = (httpx.codes.OK,),
    ) -> Any:
        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.get(url, params=params, headers=self._headers(tenant))
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code != httpx.codes.NOT_FOUND:
                logger.error(
                    f"context_broker.{event}.http_error",
                    url=url,
                    status_code=status_code,
                    response_text=exc.response.text,
                )
            raise UpstreamError(
                f"context broker returned {status_code} for {url}",
                status_code=status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.error(
                f"context_broker.{event}.request_error", url=url, error=str(exc)
            )
            raise UpstreamError(f"request to context broker failed: {exc}") from exc

        if response.status_code not in accepted:
            content_type = response.headers.get("Content-Type", "")
            raise UpstreamError(
                f"context broker returned status {response.status_code} "
                f"(content-type: {content_type})",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"context broker returned malformed json for {url}"
            ) from exc
