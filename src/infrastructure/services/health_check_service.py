"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from datetime import datetime, timezone
from time import perf_counter
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urljoin

import httpx

from src.domain.entities.health import (
    DatasetStatus,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from src.domain.ports.cached_dataset import ICachedDataset
from src.domain.ports.health_check import IHealthCheckService
from src.domain.services.refreshable_cache import CacheLifecycle
from src.shared import DEFAULT_TENANT, get_logger

logger = get_logger(__name__)

BROKER_CHECK_PATHS = ("/ngsi-ld/v1/types", "/version", "/")


class HealthCheckService(IHealthCheckService):
    """Check the context broker and report the state of every dataset cache."""

    def __init__(
        self,
        broker_url: str,
        datasets: Sequence[ICachedDataset] = (),
        *,
        tenant: str = DEFAULT_TENANT,
        http_timeout: float = 5.0,
    ) -> None:
        self._broker_url = broker_url
        self._datasets = list(datasets)
        self._tenant = tenant
        self._http_timeout = http_timeout

    async def evaluate(self) -> SystemHealth:
        broker = await self._check_http_service(
            name="context_broker",
            base_url=self._broker_url,
            paths=BROKER_CHECK_PATHS,
        )
        datasets = [self.dataset_status(dataset) for dataset in self._datasets]

        overall_status = self._aggregate_status(
            [broker.status] + [dataset.status for dataset in datasets]
        )
        if overall_status is not ServiceStatus.UP:
            logger.warning(
                "health.evaluate.not_up",
                status=overall_status.value,
                broker=broker.status.value,
            )
        return SystemHealth(
            status=overall_status, dependencies=[broker], datasets=datasets
        )

    def dataset_status(self, dataset: ICachedDataset) -> DatasetStatus:
        snapshot = dataset.snapshot()
        state = dataset.state()
        lifecycle = dataset.lifecycle

        if lifecycle is CacheLifecycle.STOPPED:
            status = ServiceStatus.DOWN
        elif state.last_error is None:
            status = (
                ServiceStatus.UP
                if snapshot.published_at is not None
                else ServiceStatus.UNKNOWN
            )
        elif snapshot.published_at is not None:
            status = ServiceStatus.DEGRADED
        else:
            status = ServiceStatus.DOWN

        return DatasetStatus(
            name=dataset.name,
            status=status,
            lifecycle=lifecycle.value,
            item_count=len(snapshot.items),
            last_success_at=state.last_success_at,
            next_refresh_at=state.next_refresh_at,
            last_error=str(state.last_error) if state.last_error else None,
            refresh_count=state.refresh_count,
            failure_count=state.failure_count,
        )

    def _aggregate_status(self, statuses: Iterable[ServiceStatus]) -> ServiceStatus:
        has_unknown = False
        has_degraded = False

        for status in statuses:
            if status == ServiceStatus.DOWN:
                return ServiceStatus.DOWN
            if status == ServiceStatus.DEGRADED:
                has_degraded = True
            if status == ServiceStatus.UNKNOWN:
                has_unknown = True

        if has_degraded:
            return ServiceStatus.DEGRADED
        if has_unknown:
            return ServiceStatus.UNKNOWN
        return ServiceStatus.UP

    async def _check_http_service(
        self,
        *,
        name: str,
        base_url: str,
        paths: Iterable[str],
    ) -> DependencyStatus:
        if not base_url:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message="Service URL not configured.",
            )

        attempts_log: List[dict] = []
        last_result: Optional[DependencyStatus] = None

        for path in paths:
            result = await self._hit_http_endpoint(
                name=name, base_url=base_url, path=path
            )
            attempts_log.append(
                {
                    "path": path,
                    "status": result.status.value,
                    "message": result.message,
                    "checked_at": datetime.now(timezone.utc).isoformat(),
                }
            )

            if result.status != ServiceStatus.DOWN:
                result.details.setdefault("attempts", attempts_log)
                return result

            last_result = result

        if last_result is None:
            return DependencyStatus(
                name=name,
                status=ServiceStatus.UNKNOWN,
                message="Unable to evaluate service health",
            )

        last_result.details.setdefault("attempts", attempts_log)
        return last_result

    async def _hit_http_endpoint(
        self,
        *,
        name: str,
        base_url: str,
        path: str,
    ) -> DependencyStatus:
        url = self._normalize_url(base_url, path)
        headers = {"Accept": "application/json"}
        if self._tenant != DEFAULT_TENANT:
            headers["NGSILD-Tenant"] = self._tenant
        start = perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url, headers=headers)

            latency_ms = (perf_counter() - start) * 1000
            status_code = response.status_code

            if status_code >= 500:
                status = ServiceStatus.DOWN
            elif status_code >= 400:
                status = ServiceStatus.DEGRADED
            else:
                status = ServiceStatus.UP

            return DependencyStatus(
                name=name,
                status=status,
                message=f"HTTP {status_code}",
                latency_ms=latency_ms,
                details={"url": url, "status_code": status_code},
            )

        except httpx.RequestError as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name=name,
                status=ServiceStatus.DOWN,
                message=f"HTTP request failed: {exc}",
                latency_ms=latency_ms,
                details={"url": url},
            )

    def _normalize_url(self, base_url: str, path: str) -> str:
        if not path or path == "/":
            return base_url
        base = base_url if base_url.endswith("/") else f"{base_url}/"
        return urljoin(base, path.lstrip("/"))
