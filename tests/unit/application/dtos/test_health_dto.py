from __future__ import annotations

from datetime import datetime, timezone

from src.application.dtos.health_dto import (
    ApplicationInfoDTO,
    DatasetStatusDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
)
from src.domain.entities.health import (
    ApplicationInfo,
    DatasetStatus,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)


def test_dependency_status_dto_from_domain() -> None:
    domain = DependencyStatus(name="context_broker", status=ServiceStatus.UP)
    dto = DependencyStatusDTO.from_domain(domain)
    assert dto.name == "context_broker"
    assert dto.status is ServiceStatus.UP


def test_dataset_status_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    domain = DatasetStatus(
        name="exercisetrails",
        status=ServiceStatus.DEGRADED,
        lifecycle="started",
        item_count=7,
        last_success_at=now,
        last_error="HTTP 503",
        refresh_count=4,
        failure_count=2,
    )

    dto = DatasetStatusDTO.from_domain(domain)

    assert dto.item_count == 7
    assert dto.status is ServiceStatus.DEGRADED
    assert dto.model_dump(mode="json")["status"] == "degraded"


def test_system_health_dto_from_domain() -> None:
    domain = SystemHealth(status=ServiceStatus.UP, dependencies=[])
    dto = SystemHealthDTO.from_domain(domain)
    assert dto.status is ServiceStatus.UP
    assert dto.dependencies == []
    assert dto.datasets == []


def test_application_info_dto_from_domain() -> None:
    now = datetime.now(timezone.utc)
    info = ApplicationInfo(
        name="Open Data Gateway",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2024-09-01",
        started_at=now,
        uptime_seconds=42.0,
        status=ServiceStatus.UP,
        dependencies=[DependencyStatus(name="context_broker", status=ServiceStatus.UP)],
        datasets=[
            DatasetStatus(name="beaches", status=ServiceStatus.UP, lifecycle="started")
        ],
        extras={"foo": "bar"},
    )

    dto = ApplicationInfoDTO.from_domain(info)
    assert dto.name == "Open Data Gateway"
    assert dto.datasets[0].name == "beaches"
    assert dto.extras == {"foo": "bar"}
