"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities.health import (
    ApplicationInfo,
    DatasetStatus,
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)

_BROKER_EXAMPLE = {
    "name": "context_broker",
    "status": "up",
    "message": "HTTP 200",
    "checked_at": "2024-09-09T12:00:00Z",
    "latency_ms": 12.5,
    "details": {"url": "http://orion-ld:1026/ngsi-ld/v1/types", "status_code": 200},
}

_DATASET_EXAMPLE = {
    "name": "beaches",
    "status": "up",
    "lifecycle": "started",
    "item_count": 42,
    "last_success_at": "2024-09-09T11:58:00Z",
    "next_refresh_at": "2024-09-09T12:03:00Z",
    "last_error": None,
    "refresh_count": 12,
    "failure_count": 0,
}


class DependencyStatusDTO(BaseModel):
    """Serializable representation of a dependency health check."""

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus = Field(description="Aggregated status for the dependency")
    message: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    checked_at: datetime = Field(description="Timestamp of the last check")
    latency_ms: Optional[float] = Field(
        default=None, description="Latency in milliseconds"
    )
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Additional metrics"
    )

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            details=status.details,
        )

    model_config = {"json_schema_extra": {"example": _BROKER_EXAMPLE}}


class DatasetStatusDTO(BaseModel):
    """Freshness of one cached dataset."""

    name: str = Field(description="Dataset name")
    status: ServiceStatus = Field(description="Cache status")
    lifecycle: str = Field(description="created, started, shutting_down or stopped")
    item_count: int = Field(description="Items in the published snapshot")
    last_success_at: Optional[datetime] = Field(
        default=None, description="Completion time of the last successful refresh"
    )
    next_refresh_at: Optional[datetime] = Field(
        default=None, description="When the next refresh is due"
    )
    last_error: Optional[str] = Field(
        default=None, description="Error of the last failed refresh, if any"
    )
    refresh_count: int = Field(default=0, description="Successful refreshes")
    failure_count: int = Field(default=0, description="Failed refreshes")

    @classmethod
    def from_domain(cls, status: DatasetStatus) -> "DatasetStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            lifecycle=status.lifecycle,
            item_count=status.item_count,
            last_success_at=status.last_success_at,
            next_refresh_at=status.next_refresh_at,
            last_error=status.last_error,
            refresh_count=status.refresh_count,
            failure_count=status.failure_count,
        )

    model_config = {"json_schema_extra": {"example": _DATASET_EXAMPLE}}


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Detailed dependency information"
    )
    datasets: List[DatasetStatusDTO] = Field(
        default_factory=list, description="Cache status per dataset"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
            datasets=[DatasetStatusDTO.from_domain(ds) for ds in health.datasets],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "dependencies": [_BROKER_EXAMPLE],
                "datasets": [_DATASET_EXAMPLE],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current deployment environment")
    git_commit: str = Field(description="Git commit hash")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    status: ServiceStatus = Field(description="Overall system status")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Dependency status snapshot"
    )
    datasets: List[DatasetStatusDTO] = Field(
        default_factory=list, description="Cache status per dataset"
    )
    extras: Dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata and diagnostic information",
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
            datasets=[DatasetStatusDTO.from_domain(ds) for ds in info.datasets],
            extras=info.extras,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Open Data Gateway",
                "description": "Cached open datasets from an NGSI-LD context broker",
                "version": "1.0.0",
                "environment": "development",
                "git_commit": "abcdef1",
                "build_time": "2024-09-09T11:30:00Z",
                "started_at": "2024-09-09T12:00:00Z",
                "uptime_seconds": 3600.5,
                "status": "up",
                "dependencies": [_BROKER_EXAMPLE],
                "datasets": [_DATASET_EXAMPLE],
                "extras": {
                    "environment": "development",
                    "context_broker": {
                        "url": "http://orion-ld:1026",
                        "tenant": "default",
                    },
                },
            }
        }
    }
