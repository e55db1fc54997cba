"""
Health domain entities.

Value objects describing the reachability of the context broker and the
freshness of every cached dataset, as reported by /health and /info.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    """High-level availability for a dependency, a dataset or the system."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class DependencyStatus:
    """Health status for a single external dependency."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class DatasetStatus:
    """Freshness of one cached dataset.

    ``UNKNOWN`` while the first refresh is pending, ``UP`` after a
    successful refresh, ``DEGRADED`` when serving stale data after a
    failure and ``DOWN`` when nothing was ever loaded and refreshes fail.
    """

    name: str
    status: ServiceStatus
    lifecycle: str
    item_count: int = 0
    last_success_at: Optional[datetime] = None
    next_refresh_at: Optional[datetime] = None
    last_error: Optional[str] = None
    refresh_count: int = 0
    failure_count: int = 0


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the application."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)
    datasets: List[DatasetStatus] = field(default_factory=list)


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)
    datasets: List[DatasetStatus] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
