"""Port for evaluating broker reachability and dataset freshness."""

from __future__ import annotations

from typing import Protocol

from src.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Reports the context broker status and the state of every cached dataset."""

    async def evaluate(self) -> SystemHealth:
        """Check the broker and fold in each dataset's refresh state."""
        ...
