"""Domain port for datasets served from a refreshable cache."""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.services.refreshable_cache import (
    CacheLifecycle,
    RefreshState,
    Snapshot,
)


class ICachedDataset(Protocol):
    """Read-only view of a dataset cache, used for health reporting."""

    name: str

    @property
    def lifecycle(self) -> CacheLifecycle:
        """Current cache lifecycle state."""
        ...

    def snapshot(self) -> Snapshot[Any]:
        """Latest published snapshot."""
        ...

    def state(self) -> RefreshState:
        """Copy of the refresh bookkeeping."""
        ...
