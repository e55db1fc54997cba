"""Domain services: snapshot caching and time-window aggregation."""

from .refreshable_cache import (
    CacheLifecycle,
    RefreshableCache,
    RefreshState,
    Snapshot,
)
from .windowed_aggregator import WindowedAggregator, parse_functions, parse_window

__all__ = [
    "CacheLifecycle",
    "RefreshableCache",
    "RefreshState",
    "Snapshot",
    "WindowedAggregator",
    "parse_functions",
    "parse_window",
]
