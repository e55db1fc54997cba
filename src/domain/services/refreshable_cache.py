"""
Periodically refreshed snapshot cache - Domain Layer

A ``RefreshableCache`` owns one background thread that pulls fresh data
through a caller-supplied function and publishes it as an immutable
``Snapshot``. Readers only ever copy the current snapshot reference, so a
slow or failing upstream never blocks them and never hands them a half
built result.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import (
    Callable,
    Generic,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from src.domain.entities.errors import EntityNotFoundError
from src.shared import get_logger

T = TypeVar("T")

DEFAULT_SUCCESS_INTERVAL = timedelta(minutes=5)
DEFAULT_FAILURE_INTERVAL = timedelta(seconds=10)

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheLifecycle(str, Enum):
    CREATED = "created"
    STARTED = "started"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Items and id index produced by one refresh. Never mutated."""

    items: Tuple[T, ...] = ()
    index: Mapping[str, T] = field(default_factory=lambda: MappingProxyType({}))
    published_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True, slots=True)
class RefreshState:
    """Retry bookkeeping. Returned to readers as an immutable copy."""

    next_refresh_at: datetime
    running: bool = False
    last_success_at: Optional[datetime] = None
    last_error: Optional[Exception] = None
    refresh_count: int = 0
    failure_count: int = 0


class RefreshableCache(Generic[T]):
    """Thread-backed cache with success/failure refresh cadence."""

    def __init__(
        self,
        name: str,
        refresh_fn: Callable[[], Iterable[T]],
        key_fn: Callable[[T], str],
        *,
        success_interval: timedelta = DEFAULT_SUCCESS_INTERVAL,
        failure_interval: timedelta = DEFAULT_FAILURE_INTERVAL,
        not_found_error: Type[EntityNotFoundError] = EntityNotFoundError,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._name = name
        self._refresh_fn = refresh_fn
        self._key_fn = key_fn
        self._success_interval = success_interval
        self._failure_interval = failure_interval
        self._not_found_error = not_found_error
        self._clock = clock

        # Guards snapshot, state and lifecycle. Never held while refreshing.
        self._lock = threading.Lock()
        # Serialises refresh cycles between the loop and refresh_now().
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self._snapshot: Snapshot[T] = Snapshot()
        self._state = RefreshState(next_refresh_at=clock())
        self._lifecycle = CacheLifecycle.CREATED

    @property
    def name(self) -> str:
        return self._name

    @property
    def lifecycle(self) -> CacheLifecycle:
        with self._lock:
            return self._lifecycle

    def start(self) -> bool:
        """Launch the refresh loop. Returns False if it was already started."""

        with self._lock:
            if self._lifecycle is not CacheLifecycle.CREATED:
                logger.error(
                    "cache.start.duplicate",
                    cache=self._name,
                    lifecycle=self._lifecycle.value,
                )
                return False
            self._lifecycle = CacheLifecycle.STARTED
            self._state = replace(
                self._state, running=True, next_refresh_at=self._clock()
            )
            self._thread = threading.Thread(
                target=self._run, name=f"{self._name}-refresh", daemon=True
            )
            # Started under the lock so shutdown() never sees an unstarted thread.
            self._thread.start()

        logger.info("cache.started", cache=self._name)
        return True

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to stop and wait for it to exit.

        A refresh already in flight is allowed to finish first.
        """
        with self._lock:
            thread = self._thread
            if self._lifecycle is CacheLifecycle.STARTED:
                self._lifecycle = CacheLifecycle.SHUTTING_DOWN
            elif self._lifecycle is CacheLifecycle.CREATED:
                self._lifecycle = CacheLifecycle.STOPPED

        self._stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("cache.shutdown.timeout", cache=self._name)
                return

        with self._lock:
            self._lifecycle = CacheLifecycle.STOPPED
            self._state = replace(self._state, running=False)

    def snapshot(self) -> Snapshot[T]:
        with self._lock:
            return self._snapshot

    def get_all(self) -> Tuple[T, ...]:
        return self.snapshot().items

    def get_by_id(self, entity_id: str) -> T:
        snapshot = self.snapshot()
        try:
            return snapshot.index[entity_id]
        except KeyError:
            raise self._not_found_error(
                entity_id, cache_ready=snapshot.published_at is not None
            ) from None

    def state(self) -> RefreshState:
        with self._lock:
            return self._state

    def refresh_now(self) -> int:
        """Run one refresh synchronously and return the published item count.

        Errors are recorded like background failures and then re-raised.
        """
        return self._refresh_cycle(raise_errors=True)

    def seconds_until_refresh(self) -> float:
        with self._lock:
            due = self._state.next_refresh_at
        return (due - self._clock()).total_seconds()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            delay = self.seconds_until_refresh()
            if delay > 0:
                self._stop_event.wait(delay)
                continue
            self._refresh_cycle(raise_errors=False)

        with self._lock:
            self._lifecycle = CacheLifecycle.STOPPED
            self._state = replace(self._state, running=False)
        logger.info("cache.loop.exited", cache=self._name)

    def _refresh_cycle(self, *, raise_errors: bool) -> int:
        with self._refresh_lock:
            try:
                snapshot = self._build_snapshot(self._refresh_fn())
            except Exception as exc:
                self._record_failure(exc)
                if raise_errors:
                    raise
                return 0

            self._publish(snapshot)
            return len(snapshot.items)

    def _build_snapshot(self, records: Iterable[T]) -> Snapshot[T]:
        items = tuple(records)
        index = {self._key_fn(item): item for item in items}
        return Snapshot(
            items=items,
            index=MappingProxyType(index),
            published_at=self._clock(),
        )

    def _publish(self, snapshot: Snapshot[T]) -> None:
        now = self._clock()
        with self._lock:
            self._snapshot = snapshot
            self._state = replace(
                self._state,
                last_success_at=now,
                last_error=None,
                next_refresh_at=now + self._success_interval,
                refresh_count=self._state.refresh_count + 1,
            )

        logger.info(
            "cache.refresh.succeeded",
            cache=self._name,
            count=len(snapshot.items),
        )

    def _record_failure(self, exc: Exception) -> None:
        now = self._clock()
        with self._lock:
            self._state = replace(
                self._state,
                last_error=exc,
                next_refresh_at=now + self._failure_interval,
                failure_count=self._state.failure_count + 1,
            )

        logger.error(
            "cache.refresh.failed",
            cache=self._name,
            error=str(exc),
            retry_in_seconds=self._failure_interval.total_seconds(),
        )
