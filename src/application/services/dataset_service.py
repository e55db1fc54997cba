"""
Dataset Services - Application Layer

A dataset service polls one entity type from the context broker, turns
the raw records into domain entities and serves them from a
``RefreshableCache``. Concrete services only declare which entity type
they read and how a record is converted.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from pydantic import ValidationError

from src.domain.entities.errors import EntityNotFoundError
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway
from src.domain.services.refreshable_cache import (
    DEFAULT_FAILURE_INTERVAL,
    DEFAULT_SUCCESS_INTERVAL,
    CacheLifecycle,
    RefreshableCache,
    RefreshState,
    Snapshot,
)
from src.shared import DEFAULT_TENANT, get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DatasetService(Generic[T]):
    """Base class for cached broker datasets."""

    name: ClassVar[str] = "dataset"
    entity_type: ClassVar[str] = ""
    not_found_error: ClassVar[Type[EntityNotFoundError]] = EntityNotFoundError

    def __init__(
        self,
        gateway: IContextBrokerGateway,
        tenant: str = DEFAULT_TENANT,
        *,
        success_interval: timedelta = DEFAULT_SUCCESS_INTERVAL,
        failure_interval: timedelta = DEFAULT_FAILURE_INTERVAL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._gateway = gateway
        self._tenant = tenant
        self._clock = clock
        self._cache: RefreshableCache[T] = RefreshableCache(
            self.name,
            self._load,
            self.key,
            success_interval=success_interval,
            failure_interval=failure_interval,
            not_found_error=self.not_found_error,
            clock=clock,
        )

    @property
    def broker(self) -> str:
        return self._gateway.base_url

    @property
    def tenant(self) -> str:
        return self._tenant

    @property
    def lifecycle(self) -> CacheLifecycle:
        return self._cache.lifecycle

    def start(self) -> bool:
        return self._cache.start()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        self._cache.shutdown(timeout)

    def get_all(self) -> Tuple[T, ...]:
        return self._cache.get_all()

    def get_by_id(self, entity_id: str) -> T:
        return self._cache.get_by_id(entity_id)

    def snapshot(self) -> Snapshot[T]:
        return self._cache.snapshot()

    def state(self) -> RefreshState:
        return self._cache.state()

    def refresh_now(self) -> int:
        return self._cache.refresh_now()

    def key(self, item: T) -> str:
        return item.id  # type: ignore[attr-defined]

    def transform(self, record: Dict[str, Any]) -> T:
        """Convert one raw broker record into a domain entity."""
        raise NotImplementedError

    def fetch(self) -> List[Dict[str, Any]]:
        return self._gateway.query_entities(self.entity_type, self._tenant)

    def _load(self) -> List[T]:
        return list(self._transform_all(self.fetch()))

    def _transform_all(self, records: Iterable[Dict[str, Any]]) -> Iterator[T]:
        skipped = 0
        for record in records:
            try:
                yield self.transform(record)
            except (ValidationError, ValueError, TypeError) as exc:
                skipped += 1
                logger.warning(
                    "dataset.record.skipped",
                    dataset=self.name,
                    entity_id=record.get("id") if isinstance(record, dict) else None,
                    error=str(exc),
                )
        if skipped:
            logger.info("dataset.refresh.partial", dataset=self.name, skipped=skipped)


class CategorisedDatasetService(DatasetService[T]):
    """Dataset whose entities carry a ``categories`` list."""

    def get_all(self, categories: Optional[Sequence[str]] = None) -> Tuple[T, ...]:
        """All items, or those matching at least one of ``categories``."""
        items = super().get_all()
        if not categories:
            return items
        wanted = set(categories)
        return tuple(
            item
            for item in items
            if wanted.intersection(item.categories)  # type: ignore[attr-defined]
        )
