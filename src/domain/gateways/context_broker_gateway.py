"""NGSI-LD context broker gateway interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence


class IContextBrokerGateway(ABC):
    """Read-only access to entities held by an NGSI-LD context broker.

    Implementations are synchronous: they are called from cache refresh
    threads and from plain (threadpool) request handlers. Failures are
    reported as ``UpstreamError``.
    """

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Broker address, surfaced in info endpoints and CSV links."""
        raise NotImplementedError

    @abstractmethod
    def query_entities(
        self,
        entity_type: str,
        tenant: str,
        *,
        params: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        """Return every entity of ``entity_type`` in key-value form."""
        raise NotImplementedError

    @abstractmethod
    def retrieve_entity(self, entity_id: str, tenant: str) -> Optional[Dict[str, Any]]:
        """Return one entity in key-value form, or None when it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def retrieve_temporal(
        self,
        entity_id: str,
        tenant: str,
        *,
        attrs: Optional[Sequence[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        last_n: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Return the temporal evolution of an entity between two instants."""
        raise NotImplementedError
