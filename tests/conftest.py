from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest

from src.domain.entities.errors import UpstreamError
from src.domain.gateways.context_broker_gateway import IContextBrokerGateway

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeContextBroker(IContextBrokerGateway):
    """In-memory broker keyed by entity type."""

    def __init__(self, base_url: str = "http://broker.test") -> None:
        self._base_url = base_url
        self.entities: Dict[str, List[Dict[str, Any]]] = {}
        self.temporal: Dict[str, Dict[str, Any]] = {}
        self.failing_types: set[str] = set()
        self.failing_temporal: set[str] = set()
        self.queries: List[Dict[str, Any]] = []
        self.temporal_calls: List[Dict[str, Any]] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    def add(self, entity_type: str, *records: Dict[str, Any]) -> None:
        self.entities.setdefault(entity_type, []).extend(records)

    def query_entities(
        self,
        entity_type: str,
        tenant: str,
        *,
        params: Optional[Mapping[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        self.queries.append(
            {"type": entity_type, "tenant": tenant, "params": dict(params or {})}
        )
        if entity_type in self.failing_types:
            raise UpstreamError("broker unavailable", status_code=503)
        return [dict(record) for record in self.entities.get(entity_type, [])]

    def retrieve_entity(self, entity_id: str, tenant: str) -> Optional[Dict[str, Any]]:
        for records in self.entities.values():
            for record in records:
                if record.get("id") == entity_id:
                    return dict(record)
        return None

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
        self.temporal_calls.append(
            {"id": entity_id, "attrs": attrs, "start": start, "end": end}
        )
        if entity_id in self.failing_temporal:
            raise UpstreamError("temporal query failed", status_code=500)
        return self.temporal.get(entity_id, {"id": entity_id})


@pytest.fixture()
def fake_broker() -> FakeContextBroker:
    return FakeContextBroker()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def dummy_now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture()
def beach_record() -> Dict[str, Any]:
    return {
        "id": "urn:ngsi-ld:Beach:se:sundsvall:anlaggning:283",
        "type": "Beach",
        "name": "Stekpannan",
        "description": "Liten badplats vid Sidsjön",
        "location": {
            "type": "MultiPolygon",
            "coordinates": [
                [
                    [
                        [17.2800, 62.3800],
                        [17.2820, 62.3800],
                        [17.2820, 62.3810],
                        [17.2800, 62.3810],
                        [17.2800, 62.3800],
                    ]
                ]
            ],
        },
        "seeAlso": "https://badplatser.sundsvall.se/stekpannan",
        "source": "https://example.org/beaches",
        "dateModified": {"@type": "DateTime", "@value": "2024-05-30T08:00:00Z"},
    }


@pytest.fixture()
def water_quality_record() -> Dict[str, Any]:
    return {
        "id": "urn:ngsi-ld:WaterQualityObserved:sidsjon",
        "type": "WaterQualityObserved",
        "location": {"type": "Point", "coordinates": [17.2812, 62.3806]},
        "temperature": 18.47,
        "source": "https://example.org/sensors",
        "dateObserved": {"@type": "DateTime", "@value": "2024-06-01T11:00:00Z"},
    }


@pytest.fixture()
def exercise_trail_record() -> Dict[str, Any]:
    return {
        "id": "urn:ngsi-ld:ExerciseTrail:se:sundsvall:anlaggning:1",
        "type": "ExerciseTrail",
        "name": "Motionsspår Södra berget",
        "description": "Belyst spår",
        "category": ["floodlit", "ski-classic"],
        "location": {
            "type": "LineString",
            "coordinates": [[17.30, 62.38], [17.31, 62.381], [17.32, 62.382]],
        },
        "length": 2.54,
        "difficulty": 0.333,
        "paymentRequired": "no",
        "status": "open",
        "source": "https://example.org/trails",
        "areaServed": "Södra berget",
    }


@pytest.fixture()
def sports_field_record() -> Dict[str, Any]:
    return {
        "id": "urn:ngsi-ld:SportsField:se:sundsvall:anlaggning:7",
        "type": "SportsField",
        "name": "Fotbollsplan",
        "category": "soccer",
        "location": {
            "type": "MultiPolygon",
            "coordinates": [
                [
                    [
                        [17.29, 62.39],
                        [17.30, 62.39],
                        [17.30, 62.395],
                        [17.29, 62.39],
                    ]
                ]
            ],
        },
        "publicAccess": "yes",
        "managedBy": "Sundsvalls kommun",
    }


@pytest.fixture()
def road_accident_record() -> Dict[str, Any]:
    return {
        "id": "urn:ngsi-ld:RoadAccident:1",
        "type": "RoadAccident",
        "description": "Singelolycka",
        "status": "onGoing",
        "location": {"type": "Point", "coordinates": [17.31, 62.39]},
        "accidentDate": {"@type": "DateTime", "@value": "2024-06-01T07:30:00Z"},
        "dateCreated": {"@type": "DateTime", "@value": "2024-06-01T07:45:00Z"},
    }
