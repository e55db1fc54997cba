from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from src.application.dtos import (
    BeachDetailsDTO,
    BeachDTO,
    ExerciseTrailDTO,
    FeatureCollectionDTO,
    parse_field_list,
    render_beaches_csv,
    render_traffic_flow_csv,
)
from src.application.dtos.ngsi_dto import BeachRecordDTO, ExerciseTrailRecordDTO
from src.application.dtos.observation_dto import AirQualityDTO, WaterQualityTemporalDTO
from src.domain.entities.air_quality import AirQuality
from src.domain.entities.errors import ConfigurationError
from src.domain.entities.geo import Point
from src.domain.entities.time_series import TimeSeriesSample
from src.domain.entities.traffic_flow import TrafficFlowSummary
from src.domain.entities.water_quality import WaterQualityObserved, WaterQualityReading
from src.shared.consts import BEACH_CSV_HEADER, TRAFFIC_FLOW_CSV_HEADER


@pytest.fixture()
def trail_dto(exercise_trail_record) -> ExerciseTrailDTO:
    trail = ExerciseTrailRecordDTO.model_validate(exercise_trail_record).to_domain()
    return ExerciseTrailDTO.from_domain(trail)


def test_parse_field_list_drops_blanks():
    assert parse_field_list(None) == []
    assert parse_field_list("name, ,length,") == ["name", "length"]


def test_projection_keeps_request_order_and_matches_case_insensitively(trail_dto):
    projected = trail_dto.project(["length", "NAME", "type", "paymentrequired"])

    assert list(projected) == ["length", "name", "type", "paymentRequired"]
    assert projected["type"] == "ExerciseTrail"
    assert projected["paymentRequired"] is False


def test_projection_rejects_unknown_fields(trail_dto):
    with pytest.raises(ConfigurationError) as exc:
        trail_dto.project(["name", "colour"])
    assert exc.value.details == {"field": "colour"}


def test_projection_skips_known_but_empty_fields(trail_dto):
    projected = trail_dto.project(["id", "dateLastPreparation"])
    assert projected == {"id": trail_dto.id}


def test_projection_replaces_location(trail_dto):
    start = {"type": "Point", "coordinates": [17.3, 62.38]}
    assert trail_dto.project(["location"], location=start) == {"location": start}


def test_feature_collection_serialises_features(trail_dto):
    feature = trail_dto.to_feature(["type", "name"], trail_dto.location)
    collection = FeatureCollectionDTO.from_features([feature])
    payload = collection.model_dump(mode="json")

    assert payload["type"] == "FeatureCollection"
    assert payload["features"][0]["geometry"]["type"] == "LineString"
    assert payload["features"][0]["properties"] == {
        "type": "ExerciseTrail",
        "name": "Motionsspår Södra berget",
    }


def _beach(beach_record, **changes):
    return BeachRecordDTO.model_validate(dict(beach_record, **changes)).to_domain()


def test_beach_dto_uses_centroid_and_waterquality_alias(beach_record):
    reading = WaterQualityReading(
        temperature=18.5,
        observed_at=datetime(2024, 6, 1, 11, tzinfo=timezone.utc),
        entity_id="urn:ngsi-ld:WaterQualityObserved:sidsjon",
    )
    beach = replace(_beach(beach_record), water_quality=reading)
    payload = BeachDTO.from_domain(beach).to_json()

    assert payload["location"] == {"type": "Point", "coordinates": [17.281, 62.3805]}
    assert payload["waterquality"]["temperature"] == 18.5
    assert payload["waterquality"]["dateObserved"] == "2024-06-01T11:00:00Z"

    details = BeachDetailsDTO.from_domain(beach).to_json()
    assert details["location"]["type"] == "MultiPolygon"
    assert len(details["waterquality"]) == 1
    assert details["seeAlso"] == ["https://badplatser.sundsvall.se/stekpannan"]


def test_beach_csv_rows(beach_record):
    beach = _beach(
        beach_record,
        description='Sandstrand med "brygga"',
        seeAlso=[
            "https://badplatsen.havochvatten.se/badplatsen/karta/#/bath/SE0712281000003473",
            "https://www.wikidata.org/wiki/Q10676283",
        ],
    )
    body = render_beaches_csv([beach], "http://broker.test")
    header, row = body.split("\r\n")

    assert header == BEACH_CSV_HEADER
    columns = row.split(";")
    assert columns[0] == beach.id
    assert columns[1] == "Stekpannan"
    assert columns[2] == "62.380500"
    assert columns[3] == "17.281000"
    assert columns[4] == "SE0712281000003473"
    assert columns[5] == "Q10676283"
    assert columns[6] == "2024-05-30"
    assert columns[7].startswith('"http://broker.test/ngsi-ld/v1/entities?type=WaterQualityObserved')
    assert "coordinates=[17.281000,62.380500]" in row
    assert row.endswith('"Sandstrand med ""brygga"""')


def test_empty_beach_csv_is_just_the_header():
    assert render_beaches_csv([], "http://broker.test") == BEACH_CSV_HEADER


def test_air_quality_dto_flattens_pollutants():
    observation = AirQuality(
        id="urn:ngsi-ld:AirQualityObserved:1",
        location=Point(latitude=62.4, longitude=17.3),
        pollutants={"NO2": 12.5, "PM10": 3.0},
    )
    payload = AirQualityDTO.from_domain(observation).to_json()

    assert payload["NO2"] == 12.5
    assert payload["PM10"] == 3.0
    assert "dateObserved" not in payload


def test_water_quality_temporal_lists_newest_first():
    latest = WaterQualityReading(
        temperature=18.5,
        observed_at=datetime(2024, 6, 1, 11, tzinfo=timezone.utc),
        source="https://example.org/sensors",
    )
    observed = WaterQualityObserved(
        id="urn:ngsi-ld:WaterQualityObserved:sidsjon",
        latest=latest,
        history=[
            TimeSeriesSample(datetime(2024, 6, 1, 8, tzinfo=timezone.utc), 17.6),
            TimeSeriesSample(datetime(2024, 6, 1, 9, tzinfo=timezone.utc), 17.9),
        ],
    )
    payload = WaterQualityTemporalDTO.from_domain(
        observed, start=datetime(2024, 6, 1, 8, 30, tzinfo=timezone.utc)
    ).to_json()

    assert [item["value"] for item in payload["temperature"]] == [18.5, 17.9]
    assert payload["temperature"][0]["observedAt"] == "2024-06-01T11:00:00Z"
    assert payload["source"] == "https://example.org/sensors"


def test_water_quality_temporal_reads_offset_less_bounds_as_utc():
    observed = WaterQualityObserved(
        id="urn:ngsi-ld:WaterQualityObserved:sidsjon",
        latest=WaterQualityReading(
            temperature=18.5, observed_at=datetime(2024, 6, 1, 11, tzinfo=timezone.utc)
        ),
        history=[
            TimeSeriesSample(datetime(2024, 6, 1, 8, tzinfo=timezone.utc), 17.6),
        ],
    )

    payload = WaterQualityTemporalDTO.from_domain(
        observed,
        start=datetime(2024, 6, 1, 7, 30),
        end=datetime(2024, 6, 1, 10, 0),
    ).to_json()

    assert [item["value"] for item in payload["temperature"]] == [17.6]


def test_traffic_flow_csv_has_one_pair_per_lane():
    summary = TrafficFlowSummary(
        date_observed=datetime(2024, 6, 1, 10, tzinfo=timezone.utc),
        road_segment="urn:ngsi-ld:RoadSegment:19312",
        intensity=(12, 0, 0, 0, 7, 0, 0, 0),
        average_speed=(52.54, 0.0, 0.0, 0.0, 48.24, 0.0, 0.0, 0.0),
    )

    lines = render_traffic_flow_csv([summary]).split("\r\n")

    assert lines[0] == TRAFFIC_FLOW_CSV_HEADER
    assert lines[1] == (
        "2024-06-01T10:00:00Z;urn:ngsi-ld:RoadSegment:19312;"
        "12;52.5;0;0.0;0;0.0;0;0.0;7;48.2;0;0.0;0;0.0;0;0.0"
    )
    assert len(lines[1].split(";")) == len(TRAFFIC_FLOW_CSV_HEADER.split(";"))


def test_empty_traffic_flow_csv_is_just_the_header():
    assert render_traffic_flow_csv([]) == TRAFFIC_FLOW_CSV_HEADER
