from __future__ import annotations

from datetime import datetime, timezone

from src.application.services import (
    AirQualityService,
    BeachService,
    CityworkService,
    ExerciseTrailService,
    RoadAccidentService,
    SportsFieldService,
    SportsVenueService,
    WaterQualityService,
)

GEOJSON = {"Accept": "application/geo+json"}
JSON = {"Accept": "application/json"}

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _clock():
    return NOW


def _beaches(install, fake_broker, beach_record, water_quality_record):
    fake_broker.add("WaterQualityObserved", water_quality_record)
    fake_broker.add("Beach", beach_record)
    water_quality = install(
        "water_quality_service", WaterQualityService(fake_broker, clock=_clock)
    )
    return install(
        "beach_service", BeachService(fake_broker, water_quality, clock=_clock)
    )


def test_beaches_default_to_csv(
    client, install, fake_broker, beach_record, water_quality_record
):
    _beaches(install, fake_broker, beach_record, water_quality_record)

    response = client.get("/api/beaches")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/csv; charset=utf-8"
    assert response.headers["cache-control"] == "max-age=3600"
    lines = response.text.split("\r\n")
    assert lines[0].startswith("place_id;name;latitude")
    assert lines[1].startswith(beach_record["id"] + ";Stekpannan;")
    assert "http://broker.test/ngsi-ld/v1/entities" in lines[1]


def test_beaches_as_json(client, install, fake_broker, beach_record, water_quality_record):
    _beaches(install, fake_broker, beach_record, water_quality_record)

    response = client.get("/api/beaches", headers=JSON)

    assert response.status_code == 200
    beach = response.json()["data"][0]
    assert beach["name"] == "Stekpannan"
    assert beach["location"]["type"] == "Point"
    assert beach["waterquality"]["temperature"] == 18.5


def test_beach_by_id(client, install, fake_broker, beach_record, water_quality_record):
    _beaches(install, fake_broker, beach_record, water_quality_record)

    response = client.get(f"/api/beaches/{beach_record['id']}")
    assert response.status_code == 200
    assert response.headers["cache-control"] == "max-age=600"
    assert response.json()["data"]["location"]["type"] == "MultiPolygon"

    missing = client.get("/api/beaches/urn:ngsi-ld:Beach:nope")
    assert missing.status_code == 404


def _trails(install, fake_broker, record):
    walking = dict(record, id="urn:ngsi-ld:ExerciseTrail:2", category="walking")
    fake_broker.add("ExerciseTrail", record, walking)
    return install("exercise_trail_service", ExerciseTrailService(fake_broker))


def test_exercise_trails_list_projection(client, install, fake_broker, exercise_trail_record):
    _trails(install, fake_broker, exercise_trail_record)

    response = client.get("/api/exercise-trails?categories=floodlit&fields=status")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == [
        {
            "id": exercise_trail_record["id"],
            "name": "Motionsspår Södra berget",
            "categories": ["floodlit", "ski-classic"],
            "length": 2.5,
            "status": "open",
        }
    ]


def test_exercise_trails_as_geojson(client, install, fake_broker, exercise_trail_record):
    _trails(install, fake_broker, exercise_trail_record)

    response = client.get("/api/exercise-trails", headers=GEOJSON)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/geo+json")
    assert response.headers["cache-control"] == "max-age=600"
    payload = response.json()
    assert payload["type"] == "FeatureCollection"
    assert len(payload["features"]) == 2
    feature = payload["features"][0]
    assert feature["geometry"]["type"] == "LineString"
    assert feature["properties"]["type"] == "ExerciseTrail"


def test_exercise_trails_unknown_field_is_bad_request(
    client, install, fake_broker, exercise_trail_record
):
    _trails(install, fake_broker, exercise_trail_record)

    response = client.get("/api/exercise-trails?fields=colour")
    assert response.status_code == 400


def test_exercise_trail_by_id(client, install, fake_broker, exercise_trail_record):
    _trails(install, fake_broker, exercise_trail_record)
    path = f"/api/exercise-trails/{exercise_trail_record['id']}"

    full = client.get(path).json()["data"]
    assert full["location"]["type"] == "LineString"
    assert full["areaServed"] == "Södra berget"

    feature = client.get(path, headers=GEOJSON).json()
    assert feature["type"] == "Feature"
    assert feature["id"] == exercise_trail_record["id"]

    assert client.get("/api/exercise-trails/unknown").status_code == 404


def test_sports_fields_list_uses_first_vertex(
    client, install, fake_broker, sports_field_record
):
    fake_broker.add("SportsField", sports_field_record)
    install("sports_field_service", SportsFieldService(fake_broker))

    data = client.get("/api/sportsfields").json()["data"]

    assert data[0]["categories"] == ["soccer"]
    assert data[0]["location"] == {"type": "Point", "coordinates": [17.29, 62.39]}


def test_sports_venues_filter_and_geojson(client, install, fake_broker, sports_field_record):
    venue = dict(sports_field_record, id="urn:ngsi-ld:SportsVenue:1", category=["gym"])
    fake_broker.add("SportsVenue", venue)
    install("sports_venue_service", SportsVenueService(fake_broker))

    assert client.get("/api/sportsvenues?categories=soccer").json() == {"data": []}

    payload = client.get("/api/sportsvenues", headers=GEOJSON).json()
    assert payload["features"][0]["properties"]["type"] == "SportsVenue"
    assert payload["features"][0]["geometry"]["type"] == "MultiPolygon"

    item = client.get("/api/sportsvenues/urn:ngsi-ld:SportsVenue:1").json()["data"]
    assert item["managedBy"] == "Sundsvalls kommun"


def test_road_accidents(client, install, fake_broker, road_accident_record):
    fake_broker.add("RoadAccident", road_accident_record)
    install("road_accident_service", RoadAccidentService(fake_broker))

    data = client.get("/api/roadaccidents").json()["data"]
    assert data == [
        {
            "id": road_accident_record["id"],
            "location": {"type": "Point", "coordinates": [17.31, 62.39]},
            "accidentDate": "2024-06-01T07:30:00Z",
        }
    ]

    with_status = client.get("/api/roadaccidents?fields=status").json()["data"]
    assert with_status[0]["status"] == "onGoing"

    item = client.get(f"/api/roadaccidents/{road_accident_record['id']}").json()
    assert item["data"]["description"] == "Singelolycka"


def test_cityworks(client, install, fake_broker):
    fake_broker.add(
        "CityWork",
        {
            "id": "urn:ngsi-ld:CityWork:1",
            "description": "Grävarbete",
            "location": {"type": "Point", "coordinates": [17.3, 62.4]},
            "dateCreated": "2024-05-01T06:00:00Z",
        },
    )
    install("citywork_service", CityworkService(fake_broker))

    data = client.get("/api/cityworks").json()["data"]
    assert data[0]["dateCreated"] == "2024-05-01T06:00:00Z"
    assert "description" not in data[0]

    assert client.get("/api/cityworks/urn:ngsi-ld:CityWork:2").status_code == 404


def test_air_quality(client, install, fake_broker):
    fake_broker.add(
        "AirQualityObserved",
        {
            "id": "urn:ngsi-ld:AirQualityObserved:1",
            "location": {"type": "Point", "coordinates": [17.3, 62.4]},
            "dateObserved": "2024-06-01T10:00:00Z",
            "NO2": 12.5,
        },
    )
    install("air_quality_service", AirQualityService(fake_broker))

    data = client.get("/api/airquality").json()["data"]
    assert data[0]["NO2"] == 12.5

    response = client.get("/api/airquality?fields=NO2", headers=GEOJSON)
    assert response.headers["cache-control"] == "max-age=3600"
    properties = response.json()["features"][0]["properties"]
    assert properties["type"] == "AirQualityObserved"
    assert properties["NO2"] == 12.5


def test_water_quality_near_point(client, install, fake_broker, water_quality_record):
    far = dict(
        water_quality_record,
        id="urn:ngsi-ld:WaterQualityObserved:far",
        location={"type": "Point", "coordinates": [18.0, 63.0]},
    )
    fake_broker.add("WaterQualityObserved", water_quality_record, far)
    install("water_quality_service", WaterQualityService(fake_broker, clock=_clock))

    everything = client.get("/api/waterquality").json()["data"]
    assert len(everything) == 2

    near = client.get(
        "/api/waterquality?maxDistance=500&coordinates=17.2812,62.3806"
    ).json()["data"]
    assert [item["id"] for item in near] == [water_quality_record["id"]]
    assert near[0]["location"]["type"] == "Point"

    bad = client.get("/api/waterquality?maxDistance=500&coordinates=nonsense")
    assert bad.status_code == 400


def test_water_quality_by_id_with_range(client, install, fake_broker, water_quality_record):
    fake_broker.add("WaterQualityObserved", water_quality_record)
    fake_broker.temporal[water_quality_record["id"]] = {
        "temperature": [
            {"value": 17.0, "observedAt": "2024-06-01T06:00:00Z"},
            {"value": 17.5, "observedAt": "2024-06-01T09:00:00Z"},
        ]
    }
    install("water_quality_service", WaterQualityService(fake_broker, clock=_clock))

    response = client.get(
        f"/api/waterquality/{water_quality_record['id']}",
        params={"from": "2024-06-01T08:00:00Z"},
    )

    assert response.status_code == 200
    values = [item["value"] for item in response.json()["data"]["temperature"]]
    assert values == [18.5, 17.5]
