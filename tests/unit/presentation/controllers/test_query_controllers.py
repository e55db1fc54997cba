from __future__ import annotations

from dependency_injector import providers

from src.application.use_cases.temperature_use_cases import (
    GetAirTemperatureSensorsUseCase,
    GetAirTemperaturesUseCase,
)
from src.application.use_cases.traffic_flow_use_cases import GetTrafficFlowsUseCase
from src.application.use_cases.weather_use_cases import (
    GetWeatherByIdUseCase,
    GetWeatherNearPointUseCase,
)

SENSOR = "se:trafikverket:temp:2207"
WEATHER_ID = "urn:ngsi-ld:WeatherObserved:2207"


def _seed_weather(fake_broker):
    fake_broker.add(
        "WeatherObserved",
        {
            "id": WEATHER_ID,
            "refDevice": SENSOR,
            "location": {"type": "Point", "coordinates": [17.3, 62.39]},
            "temperature": 3.4,
            "dateObserved": "2024-01-02T08:00:00Z",
        },
    )
    fake_broker.temporal[WEATHER_ID] = {
        "temperature": [
            {"value": 2.0, "observedAt": "2024-01-01T22:00:00Z"},
            {"value": 4.0, "observedAt": "2024-01-01T22:30:00Z"},
        ]
    }


def _override(container, fake_broker):
    container.get_air_temperatures_use_case.override(
        providers.Object(GetAirTemperaturesUseCase(fake_broker))
    )
    container.get_air_temperature_sensors_use_case.override(
        providers.Object(GetAirTemperatureSensorsUseCase(fake_broker))
    )
    container.get_weather_near_point_use_case.override(
        providers.Object(GetWeatherNearPointUseCase(fake_broker))
    )
    container.get_weather_by_id_use_case.override(
        providers.Object(GetWeatherByIdUseCase(fake_broker))
    )


def test_air_temperatures_are_not_wrapped(client, container, fake_broker):
    _seed_weather(fake_broker)
    _override(container, fake_broker)

    response = client.get(
        "/api/temperature/air",
        params={
            "sensor": SENSOR,
            "timeAt": "2024-01-01T22:00:00Z",
            "endTimeAt": "2024-01-02T00:00:00Z",
            "options": "aggregatedValues",
            "aggrMethods": "avg,max",
            "aggrPeriodDuration": "PT1H",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "sensors": [
            {
                "id": SENSOR,
                "values": [
                    {
                        "avg": 3.0,
                        "max": 4.0,
                        "from": "2024-01-01T22:00:00Z",
                        "to": "2024-01-01T23:00:00Z",
                    }
                ],
            }
        ]
    }



def test_air_temperatures_accept_offset_less_time_at(client, container, fake_broker):
    _seed_weather(fake_broker)
    _override(container, fake_broker)

    response = client.get(
        "/api/temperature/air",
        params={
            "sensor": SENSOR,
            "timeAt": "2024-01-01T22:00:00",
            "endTimeAt": "2024-01-02T00:00:00",
            "options": "aggregatedValues",
            "aggrMethods": "avg",
            "aggrPeriodDuration": "PT1H",
        },
    )

    assert response.status_code == 200
    values = response.json()["sensors"][0]["values"]
    assert values == [
        {"avg": 3.0, "from": "2024-01-01T22:00:00Z", "to": "2024-01-01T23:00:00Z"}
    ]

def test_air_temperatures_without_sensor_is_bad_request(client, container, fake_broker):
    _override(container, fake_broker)

    assert client.get("/api/temperature/air").status_code == 400


def test_air_temperatures_unsupported_period_is_bad_request(
    client, container, fake_broker
):
    _override(container, fake_broker)

    response = client.get(
        "/api/temperature/air",
        params={
            "sensor": SENSOR,
            "options": "aggregatedValues",
            "aggrMethods": "avg",
            "aggrPeriodDuration": "PT2H",
        },
    )
    assert response.status_code == 400


def test_broker_failure_is_bad_gateway(client, container, fake_broker):
    fake_broker.failing_types.add("WeatherObserved")
    _override(container, fake_broker)

    response = client.get("/api/temperature/air", params={"sensor": SENSOR})
    assert response.status_code == 502

    assert client.get("/api/weather").status_code == 502


def test_weather_near_point(client, container, fake_broker):
    _seed_weather(fake_broker)
    _override(container, fake_broker)

    response = client.get(
        "/api/weather", params={"coordinates": "17.3,62.39", "maxDistance": 100}
    )

    assert response.status_code == 200
    assert response.json()["data"][0]["id"] == WEATHER_ID
    assert fake_broker.queries[-1]["params"]["coordinates"] == "[17.300000,62.390000]"


def test_weather_by_id(client, container, fake_broker):
    _seed_weather(fake_broker)
    _override(container, fake_broker)

    response = client.get(f"/api/weather/{WEATHER_ID}", params={"aggr": "hour"})
    assert response.status_code == 200
    temperature = response.json()["data"]["temperature"]
    assert temperature["avg"] == 3.0
    assert len(temperature["values"]) == 1

    assert client.get(f"/api/weather/{WEATHER_ID}?aggr=week").status_code == 400
    assert client.get("/api/weather/urn:ngsi-ld:WeatherObserved:nope").status_code == 404


def test_air_temperature_sensors(client, container, fake_broker):
    _seed_weather(fake_broker)
    _override(container, fake_broker)

    response = client.get("/api/temperature/air/sensors")

    assert response.status_code == 200
    assert response.json() == {"data": [{"id": SENSOR}]}
    assert response.headers["cache-control"] == "max-age=3600"


def test_traffic_flow_csv(client, container, fake_broker):
    fake_broker.add(
        "TrafficFlowObserved",
        {
            "id": "urn:ngsi-ld:TrafficFlowObserved:1",
            "dateObserved": "2024-06-01T10:00:00Z",
            "laneID": 1,
            "intensity": 9,
            "averageVehicleSpeed": 61.3,
            "refRoadSegment": "urn:ngsi-ld:RoadSegment:19312",
        },
    )
    container.get_traffic_flows_use_case.override(
        providers.Object(GetTrafficFlowsUseCase(fake_broker))
    )

    response = client.get("/api/trafficflow")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    header, row = response.text.split("\r\n")
    assert header.startswith("date_observed;road_segment;L0_CNT;L0_AVG")
    assert row.startswith("2024-06-01T10:00:00Z;urn:ngsi-ld:RoadSegment:19312;0;0.0;9;61.3;")

    assert client.get("/api/trafficflow?from=2024-06-01T00:00:00Z").status_code == 400
