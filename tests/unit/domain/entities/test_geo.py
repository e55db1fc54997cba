from __future__ import annotations

from src.domain.entities.geo import LineString, MultiPolygon, Point, distance_m


def test_centroid_skips_closing_vertex_and_rounds() -> None:
    ring = [
        [17.0, 62.0],
        [17.1, 62.0],
        [17.1, 62.1],
        [17.0, 62.1],
        [17.0, 62.0],
    ]
    polygon = MultiPolygon(coordinates=[[ring]])

    centroid = polygon.centroid()

    assert centroid == Point(latitude=62.05, longitude=17.05)


def test_centroid_of_empty_polygon_is_none() -> None:
    assert MultiPolygon().centroid() is None


def test_centroid_rounds_to_six_decimals() -> None:
    ring = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, 0.0]]

    centroid = MultiPolygon(coordinates=[[ring]]).centroid()

    assert centroid == Point(latitude=0.333333, longitude=0.333333)


def test_point_geojson_uses_lon_lat_order() -> None:
    point = Point.from_coordinates([17.3, 62.4])

    assert point.latitude == 62.4
    assert point.to_geojson() == {"type": "Point", "coordinates": [17.3, 62.4]}


def test_line_string_start() -> None:
    line = LineString(coordinates=[[17.0, 62.0], [17.5, 62.5]])

    assert line.start() == Point(latitude=62.0, longitude=17.0)
    assert LineString().start() is None


def test_distance_is_zero_for_same_point() -> None:
    point = Point(latitude=62.39, longitude=17.30)

    assert distance_m(point, point) == 0


def test_distance_between_nearby_points() -> None:
    a = Point(latitude=62.0, longitude=17.0)
    b = Point(latitude=62.001, longitude=17.0)

    # one thousandth of a degree of latitude is about 111 metres
    assert distance_m(a, b) == 111
