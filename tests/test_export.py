from src.archroute.models.domain import Point
from src.archroute.services.export.geojson import route_linestring, routes_to_feature_collection
from src.archroute.services.routing.models import RouteGeometry
from src.archroute.services.routing.strategies import build_ordered_route


def _route():
    points = [
        Point(point_id="A", latitude=52.50, longitude=13.40, payload={"name": "Alpha"}),
        Point(point_id="B", latitude=52.51, longitude=13.41, payload={"name": "Beta"}),
    ]
    return build_ordered_route(points)


def test_linestring_uses_stops_in_lon_lat_order():
    line = route_linestring(_route())
    assert list(line.coords) == [(13.40, 52.50), (13.41, 52.51)]


def test_linestring_prefers_road_geometry():
    route = _route()
    route.geometry = RouteGeometry(
        source="osrm",
        coordinates=[(52.50, 13.40), (52.505, 13.402), (52.51, 13.41)],
        distance_km=1.4,
        duration_min=17.0,
    )
    assert len(route_linestring(route).coords) == 3


def test_single_stop_route_has_no_line():
    route = build_ordered_route([Point(point_id="A", latitude=1.0, longitude=1.0)])
    assert route_linestring(route) is None


def test_feature_collection_contains_line_and_stops():
    collection = routes_to_feature_collection([_route()])

    assert collection["type"] == "FeatureCollection"
    kinds = [feature["properties"]["kind"] for feature in collection["features"]]
    assert kinds == ["route", "stop", "stop"]
    line = collection["features"][0]
    assert line["geometry"]["type"] == "LineString"
    assert line["properties"]["geometry_source"] == "stops"
    first_stop = collection["features"][1]
    assert first_stop["geometry"]["type"] == "Point"
    assert first_stop["properties"]["title"] == "Alpha"
    assert first_stop["properties"]["sequence"] == 0
