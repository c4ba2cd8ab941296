import pytest

from src.archroute.models.domain import Building, Point
from src.archroute.services.routing.strategies import build_ordered_route


def _building(bid: str, lat: float, lon: float, year: int | None = None, rating: float | None = None) -> Building:
    return Building(
        building_id=bid,
        name=f"Building {bid}",
        city="Berlin",
        latitude=lat,
        longitude=lon,
        year_built=year,
        rating=rating,
    )


def _points(*buildings: Building) -> list[Point]:
    return [Point.from_building(building) for building in buildings]


def test_optimal_route_metrics_and_stops():
    points = _points(_building("A", 0, 0), _building("C", 0, 2), _building("B", 0, 1))
    route = build_ordered_route(points, "optimal", walking_speed_kmh=4.0, dwell_minutes_per_stop=20.0)

    assert route.point_ids == ["A", "B", "C"]
    assert route.total_distance_km == pytest.approx(222.4, abs=1.0)
    assert route.estimated_duration_min == pytest.approx(route.total_distance_km / 4.0 * 60 + 60)
    assert route.difficulty == "hard"

    assert [stop.sequence for stop in route.stops] == [0, 1, 2]
    assert route.stops[0].distance_from_prev_km == 0.0
    assert route.stops[-1].cumulative_distance_km == pytest.approx(route.total_distance_km)
    assert route.stops[1].title == "Building B"


def test_centroid_start():
    points = _points(_building("A", 0, 0), _building("B", 0, 1), _building("C", 0, 2))
    route = build_ordered_route(points, "optimal", start="centroid")
    assert route.point_ids[0] == "B"
    assert sorted(route.point_ids) == ["A", "B", "C"]


def test_chronological_route_orders_by_year():
    points = _points(
        _building("new", 52.52, 13.40, year=1990),
        _building("unknown", 52.51, 13.41),
        _building("old", 52.50, 13.39, year=1850),
    )
    route = build_ordered_route(points, "chronological")
    assert route.point_ids == ["unknown", "old", "new"]


def test_rating_route_orders_best_first_and_is_stable():
    points = _points(
        _building("mid", 52.52, 13.40, rating=3.5),
        _building("top1", 52.51, 13.41, rating=5.0),
        _building("unrated", 52.50, 13.39),
        _building("top2", 52.53, 13.42, rating=5.0),
    )
    route = build_ordered_route(points, "rating")
    assert route.point_ids == ["top1", "top2", "mid", "unrated"]


def test_strategies_read_dict_payloads():
    points = [
        Point(point_id="x", latitude=1.0, longitude=1.0, payload={"year_built": 1920, "title": "X"}),
        Point(point_id="y", latitude=1.0, longitude=1.1, payload={"year_built": 1900}),
    ]
    route = build_ordered_route(points, "chronological")
    assert route.point_ids == ["y", "x"]
    assert route.stops[1].title == "X"


def test_short_walk_is_easy():
    points = _points(_building("A", 52.5200, 13.4050), _building("B", 52.5210, 13.4060))
    route = build_ordered_route(points)
    assert route.difficulty == "easy"
    assert route.total_distance_km < 0.2


def test_empty_route():
    route = build_ordered_route([], "optimal", walking_speed_kmh=4.0, dwell_minutes_per_stop=20.0)
    assert route.points == []
    assert route.stops == []
    assert route.total_distance_km == 0
    assert route.estimated_duration_min == 0


def test_unknown_strategy_raises():
    with pytest.raises(ValueError, match="Unknown route strategy"):
        build_ordered_route(_points(_building("A", 0, 0)), "scenic")
