"""Route ordering strategies and conversion into ordered routes."""

from __future__ import annotations

from typing import Callable, Literal, Sequence

from ...models.domain import Point
from .metrics import classify_difficulty, estimate_duration_minutes, leg_distances_km
from .models import OrderedRoute, RouteStop
from .ordering import move_central_point_first, nearest_neighbor_order

StrategyName = Literal["optimal", "chronological", "rating"]
StartMode = Literal["first", "centroid"]


def _payload_attr(point: Point, name: str) -> float:
    value = getattr(point.payload, name, None)
    if value is None and isinstance(point.payload, dict):
        value = point.payload.get(name)
    return value or 0


def optimal_order(points: Sequence[Point], start: StartMode = "first") -> list[Point]:
    if start == "centroid":
        points = move_central_point_first(points)
    return nearest_neighbor_order(points)


def chronological_order(points: Sequence[Point], start: StartMode = "first") -> list[Point]:
    """Oldest building first; buildings without a year sort as year 0."""
    return sorted(points, key=lambda point: _payload_attr(point, "year_built"))


def rating_order(points: Sequence[Point], start: StartMode = "first") -> list[Point]:
    """Best rated first; unrated buildings sort as 0."""
    return sorted(points, key=lambda point: _payload_attr(point, "rating"), reverse=True)


STRATEGIES: dict[str, Callable[..., list[Point]]] = {
    "optimal": optimal_order,
    "chronological": chronological_order,
    "rating": rating_order,
}


def _title(point: Point) -> str | None:
    name = getattr(point.payload, "name", None)
    if name is None and isinstance(point.payload, dict):
        name = point.payload.get("name") or point.payload.get("title")
    return name


def build_ordered_route(
    points: Sequence[Point],
    strategy: str = "optimal",
    *,
    start: StartMode = "first",
    walking_speed_kmh: float | None = None,
    dwell_minutes_per_stop: float | None = None,
) -> OrderedRoute:
    """Order ``points`` with the named strategy and compute route metrics."""

    try:
        order = STRATEGIES[strategy]
    except KeyError as exc:
        raise ValueError(
            f"Unknown route strategy '{strategy}'. Expected one of: {', '.join(STRATEGIES)}"
        ) from exc

    ordered = order(points, start=start)
    legs = leg_distances_km(ordered)
    total_distance = sum(legs)

    stops: list[RouteStop] = []
    cumulative = 0.0
    for sequence, point in enumerate(ordered):
        leg = legs[sequence - 1] if sequence > 0 else 0.0
        cumulative += leg
        stops.append(
            RouteStop(
                point_id=point.point_id,
                sequence=sequence,
                latitude=point.latitude,
                longitude=point.longitude,
                distance_from_prev_km=leg,
                cumulative_distance_km=cumulative,
                title=_title(point),
            )
        )

    return OrderedRoute(
        strategy=strategy,
        points=ordered,
        total_distance_km=total_distance,
        estimated_duration_min=estimate_duration_minutes(
            total_distance,
            len(ordered),
            walking_speed_kmh=walking_speed_kmh,
            dwell_minutes_per_stop=dwell_minutes_per_stop,
        ),
        difficulty=classify_difficulty(total_distance, len(ordered)),
        stops=stops,
    )
