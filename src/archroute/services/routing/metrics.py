"""Distance, duration and difficulty metrics for ordered routes."""

from __future__ import annotations

from typing import Literal, Sequence

from ...config import settings
from ...models.domain import Point
from ..geospatial import haversine_km

Difficulty = Literal["easy", "medium", "hard"]


def leg_distances_km(points: Sequence[Point]) -> list[float]:
    """Distances between consecutive points; one entry per leg."""

    return [
        haversine_km(prev.latitude, prev.longitude, nxt.latitude, nxt.longitude)
        for prev, nxt in zip(points, points[1:])
    ]


def total_distance_km(points: Sequence[Point]) -> float:
    return sum(leg_distances_km(points))


def estimate_duration_minutes(
    distance_km: float,
    stop_count: int,
    *,
    walking_speed_kmh: float | None = None,
    dwell_minutes_per_stop: float | None = None,
) -> float:
    """Walking time at a constant speed plus a fixed dwell time per stop."""

    speed = walking_speed_kmh if walking_speed_kmh is not None else settings.walking_speed_kmh
    dwell = dwell_minutes_per_stop if dwell_minutes_per_stop is not None else settings.dwell_minutes_per_stop
    return (distance_km / speed) * 60.0 + stop_count * dwell


def classify_difficulty(distance_km: float, stop_count: int) -> Difficulty:
    if distance_km < 2 and stop_count <= 3:
        return "easy"
    if distance_km < 5 and stop_count <= 5:
        return "medium"
    return "hard"


def format_distance(meters: float) -> str:
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{round(meters)} m"


def format_duration(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}min"
    return f"{minutes} min"
