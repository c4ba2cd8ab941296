"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...models.domain import Point


@dataclass(slots=True)
class RouteStop:
    point_id: str
    sequence: int
    latitude: float
    longitude: float
    distance_from_prev_km: float
    cumulative_distance_km: float
    title: Optional[str] = None


@dataclass(slots=True)
class RouteGeometry:
    """Path between consecutive stops, either road-following or straight."""

    source: str
    coordinates: List[tuple[float, float]]
    distance_km: float
    duration_min: float


@dataclass(slots=True)
class OrderedRoute:
    """A visiting order over a point set with its derived metrics."""

    strategy: str
    points: List[Point]
    total_distance_km: float
    estimated_duration_min: float
    difficulty: str
    stops: List[RouteStop]
    geometry: Optional[RouteGeometry] = None

    @property
    def point_ids(self) -> list[str]:
        return [point.point_id for point in self.points]


@dataclass(slots=True)
class RouteGenerationResult:
    city: Optional[str]
    routes: List[OrderedRoute]
    metadata: dict = field(default_factory=dict)
