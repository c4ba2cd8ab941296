"""Domain models for buildings and route points."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..services.geospatial import validate_coordinates


@dataclass(slots=True)
class Building:
    """Represents an architectural object that can be visited on a route."""

    building_id: str
    name: str
    city: str
    latitude: float
    longitude: float
    year_built: Optional[int] = None
    rating: Optional[float] = None
    architectural_style: Optional[str] = None
    building_type: Optional[str] = None
    architect: Optional[str] = None
    description: Optional[str] = None
    raw: dict = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Point:
    """A geographic stop on a route.

    Coordinates are validated on construction so every point that reaches the
    ordering code is finite and within range. The payload (usually a
    :class:`Building`) is carried along untouched and ignored by equality.
    """

    point_id: str
    latitude: float
    longitude: float
    payload: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        validate_coordinates(self.latitude, self.longitude, label=self.point_id)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    @classmethod
    def from_building(cls, building: Building) -> "Point":
        return cls(
            point_id=building.building_id,
            latitude=building.latitude,
            longitude=building.longitude,
            payload=building,
        )
