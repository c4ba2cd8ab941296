"""Route ordering and generation request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TransportMode = Literal["walking", "cycling", "driving", "public_transport"]
StrategyName = Literal["optimal", "chronological", "rating"]


class PointModel(BaseModel):
    id: str
    latitude: float
    longitude: float
    payload: Dict[str, Any] = Field(default_factory=dict)


class BuildingModel(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    city: str = ""
    year_built: Optional[int] = None
    rating: Optional[float] = None
    architectural_style: Optional[str] = None
    building_type: Optional[str] = None
    architect: Optional[str] = None
    description: Optional[str] = None


class DurationModelOverrides(BaseModel):
    walking_speed_kmh: Optional[float] = Field(None, gt=0)
    dwell_minutes_per_stop: Optional[float] = Field(None, ge=0)


class OrderRequest(BaseModel):
    points: List[PointModel]
    start: Literal["first", "centroid"] = "first"
    duration_model: Optional[DurationModelOverrides] = None


class RouteStopModel(BaseModel):
    point_id: str
    sequence: int
    latitude: float
    longitude: float
    distance_from_prev_km: float
    cumulative_distance_km: float
    title: Optional[str] = None


class RouteGeometryModel(BaseModel):
    source: Literal["osrm", "straight_line"]
    coordinates: List[List[float]]
    distance_km: float
    duration_min: float


class OrderedRouteModel(BaseModel):
    strategy: str
    total_distance_km: float
    estimated_duration_min: float
    difficulty: Literal["easy", "medium", "hard"]
    point_count: int
    stops: List[RouteStopModel]
    geometry: Optional[RouteGeometryModel] = None
    route_id: Optional[str] = Field(default=None, description="Database id when the route was persisted.")


class OrderResponse(BaseModel):
    route: OrderedRouteModel
    payloads: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class RouteGenerationRequest(BaseModel):
    city: Optional[str] = Field(
        default=None,
        description="City whose buildings are loaded from the database when no buildings are given.",
    )
    buildings: Optional[List[BuildingModel]] = None
    building_ids: Optional[List[str]] = Field(
        default=None,
        description="Restrict the candidate buildings to these ids.",
    )
    strategies: List[StrategyName] = Field(default_factory=lambda: ["optimal"])
    start: Literal["first", "centroid"] = "first"
    max_points: Optional[int] = Field(default=None, ge=2)
    transport_mode: TransportMode = "walking"
    include_geometry: bool = Field(
        default=True,
        description="Request road geometry from OSRM, falling back to straight lines.",
    )
    duration_model: Optional[DurationModelOverrides] = None
    persist: bool = False
    save_to_database: bool = False
    title: Optional[str] = Field(default=None, description="Route title used when saving to the database.")
    requested_by: Optional[str] = Field(default=None, description="User or system requesting the route.")
    tags: Optional[List[str]] = None


class RouteGenerationResponse(BaseModel):
    city: Optional[str]
    metadata: dict
    routes: List[OrderedRouteModel]
