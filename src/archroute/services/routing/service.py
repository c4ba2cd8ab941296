"""Route ordering and generation orchestration service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

import httpx

from ...config import settings
from ...data.buildings_repository import get_buildings_for_city
from ...models.domain import Building, Point
from ...persistence.database import save_route_to_database
from ...persistence.filesystem import FileStorage
from ...schemas.routing import (
    BuildingModel,
    DurationModelOverrides,
    OrderedRouteModel,
    OrderRequest,
    OrderResponse,
    RouteGenerationRequest,
    RouteGenerationResponse,
    RouteGeometryModel,
    RouteStopModel,
)
from ..export.geojson import routes_to_feature_collection
from ..outputs.routing_formatter import generation_result_to_csv, generation_result_to_json
from .metrics import total_distance_km
from .models import OrderedRoute, RouteGenerationResult, RouteGeometry
from .osrm_client import OSRMClient, decode_polyline
from .strategies import build_ordered_route

logger = logging.getLogger(__name__)

# Average speeds (km/h) for straight-line duration estimates when no road
# geometry is available.
TRANSPORT_SPEEDS_KMH = {
    "walking": 5.0,
    "cycling": 15.0,
    "driving": 40.0,
    "public_transport": 25.0,
}


def _duration_overrides(overrides: DurationModelOverrides | None) -> dict:
    if overrides is None:
        return {}
    return {
        "walking_speed_kmh": overrides.walking_speed_kmh,
        "dwell_minutes_per_stop": overrides.dwell_minutes_per_stop,
    }


def _route_model(route: OrderedRoute, route_id: str | None = None) -> OrderedRouteModel:
    geometry = route.geometry
    return OrderedRouteModel(
        strategy=route.strategy,
        total_distance_km=round(route.total_distance_km, 2),
        estimated_duration_min=round(route.estimated_duration_min),
        difficulty=route.difficulty,
        point_count=len(route.points),
        stops=[
            RouteStopModel(
                point_id=stop.point_id,
                sequence=stop.sequence,
                latitude=stop.latitude,
                longitude=stop.longitude,
                distance_from_prev_km=round(stop.distance_from_prev_km, 3),
                cumulative_distance_km=round(stop.cumulative_distance_km, 3),
                title=stop.title,
            )
            for stop in route.stops
        ],
        geometry=RouteGeometryModel(
            source=geometry.source,
            coordinates=[[lat, lon] for lat, lon in geometry.coordinates],
            distance_km=round(geometry.distance_km, 2),
            duration_min=round(geometry.duration_min),
        )
        if geometry
        else None,
        route_id=route_id,
    )


def _ensure_unique_ids(points: Sequence[Point]) -> None:
    seen: set[str] = set()
    duplicates: list[str] = []
    for point in points:
        if point.point_id in seen and point.point_id not in duplicates:
            duplicates.append(point.point_id)
        seen.add(point.point_id)
    if duplicates:
        raise ValueError(f"Point ids must be unique; duplicated: {', '.join(duplicates)}")


def order_points(payload: OrderRequest) -> OrderResponse:
    """Order inline points with the nearest-neighbor heuristic."""
    points = [
        Point(point_id=item.id, latitude=item.latitude, longitude=item.longitude, payload=item.payload)
        for item in payload.points
    ]
    _ensure_unique_ids(points)

    route = build_ordered_route(
        points,
        "optimal",
        start=payload.start,
        **_duration_overrides(payload.duration_model),
    )
    return OrderResponse(
        route=_route_model(route),
        payloads={point.point_id: point.payload for point in route.points},
    )


def straight_line_geometry(points: Sequence[Point], transport_mode: str = "walking") -> RouteGeometry:
    distance_km = total_distance_km(points)
    speed = TRANSPORT_SPEEDS_KMH.get(transport_mode, TRANSPORT_SPEEDS_KMH["walking"])
    return RouteGeometry(
        source="straight_line",
        coordinates=[point.coordinates for point in points],
        distance_km=distance_km,
        duration_min=distance_km / speed * 60.0,
    )


def build_route_geometry(points: Sequence[Point], transport_mode: str = "walking") -> RouteGeometry:
    """Road geometry from OSRM, or straight legs when OSRM is unavailable."""
    if len(points) < 2:
        return straight_line_geometry(points, transport_mode)

    waypoints = list(points)
    if len(waypoints) > settings.max_points_per_route:
        logger.warning(
            f"Route has {len(waypoints)} points; only the first {settings.max_points_per_route} "
            f"are sent to the routing service"
        )
        waypoints = waypoints[: settings.max_points_per_route]

    try:
        osrm_client = OSRMClient()
        data = osrm_client.route([point.coordinates for point in waypoints], transport_mode)
        best = data["routes"][0]
        return RouteGeometry(
            source="osrm",
            coordinates=decode_polyline(best["geometry"]),
            distance_km=float(best["distance"]) / 1000.0,
            duration_min=float(best["duration"]) / 60.0,
        )
    except (ConnectionError, ValueError, KeyError, httpx.HTTPError) as e:
        logger.warning(f"Road geometry unavailable ({e}). Using straight-line fallback.")
        return straight_line_geometry(points, transport_mode)


def _building_from_model(model: BuildingModel) -> Building:
    return Building(
        building_id=model.id,
        name=model.name,
        city=model.city,
        latitude=model.latitude,
        longitude=model.longitude,
        year_built=model.year_built,
        rating=model.rating,
        architectural_style=model.architectural_style,
        building_type=model.building_type,
        architect=model.architect,
        description=model.description,
        raw=model.model_dump(),
    )


def _building_data_score(building: Building) -> int:
    score = 0
    if building.description:
        score += 2
    if building.architect:
        score += 2
    if building.year_built:
        score += 1
    if building.architectural_style:
        score += 1
    if building.raw.get("image_url"):
        score += 2
    if building.rating and building.rating > 0:
        score += 1
    return score


def select_buildings(buildings: Sequence[Building], max_points: int) -> list[Building]:
    """Keep the ``max_points`` best rated buildings, preferring richer records on equal rating."""
    if len(buildings) <= max_points:
        return list(buildings)
    ranked = sorted(
        buildings,
        key=lambda b: (-(b.rating or 0), -_building_data_score(b)),
    )
    return ranked[:max_points]


def _load_buildings(payload: RouteGenerationRequest) -> list[Building]:
    if payload.buildings:
        return [_building_from_model(model) for model in payload.buildings]
    if payload.city:
        return get_buildings_for_city(payload.city)
    raise ValueError("Either 'buildings' or 'city' must be provided.")


def _unique(values: Sequence[str]) -> list[str]:
    result: list[str] = []
    for value in values:
        if value not in result:
            result.append(value)
    return result


def generate_routes(payload: RouteGenerationRequest) -> RouteGenerationResponse:
    buildings = _load_buildings(payload)
    considered = len(buildings)

    if payload.building_ids:
        id_set = {bid.strip() for bid in payload.building_ids}
        buildings = [building for building in buildings if building.building_id in id_set]

    if len(buildings) < 2:
        raise ValueError(
            f"At least 2 buildings with coordinates are required to build a route; found {len(buildings)}."
        )

    max_points = payload.max_points
    if max_points is None and not payload.buildings:
        max_points = settings.default_max_points
    if max_points is not None:
        buildings = select_buildings(buildings, max_points)

    points = [Point.from_building(building) for building in buildings]
    _ensure_unique_ids(points)
    logger.info(
        f"Generating {len(payload.strategies)} route(s) over {len(points)} buildings "
        f"(city={payload.city}, mode={payload.transport_mode})"
    )

    routes: list[OrderedRoute] = []
    for strategy in _unique(payload.strategies):
        route = build_ordered_route(
            points,
            strategy,
            start=payload.start,
            **_duration_overrides(payload.duration_model),
        )
        if payload.include_geometry:
            route.geometry = build_route_geometry(route.points, payload.transport_mode)
        routes.append(route)

    metadata: dict = {
        "status": "complete",
        "transport_mode": payload.transport_mode,
        "buildings_considered": considered,
        "buildings_selected": len(points),
        "strategies": [route.strategy for route in routes],
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }
    if payload.city:
        metadata["city"] = payload.city
    if payload.requested_by:
        metadata["author"] = payload.requested_by
    tags = _unique([tag.strip() for tag in payload.tags or [] if tag.strip()])
    if tags:
        metadata["tags"] = tags

    result = RouteGenerationResult(city=payload.city, routes=routes, metadata=metadata)

    if payload.persist:
        storage = FileStorage()
        run_dir = storage.make_run_directory(prefix="routes")
        storage.write_json(run_dir / "summary.json", generation_result_to_json(result))
        storage.write_csv(run_dir / "stops.csv", generation_result_to_csv(result))
        storage.write_json(run_dir / "routes.geojson", routes_to_feature_collection(routes))
        metadata["output_dir"] = str(run_dir)
        logger.info(f"Route outputs written to {run_dir}")

    route_ids: list[str | None] = [None] * len(routes)
    if payload.save_to_database:
        for index, route in enumerate(routes):
            title = payload.title or f"{route.strategy.capitalize()} route in {payload.city or 'the city'}"
            if len(routes) > 1 and payload.title:
                title = f"{payload.title} ({route.strategy})"
            route_ids[index] = save_route_to_database(
                route,
                title=title,
                city=payload.city,
                created_by=payload.requested_by,
                transport_mode=payload.transport_mode,
                tags=tags,
            )
        metadata["saved_to_database"] = all(route_id is not None for route_id in route_ids)

    return RouteGenerationResponse(
        city=payload.city,
        metadata=metadata,
        routes=[_route_model(route, route_id) for route, route_id in zip(routes, route_ids)],
    )
