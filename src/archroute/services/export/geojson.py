"""GeoJSON export utilities for ordered routes."""

from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from ..routing.models import OrderedRoute


def generate_route_color(index: int) -> str:
    """Generate distinct colors for routes."""
    colors = [
        "#e0003e", "#0000c1", "#38e000", "#611cc7", "#e0af00",
        "#13aae0", "#e000a2", "#a4d819", "#00e0bb", "#3100e0",
    ]
    return colors[index % len(colors)]


def route_linestring(route: OrderedRoute) -> LineString | None:
    """Shapely LineString for the route path in (lon, lat) order.

    Uses the road geometry when present, otherwise the straight legs between
    stops. Routes with fewer than two distinct positions have no line.
    """
    if route.geometry and len(route.geometry.coordinates) >= 2:
        coordinates = route.geometry.coordinates
    else:
        coordinates = [(stop.latitude, stop.longitude) for stop in route.stops]
    if len(coordinates) < 2:
        return None
    return LineString([(lon, lat) for lat, lon in coordinates])


def route_to_features(route: OrderedRoute, index: int = 0) -> List[Dict[str, Any]]:
    color = generate_route_color(index)
    features: List[Dict[str, Any]] = []

    line = route_linestring(route)
    if line is not None:
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(line),
                "properties": {
                    "kind": "route",
                    "strategy": route.strategy,
                    "total_distance_km": round(route.total_distance_km, 2),
                    "estimated_duration_min": round(route.estimated_duration_min),
                    "difficulty": route.difficulty,
                    "geometry_source": route.geometry.source if route.geometry else "stops",
                    "stroke": color,
                },
            }
        )

    for stop in route.stops:
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(stop.longitude, stop.latitude)),
                "properties": {
                    "kind": "stop",
                    "strategy": route.strategy,
                    "point_id": stop.point_id,
                    "sequence": stop.sequence,
                    "title": stop.title,
                    "marker-color": color,
                },
            }
        )
    return features


def routes_to_feature_collection(routes: List[OrderedRoute]) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = []
    for index, route in enumerate(routes):
        features.extend(route_to_features(route, index))
    return {"type": "FeatureCollection", "features": features}
