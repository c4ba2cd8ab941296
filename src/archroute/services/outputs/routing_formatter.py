"""Serializers for route generation outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import OrderedRoute, RouteGenerationResult


def ordered_route_to_json(route: OrderedRoute) -> dict:
    geometry = route.geometry
    return {
        "strategy": route.strategy,
        "total_distance_km": route.total_distance_km,
        "estimated_duration_min": route.estimated_duration_min,
        "difficulty": route.difficulty,
        "point_count": len(route.points),
        "stops": [asdict(stop) for stop in route.stops],
        "geometry": {
            "source": geometry.source,
            "distance_km": geometry.distance_km,
            "duration_min": geometry.duration_min,
            "coordinates": [list(coord) for coord in geometry.coordinates],
        }
        if geometry
        else None,
    }


def generation_result_to_json(result: RouteGenerationResult) -> dict:
    return {
        "city": result.city,
        "metadata": result.metadata,
        "routes": [ordered_route_to_json(route) for route in result.routes],
    }


def generation_result_to_csv(result: RouteGenerationResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "strategy",
        "sequence",
        "point_id",
        "title",
        "latitude",
        "longitude",
        "distance_from_prev_km",
        "cumulative_distance_km",
        "total_distance_km",
        "estimated_duration_min",
        "difficulty",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for route in result.routes:
        for stop in route.stops:
            writer.writerow(
                {
                    "strategy": route.strategy,
                    "sequence": stop.sequence,
                    "point_id": stop.point_id,
                    "title": stop.title or "",
                    "latitude": stop.latitude,
                    "longitude": stop.longitude,
                    "distance_from_prev_km": round(stop.distance_from_prev_km, 3),
                    "cumulative_distance_km": round(stop.cumulative_distance_km, 3),
                    "total_distance_km": round(route.total_distance_km, 2),
                    "estimated_duration_min": round(route.estimated_duration_min),
                    "difficulty": route.difficulty,
                }
            )
    return buffer.getvalue()
