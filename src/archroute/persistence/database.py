"""Supabase persistence for generated routes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..db.supabase import get_supabase_client
from ..services.routing.models import OrderedRoute

logger = logging.getLogger(__name__)


def _route_row(
    route: OrderedRoute,
    *,
    title: str,
    city: Optional[str],
    created_by: Optional[str],
    transport_mode: str,
    tags: list[str],
) -> dict[str, Any]:
    geometry = route.geometry
    return {
        "title": title,
        "city": city,
        "created_by": created_by,
        "route_type": transport_mode,
        "transport_mode": transport_mode,
        "difficulty_level": route.difficulty,
        "estimated_duration_minutes": round(route.estimated_duration_min),
        "distance_km": round(route.total_distance_km, 2),
        "points_count": len(route.points),
        "tags": tags,
        "route_geometry": {
            "type": "LineString",
            "coordinates": [[lon, lat] for lat, lon in geometry.coordinates],
        }
        if geometry
        else None,
        # Generated routes start private until a moderator publishes them.
        "route_visibility": "private",
        "publication_status": "draft",
        "route_source": "generated",
        "auto_generated_params": {
            "strategy": route.strategy,
            "geometry_source": geometry.source if geometry else None,
            "generation_timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


def save_route_to_database(
    route: OrderedRoute,
    *,
    title: str,
    city: Optional[str] = None,
    created_by: Optional[str] = None,
    transport_mode: str = "walking",
    tags: Optional[list[str]] = None,
) -> Optional[str]:
    """Insert ``route`` and its ordered points; return the new route id.

    Returns None when Supabase is not configured or the insert fails, so route
    generation never depends on the database being reachable.
    """
    supabase = get_supabase_client()
    if not supabase:
        logger.info("Supabase not configured - routes will only be saved to files")
        return None

    try:
        response = (
            supabase.table("routes")
            .insert(
                _route_row(
                    route,
                    title=title,
                    city=city,
                    created_by=created_by,
                    transport_mode=transport_mode,
                    tags=tags or [],
                )
            )
            .execute()
        )
        if not response.data:
            logger.error(f"Route '{title}' insert returned no data")
            return None
        route_id = str(response.data[0]["id"])
    except Exception as e:
        logger.warning(f"Failed to save route '{title}' to database: {e}")
        return None

    point_rows = [
        {
            "route_id": route_id,
            "building_id": stop.point_id,
            "order_index": stop.sequence,
            "title": stop.title or stop.point_id,
            "latitude": stop.latitude,
            "longitude": stop.longitude,
            "point_type": "building",
        }
        for stop in route.stops
    ]
    try:
        supabase.table("route_points").insert(point_rows).execute()
        logger.info(f"Saved route {route_id} with {len(point_rows)} points")
    except Exception as e:
        logger.warning(f"Failed to save points for route {route_id}: {e}")

    return route_id
