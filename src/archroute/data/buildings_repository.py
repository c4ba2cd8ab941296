"""Building loader backed by the Supabase ``buildings`` table."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Building
from ..services.geospatial import validate_coordinates

logger = logging.getLogger(__name__)

# Cities are stored under both their English and Russian names.
_CITY_VARIANTS: dict[str, tuple[str, ...]] = {
    "berlin": ("Berlin", "Берлин"),
    "берлин": ("Berlin", "Берлин"),
    "munich": ("Munich", "Мюнхен"),
    "мюнхен": ("Munich", "Мюнхен"),
    "hamburg": ("Hamburg", "Гамбург"),
    "гамбург": ("Hamburg", "Гамбург"),
}


def city_variants(city: str) -> list[str]:
    normalized = city.strip()
    return list(_CITY_VARIANTS.get(normalized.lower(), (normalized,)))


def _optional_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    return int(value)


def _optional_float(value: Any) -> float | None:
    if value in (None, ""):
        return None
    return float(value)


def building_from_row(row: dict[str, Any]) -> Building | None:
    """Convert a database row; rows without usable coordinates yield None."""
    latitude = _optional_float(row.get("latitude"))
    longitude = _optional_float(row.get("longitude"))
    if latitude is None or longitude is None:
        return None
    validate_coordinates(latitude, longitude, label=str(row["id"]))
    return Building(
        building_id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        city=str(row.get("city") or ""),
        latitude=latitude,
        longitude=longitude,
        year_built=_optional_int(row.get("year_built")),
        rating=_optional_float(row.get("rating")),
        architectural_style=row.get("architectural_style"),
        building_type=row.get("building_type"),
        architect=row.get("architect"),
        description=row.get("description"),
        raw=dict(row),
    )


def buildings_from_rows(rows: Iterable[dict[str, Any]]) -> list[Building]:
    buildings: list[Building] = []
    for row in rows:
        try:
            building = building_from_row(row)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping invalid building row: {e}")
            continue
        if building is not None:
            buildings.append(building)
    return buildings


def get_buildings_for_city(city: str, limit: int | None = None) -> list[Building]:
    """Load located buildings for ``city`` from Supabase.

    Raises:
        ValueError: if Supabase is not configured.
    """
    supabase = get_supabase_client()
    if not supabase:
        raise ValueError(
            "Building lookup by city requires Supabase. "
            "Set ARCHROUTE_SUPABASE_URL and ARCHROUTE_SUPABASE_KEY or pass buildings inline."
        )

    variants = city_variants(city)
    response = (
        supabase.table("buildings")
        .select("*")
        .in_("city", variants)
        .limit(limit or settings.building_query_limit)
        .execute()
    )
    buildings = buildings_from_rows(response.data or [])
    logger.info(f"Retrieved {len(buildings)} located buildings for city '{city}' (variants={variants})")
    return buildings
