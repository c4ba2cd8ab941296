"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

EARTH_RADIUS_KM = 6371.0


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude pair is not finite or out of range."""


def validate_coordinates(lat: float, lon: float, *, label: str | None = None) -> None:
    """Reject NaN, infinite and out-of-range coordinates."""

    where = f" for '{label}'" if label else ""
    numeric = all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in (lat, lon))
    if not numeric:
        raise InvalidCoordinateError(f"Coordinates must be numeric{where}: ({lat!r}, {lon!r})")
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinateError(f"Coordinates must be finite{where}: ({lat}, {lon})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinateError(f"Latitude {lat} out of range [-90, 90]{where}")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinateError(f"Longitude {lon} out of range [-180, 180]{where}")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def build_distance_matrix(coordinates: Sequence[tuple[float, float]]) -> list[list[float]]:
    """Return the N x N haversine matrix (km) for (lat, lon) pairs.

    Only the upper triangle is computed and mirrored, so the result is exactly
    symmetric with a zero diagonal.
    """

    n = len(coordinates)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        lat1, lon1 = coordinates[i]
        for j in range(i + 1, n):
            lat2, lon2 = coordinates[j]
            distance = haversine_km(lat1, lon1, lat2, lon2)
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix


def centroid(coordinates: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Arithmetic mean of (lat, lon) pairs. Good enough for city-scale point sets."""

    if not coordinates:
        raise ValueError("Cannot compute the centroid of an empty coordinate list.")
    lat = sum(c[0] for c in coordinates) / len(coordinates)
    lon = sum(c[1] for c in coordinates) / len(coordinates)
    return lat, lon
