"""Greedy nearest-neighbor ordering of route points.

The first input point is always the starting point. From there the closest
unvisited point (haversine distance) is appended until every point has been
visited. This is a heuristic with no optimality bound, which is fine for the
handful of buildings that make up a sightseeing route.
"""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Point
from ..geospatial import build_distance_matrix, centroid, haversine_km


def nearest_neighbor_order(points: Sequence[Point]) -> list[Point]:
    """Return ``points`` in greedy nearest-neighbor visiting order.

    Inputs with fewer than three points are returned in their original order.
    Ties are broken in favour of the lowest input index.
    """

    if len(points) <= 2:
        return list(points)

    distances = build_distance_matrix([point.coordinates for point in points])
    visited = [False] * len(points)
    current = 0
    visited[current] = True
    route = [points[current]]

    while len(route) < len(points):
        nearest_index = -1
        nearest_distance = float("inf")
        for index, is_visited in enumerate(visited):
            if not is_visited and distances[current][index] < nearest_distance:
                nearest_distance = distances[current][index]
                nearest_index = index

        visited[nearest_index] = True
        route.append(points[nearest_index])
        current = nearest_index

    return route


def move_central_point_first(points: Sequence[Point]) -> list[Point]:
    """Move the point closest to the centroid of ``points`` to the front.

    The remaining points keep their relative order. Used when a route should
    start in the middle of the selected area instead of at an arbitrary
    building.
    """

    if len(points) <= 2:
        return list(points)

    center_lat, center_lon = centroid([point.coordinates for point in points])
    start_index = min(
        range(len(points)),
        key=lambda i: haversine_km(center_lat, center_lon, points[i].latitude, points[i].longitude),
    )
    return [points[start_index], *points[:start_index], *points[start_index + 1 :]]
