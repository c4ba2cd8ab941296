"""Export services."""

from .geojson import route_linestring, route_to_features, routes_to_feature_collection

__all__ = [
    "route_linestring",
    "route_to_features",
    "routes_to_feature_collection",
]
