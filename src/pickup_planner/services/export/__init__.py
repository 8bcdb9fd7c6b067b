"""Export services."""

from .geojson import cluster_features, clusters_to_geojson
from .links import navigation_url, route_url, search_url

__all__ = [
    "cluster_features",
    "clusters_to_geojson",
    "navigation_url",
    "route_url",
    "search_url",
]
