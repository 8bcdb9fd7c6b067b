"""Neighborhood clustering and route ordering."""

from .builder import build_clusters, create_customer_addresses
from .enrichment import PickupEnricher, RandomPickupEnricher, StaticPickupEnricher
from .geocoder import AddressGeocoder, HashGeocoder
from .neighborhoods import NEIGHBORHOOD_REGISTRY, OTHER_AREAS, match_neighborhood
from .route import optimize_route, route_distance_miles
from .service import AddressClusteringService, get_clustering_service
from .stats import compute_stats

__all__ = [
    "AddressClusteringService",
    "AddressGeocoder",
    "HashGeocoder",
    "NEIGHBORHOOD_REGISTRY",
    "OTHER_AREAS",
    "PickupEnricher",
    "RandomPickupEnricher",
    "StaticPickupEnricher",
    "build_clusters",
    "compute_stats",
    "create_customer_addresses",
    "get_clustering_service",
    "match_neighborhood",
    "optimize_route",
    "route_distance_miles",
]
