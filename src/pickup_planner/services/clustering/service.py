"""High-level orchestration for address clustering requests."""

from __future__ import annotations

import functools
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import AddressCluster, ClusterStats, Customer, CustomerAddress, Neighborhood
from .builder import build_clusters
from .enrichment import PickupEnricher, RandomPickupEnricher, StaticPickupEnricher
from .geocoder import AddressGeocoder, HashGeocoder
from .neighborhoods import NEIGHBORHOOD_REGISTRY, load_registry
from .route import optimize_route
from .stats import compute_stats


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AddressClusteringService:
    """Entry point used by the admin handlers. Holds no per-request state.

    Collaborators are injected so tests can pin the geocoder, the placeholder
    pickup details and the clock.
    """

    def __init__(
        self,
        *,
        geocoder: Optional[AddressGeocoder] = None,
        enricher: Optional[PickupEnricher] = None,
        registry: Optional[Sequence[Neighborhood]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        revenue_per_customer: int = 5,
        recent_window: timedelta = timedelta(days=3),
    ) -> None:
        self.geocoder = geocoder or HashGeocoder()
        self.enricher = enricher or RandomPickupEnricher()
        self.registry = tuple(registry) if registry is not None else NEIGHBORHOOD_REGISTRY
        self.clock = clock or _utc_now
        self.revenue_per_customer = revenue_per_customer
        self.recent_window = recent_window

    def cluster_customer_addresses(self, customers: Sequence[Customer]) -> list[AddressCluster]:
        clusters = build_clusters(
            customers,
            geocoder=self.geocoder,
            enricher=self.enricher,
            now=self.clock(),
            registry=self.registry,
            revenue_per_customer=self.revenue_per_customer,
            recent_window=self.recent_window,
        )
        logging.info(
            f"Clustered {sum(c.total_customers for c in clusters)} of {len(customers)} customers "
            f"into {len(clusters)} clusters"
        )
        return clusters

    def optimize_cluster_route(self, cluster: AddressCluster) -> list[CustomerAddress]:
        return optimize_route(cluster)

    def get_cluster_stats(self, clusters: Sequence[AddressCluster]) -> ClusterStats:
        return compute_stats(clusters)

    @staticmethod
    def find_cluster(clusters: Sequence[AddressCluster], cluster_id: str) -> AddressCluster:
        for cluster in clusters:
            if cluster.id == cluster_id:
                return cluster
        raise LookupError(f"Cluster '{cluster_id}' not found.")


def _enricher_from_settings() -> PickupEnricher:
    match settings.pickup_enrichment:
        case "random":
            return RandomPickupEnricher(seed=settings.pickup_enrichment_seed)
        case "static":
            return StaticPickupEnricher(bag_count=settings.static_bag_count)
        case _:
            raise ValueError(f"Unknown pickup enrichment source '{settings.pickup_enrichment}'.")


@functools.lru_cache(maxsize=1)
def get_clustering_service() -> AddressClusteringService:
    """Build the service from settings. Cleared by tests that change settings."""

    registry = load_registry(settings.neighborhoods_file) if settings.neighborhoods_file else None
    return AddressClusteringService(
        enricher=_enricher_from_settings(),
        registry=registry,
        revenue_per_customer=settings.revenue_per_customer,
        recent_window=timedelta(days=settings.recent_pickup_window_days),
    )
