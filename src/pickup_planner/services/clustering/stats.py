"""Dashboard totals across clusters."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import AddressCluster, ClusterStats


def compute_stats(clusters: Sequence[AddressCluster]) -> ClusterStats:
    return ClusterStats(
        total_clusters=len(clusters),
        total_customers=sum(cluster.total_customers for cluster in clusters),
        total_revenue=sum(cluster.estimated_revenue for cluster in clusters),
        available_clusters=sum(1 for cluster in clusters if cluster.status == "available"),
        completed_today=sum(1 for cluster in clusters if cluster.status == "completed"),
    )
