"""Persist clustering runs to the data directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from ...models.domain import AddressCluster, ClusterStats
from ...persistence.filesystem import FileStorage
from ..clustering.route import optimize_route
from ..export.geojson import clusters_to_geojson
from .formatter import clusters_response, clusters_to_csv


def save_cluster_run(
    clusters: Sequence[AddressCluster],
    stats: ClusterStats,
    *,
    storage: FileStorage | None = None,
) -> Path:
    """Write summary.json, assignments.csv and clusters.geojson into a new run directory."""

    storage = storage or FileStorage()
    run_dir = storage.make_run_directory(prefix="clusters")

    storage.write_json(run_dir / "summary.json", clusters_response(clusters, stats).model_dump(mode="json"))
    storage.write_csv(run_dir / "assignments.csv", clusters_to_csv(clusters))

    routes = {cluster.id: optimize_route(cluster) for cluster in clusters}
    storage.write_json(run_dir / "clusters.geojson", clusters_to_geojson(clusters, routes))

    logging.info(f"Saved clustering run with {len(clusters)} clusters to {run_dir}")
    return run_dir
