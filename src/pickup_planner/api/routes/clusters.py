"""Admin endpoints for neighborhood clusters and cluster routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.customers_repository import load_customers
from ...schemas.clusters import (
    AddressClustersResponse,
    ClusterExportResponse,
    ClusterStatsModel,
    OptimizeClusterRouteRequest,
    OptimizedRouteResponse,
)
from ...services.clustering.service import get_clustering_service
from ...services.export.geojson import cluster_features
from ...services.outputs.formatter import clusters_response, route_response, stats_model
from ...services.outputs.runs import save_cluster_run

router = APIRouter(prefix="/admin", tags=["clusters"])


def _current_clusters():
    try:
        customers = load_customers()
    except (FileNotFoundError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return get_clustering_service().cluster_customer_addresses(customers)


@router.get("/address-clusters", response_model=AddressClustersResponse, status_code=status.HTTP_200_OK)
def list_address_clusters() -> AddressClustersResponse:
    try:
        clusters = _current_clusters()
        stats = get_clustering_service().get_cluster_stats(clusters)
        return clusters_response(clusters, stats)
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error clustering customer addresses: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to cluster addresses: {str(exc)}",
        ) from exc


@router.get("/cluster-stats", response_model=ClusterStatsModel, status_code=status.HTTP_200_OK)
def get_cluster_stats() -> ClusterStatsModel:
    try:
        clusters = _current_clusters()
        return stats_model(get_clustering_service().get_cluster_stats(clusters))
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error computing cluster stats: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute cluster stats: {str(exc)}",
        ) from exc


@router.post("/optimize-cluster-route", response_model=OptimizedRouteResponse, status_code=status.HTTP_200_OK)
def optimize_cluster_route(payload: OptimizeClusterRouteRequest) -> OptimizedRouteResponse:
    service = get_clustering_service()
    try:
        cluster = service.find_cluster(_current_clusters(), payload.clusterId)
        stops = service.optimize_cluster_route(cluster)
        return route_response(cluster, stops, driver_id=payload.driverId)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error optimizing cluster route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize cluster route: {str(exc)}",
        ) from exc


@router.get("/address-clusters/{cluster_id}/geojson", status_code=status.HTTP_200_OK)
def get_cluster_geojson(cluster_id: str) -> dict:
    service = get_clustering_service()
    try:
        cluster = service.find_cluster(_current_clusters(), cluster_id)
        route = service.optimize_cluster_route(cluster)
        return {"type": "FeatureCollection", "features": cluster_features(cluster, route=route)}
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error exporting cluster GeoJSON: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export cluster: {str(exc)}",
        ) from exc


@router.post("/address-clusters/export", response_model=ClusterExportResponse, status_code=status.HTTP_200_OK)
def export_address_clusters() -> ClusterExportResponse:
    try:
        clusters = _current_clusters()
        stats = get_clustering_service().get_cluster_stats(clusters)
        run_dir = save_cluster_run(clusters, stats)
        return ClusterExportResponse(runDirectory=run_dir.name, stats=stats_model(stats))
    except HTTPException:
        raise
    except Exception as exc:
        logging.exception(f"Error exporting clusters: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export clusters: {str(exc)}",
        ) from exc
