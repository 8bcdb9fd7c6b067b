"""Convert clustering results into API models and CSV/JSON artifacts."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ...models.domain import AddressCluster, ClusterStats, CustomerAddress
from ...schemas.clusters import (
    AddressClusterModel,
    AddressClustersResponse,
    ClusterStatsModel,
    CustomerAddressModel,
    OptimizedRouteResponse,
    RouteStopModel,
)
from ..clustering.route import route_distance_miles
from ..export.links import navigation_url, route_url
from ..geospatial import distance


def customer_address_model(address: CustomerAddress) -> CustomerAddressModel:
    return CustomerAddressModel(
        customerId=address.customer_id,
        username=address.username,
        email=address.email,
        address=address.address,
        coordinates=address.coordinates,
        subscriptionType=address.subscription_type,
        bagCount=address.bag_count,
        lastPickup=address.last_pickup,
    )


def cluster_model(cluster: AddressCluster) -> AddressClusterModel:
    return AddressClusterModel(
        id=cluster.id,
        name=cluster.name,
        addresses=[customer_address_model(address) for address in cluster.addresses],
        centroid=cluster.centroid,
        totalCustomers=cluster.total_customers,
        estimatedRevenue=cluster.estimated_revenue,
        status=cluster.status,
        lastPickupDate=cluster.last_pickup_date,
    )


def stats_model(stats: ClusterStats) -> ClusterStatsModel:
    return ClusterStatsModel(
        totalClusters=stats.total_clusters,
        totalCustomers=stats.total_customers,
        totalRevenue=stats.total_revenue,
        availableClusters=stats.available_clusters,
        completedToday=stats.completed_today,
    )


def clusters_response(clusters: Sequence[AddressCluster], stats: ClusterStats) -> AddressClustersResponse:
    return AddressClustersResponse(
        clusters=[cluster_model(cluster) for cluster in clusters],
        stats=stats_model(stats),
    )


def route_response(
    cluster: AddressCluster,
    stops: Sequence[CustomerAddress],
    *,
    driver_id: int | None = None,
) -> OptimizedRouteResponse:
    stop_models: list[RouteStopModel] = []
    previous: CustomerAddress | None = None
    for sequence, stop in enumerate(stops, start=1):
        leg = distance(previous.coordinates, stop.coordinates) if previous else 0.0
        stop_models.append(
            RouteStopModel(
                sequence=sequence,
                customerId=stop.customer_id,
                username=stop.username,
                address=stop.address,
                coordinates=stop.coordinates,
                bagCount=stop.bag_count,
                distanceFromPrevMiles=round(leg, 3),
                navigationUrl=navigation_url(stop.address),
            )
        )
        previous = stop

    return OptimizedRouteResponse(
        clusterId=cluster.id,
        clusterName=cluster.name,
        driverId=driver_id,
        totalStops=len(stop_models),
        estimatedRevenue=cluster.estimated_revenue,
        totalDistanceMiles=round(route_distance_miles(stops), 3),
        stops=stop_models,
        routeUrl=route_url([stop.address for stop in stops]),
    )


def clusters_to_csv(clusters: Sequence[AddressCluster]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "customer_id",
        "username",
        "email",
        "address",
        "latitude",
        "longitude",
        "cluster_id",
        "cluster_name",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for cluster in clusters:
        for address in cluster.addresses:
            writer.writerow(
                {
                    "customer_id": address.customer_id,
                    "username": address.username,
                    "email": address.email,
                    "address": address.address,
                    "latitude": address.coordinates[0],
                    "longitude": address.coordinates[1],
                    "cluster_id": cluster.id,
                    "cluster_name": cluster.name,
                }
            )
    return buffer.getvalue()
