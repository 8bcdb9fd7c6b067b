"""GeoJSON export of clusters and optimized routes."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, MultiPoint, Point, mapping

from ...models.domain import AddressCluster, CustomerAddress


def generate_cluster_color(index: int) -> str:
    """Generate distinct colors for clusters."""
    colors = [
        "#1b9e77", "#d95f02", "#7570b3", "#e7298a", "#66a61e",
        "#e6ab02", "#a6761d", "#666666", "#1f78b4", "#b2df8a",
    ]
    return colors[index % len(colors)]


def _point(address: CustomerAddress) -> Point:
    lat, lng = address.coordinates
    return Point(lng, lat)


def _feature(geometry: Any, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "Feature", "geometry": mapping(geometry), "properties": properties}


def cluster_features(
    cluster: AddressCluster,
    *,
    route: Sequence[CustomerAddress] | None = None,
    color: str | None = None,
) -> List[Dict[str, Any]]:
    """Member points, the convex hull (3+ distinct points) and the route line (2+ stops)."""

    base = {"cluster_id": cluster.id, "cluster_name": cluster.name}
    if color:
        base["color"] = color

    features: List[Dict[str, Any]] = []
    for address in cluster.addresses:
        features.append(
            _feature(
                _point(address),
                {
                    **base,
                    "kind": "customer",
                    "customer_id": address.customer_id,
                    "address": address.address,
                    "bag_count": address.bag_count,
                },
            )
        )

    points = [_point(address) for address in cluster.addresses]
    if points:
        hull = MultiPoint(points).convex_hull
        if hull.geom_type == "Polygon" and not hull.is_empty:
            features.append(
                _feature(
                    hull,
                    {
                        **base,
                        "kind": "hull",
                        "total_customers": cluster.total_customers,
                        "estimated_revenue": cluster.estimated_revenue,
                        "status": cluster.status,
                    },
                )
            )

    lat, lng = cluster.centroid
    features.append(_feature(Point(lng, lat), {**base, "kind": "centroid"}))

    if route and len(route) >= 2:
        line = LineString([(stop.coordinates[1], stop.coordinates[0]) for stop in route])
        features.append(
            _feature(
                line,
                {
                    **base,
                    "kind": "route",
                    "customer_ids": [stop.customer_id for stop in route],
                },
            )
        )
    return features


def clusters_to_geojson(
    clusters: Sequence[AddressCluster],
    routes: Dict[str, Sequence[CustomerAddress]] | None = None,
) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = []
    for index, cluster in enumerate(clusters):
        route = (routes or {}).get(cluster.id)
        features.extend(cluster_features(cluster, route=route, color=generate_cluster_color(index)))
    return {"type": "FeatureCollection", "features": features}
