import json
from pathlib import Path

from pickup_planner.models.domain import AddressCluster, ClusterStats, CustomerAddress
from pickup_planner.persistence.filesystem import FileStorage
from pickup_planner.services.export.geojson import cluster_features, clusters_to_geojson
from pickup_planner.services.export.links import navigation_url, route_url, search_url
from pickup_planner.services.outputs.formatter import clusters_to_csv, route_response
from pickup_planner.services.outputs.runs import save_cluster_run


def _stop(cid: int, address: str, lat: float, lng: float) -> CustomerAddress:
    return CustomerAddress(
        customer_id=cid,
        username=f"user{cid}",
        email=f"user{cid}@example.com",
        address=address,
        coordinates=(lat, lng),
        bag_count=2,
    )


def _cluster(stops: list[CustomerAddress], name: str = "Center City Philadelphia") -> AddressCluster:
    count = len(stops)
    return AddressCluster(
        id=name.lower().replace(" ", "_"),
        name=name,
        addresses=stops,
        centroid=(
            sum(s.coordinates[0] for s in stops) / count,
            sum(s.coordinates[1] for s in stops) / count,
        ),
        total_customers=count,
        estimated_revenue=count * 5,
        status="available",
    )


TRIANGLE = [
    _stop(1, "1 Arch St", 39.95, -75.16),
    _stop(2, "2 Race St", 39.96, -75.15),
    _stop(3, "3 Vine St", 39.94, -75.14),
]


def test_map_links_encode_like_encode_uri_component():
    assert navigation_url("1234 Market St, Philadelphia") == (
        "https://maps.google.com/maps?daddr=1234%20Market%20St%2C%20Philadelphia"
    )
    assert search_url("St. Mary's (Rear) #2") == (
        "https://www.google.com/maps/search/?api=1&query=St.%20Mary's%20(Rear)%20%232"
    )
    assert route_url([]) is None
    assert route_url(["A St", "B/C Ave"]) == "https://www.google.com/maps/dir/A%20St/B%2FC%20Ave"


def test_cluster_features_include_hull_and_route():
    cluster = _cluster(TRIANGLE)

    features = cluster_features(cluster, route=[TRIANGLE[1], TRIANGLE[0], TRIANGLE[2]])

    kinds = [feature["properties"]["kind"] for feature in features]
    assert kinds.count("customer") == 3
    assert "hull" in kinds and "centroid" in kinds and "route" in kinds

    customer = features[0]
    assert customer["geometry"]["type"] == "Point"
    assert list(customer["geometry"]["coordinates"]) == [-75.16, 39.95]

    route = next(f for f in features if f["properties"]["kind"] == "route")
    assert route["geometry"]["type"] == "LineString"
    assert route["properties"]["customer_ids"] == [2, 1, 3]


def test_cluster_features_skip_hull_for_collinear_points():
    cluster = _cluster(TRIANGLE[:2])

    kinds = [feature["properties"]["kind"] for feature in cluster_features(cluster)]

    assert "hull" not in kinds
    assert "route" not in kinds


def test_clusters_to_geojson_is_serializable():
    collection = clusters_to_geojson([_cluster(TRIANGLE)])

    assert collection["type"] == "FeatureCollection"
    assert json.loads(json.dumps(collection))["features"]


def test_route_response_numbers_stops_and_sums_legs():
    cluster = _cluster(TRIANGLE)

    response = route_response(cluster, TRIANGLE, driver_id=9)

    assert response.totalStops == 3
    assert response.driverId == 9
    assert response.estimatedRevenue == 15
    assert [stop.sequence for stop in response.stops] == [1, 2, 3]
    assert response.stops[0].distanceFromPrevMiles == 0
    assert response.totalDistanceMiles > 0
    assert response.stops[0].navigationUrl.endswith("1%20Arch%20St")
    assert response.routeUrl.startswith("https://www.google.com/maps/dir/1%20Arch%20St/")


def test_clusters_to_csv_has_one_row_per_customer():
    content = clusters_to_csv([_cluster(TRIANGLE)])

    lines = content.strip().split("\n")
    assert lines[0] == "customer_id,username,email,address,latitude,longitude,cluster_id,cluster_name"
    assert len(lines) == 4
    assert lines[1].startswith("1,user1,user1@example.com,1 Arch St,39.95,-75.16,center_city_philadelphia,")


def test_file_storage_creates_distinct_run_directories(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    first = storage.make_run_directory(prefix="clusters_test")
    second = storage.make_run_directory(prefix="clusters_test")

    assert first.is_dir() and second.is_dir()
    assert first != second
    assert first.parent == tmp_path / "outputs"


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="clusters_test")

    storage.write_json(run_dir / "summary.json", {"hello": "world"})
    storage.write_csv(run_dir / "assignments.csv", "a,b\n1,2\n")

    assert (run_dir / "summary.json").read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert (run_dir / "assignments.csv").read_text(encoding="utf-8") == "a,b\n1,2\n"


def test_save_cluster_run_writes_artifacts(tmp_path: Path):
    clusters = [_cluster(TRIANGLE)]
    stats = ClusterStats(
        total_clusters=1, total_customers=3, total_revenue=15, available_clusters=1, completed_today=0
    )

    run_dir = save_cluster_run(clusters, stats, storage=FileStorage(root=tmp_path))

    summary = json.loads((run_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["stats"]["totalRevenue"] == 15
    assert summary["clusters"][0]["id"] == "center_city_philadelphia"
    assert (run_dir / "assignments.csv").read_text(encoding="utf-8").startswith("customer_id")
    geojson = json.loads((run_dir / "clusters.geojson").read_text(encoding="utf-8"))
    assert any(f["properties"]["kind"] == "route" for f in geojson["features"])
