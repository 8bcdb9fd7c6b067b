"""Group customer addresses into neighborhood clusters."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from ...models.domain import AddressCluster, Customer, CustomerAddress, Neighborhood
from ..geospatial import mean_center
from .enrichment import PickupEnricher
from .geocoder import AddressGeocoder
from .neighborhoods import NEIGHBORHOOD_REGISTRY, match_neighborhood

DEFAULT_REVENUE_PER_CUSTOMER = 5
DEFAULT_RECENT_WINDOW = timedelta(days=3)

_WHITESPACE = re.compile(r"\s+")


def cluster_slug(name: str) -> str:
    return _WHITESPACE.sub("_", name.lower())


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken to be UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_customer_addresses(
    customers: Iterable[Customer],
    *,
    geocoder: AddressGeocoder,
    enricher: PickupEnricher,
    now: datetime,
) -> list[CustomerAddress]:
    """Geocode every customer with a usable address; others are skipped."""

    enricher = enricher.for_run()
    addresses: list[CustomerAddress] = []
    for customer in customers:
        if not customer.address or not customer.address.strip():
            continue
        details = enricher.enrich(customer, now)
        addresses.append(
            CustomerAddress(
                customer_id=customer.id,
                username=customer.username,
                email=customer.email,
                address=customer.address,
                coordinates=geocoder.geocode(customer.address),
                subscription_type="active",
                bag_count=details.bag_count,
                last_pickup=_as_utc(details.last_pickup),
            )
        )
    return addresses


def summarize_cluster(
    name: str,
    members: Sequence[CustomerAddress],
    *,
    now: datetime,
    revenue_per_customer: int = DEFAULT_REVENUE_PER_CUSTOMER,
    recent_window: timedelta = DEFAULT_RECENT_WINDOW,
) -> AddressCluster:
    now = _as_utc(now)
    count = len(members)

    pickups = [_as_utc(member.last_pickup) for member in members if member.last_pickup is not None]
    recent = [pickup for pickup in pickups if now - pickup < recent_window]
    last_pickup_date = max(pickups) if recent else None

    return AddressCluster(
        id=cluster_slug(name),
        name=name,
        addresses=sorted(members, key=lambda member: member.address),
        centroid=mean_center(member.coordinates for member in members),
        total_customers=count,
        estimated_revenue=count * revenue_per_customer,
        status="completed" if recent else "available",
        last_pickup_date=last_pickup_date,
    )


def build_clusters(
    customers: Iterable[Customer],
    *,
    geocoder: AddressGeocoder,
    enricher: PickupEnricher,
    now: datetime,
    registry: Sequence[Neighborhood] = NEIGHBORHOOD_REGISTRY,
    revenue_per_customer: int = DEFAULT_REVENUE_PER_CUSTOMER,
    recent_window: timedelta = DEFAULT_RECENT_WINDOW,
) -> list[AddressCluster]:
    """Bucket customers by neighborhood and summarize each bucket.

    Buckets keep first-seen order, so clusters of equal size come out in the
    order their neighborhoods first appeared in ``customers``. Largest
    clusters come first.
    """

    now = _as_utc(now)
    addresses = create_customer_addresses(customers, geocoder=geocoder, enricher=enricher, now=now)
    if not addresses:
        return []

    groups: dict[str, list[CustomerAddress]] = {}
    for address in addresses:
        groups.setdefault(match_neighborhood(address.coordinates, registry), []).append(address)

    clusters = [
        summarize_cluster(
            name,
            members,
            now=now,
            revenue_per_customer=revenue_per_customer,
            recent_window=recent_window,
        )
        for name, members in groups.items()
        if members
    ]
    clusters.sort(key=lambda cluster: cluster.total_customers, reverse=True)
    return clusters
