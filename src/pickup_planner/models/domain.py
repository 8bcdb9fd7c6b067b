"""Domain models for customers and neighborhood clusters."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional

Coordinate = tuple[float, float]
"""A (latitude, longitude) pair in decimal degrees."""

SubscriptionType = Literal["active", "inactive"]
ClusterStatus = Literal["available", "scheduled", "completed"]


@dataclass(slots=True)
class Customer:
    """A customer account as exported from the user store."""

    id: int
    username: str
    email: str
    address: Optional[str]
    role: str = "customer"
    raw: dict = field(default_factory=dict)


@dataclass(slots=True)
class CustomerAddress:
    """One customer's location snapshot, rebuilt on every clustering run."""

    customer_id: int
    username: str
    email: str
    address: str
    coordinates: Coordinate
    subscription_type: SubscriptionType = "active"
    bag_count: int = 0
    last_pickup: Optional[datetime] = None


@dataclass(slots=True)
class AddressCluster:
    """Customers grouped under one neighborhood for joint route planning."""

    id: str
    name: str
    addresses: list[CustomerAddress]
    centroid: Coordinate
    total_customers: int
    estimated_revenue: int
    status: ClusterStatus
    last_pickup_date: Optional[datetime] = None


@dataclass(slots=True)
class ClusterStats:
    total_clusters: int
    total_customers: int
    total_revenue: int
    available_clusters: int
    completed_today: int


@dataclass(frozen=True, slots=True)
class Neighborhood:
    """A named region with a center point and containment radius in miles."""

    name: str
    latitude: float
    longitude: float
    radius_miles: float

    @property
    def center(self) -> Coordinate:
        return (self.latitude, self.longitude)
