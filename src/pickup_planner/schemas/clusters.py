"""Pydantic request/response models for the cluster admin endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CustomerAddressModel(BaseModel):
    customerId: int
    username: str
    email: str
    address: str
    coordinates: tuple[float, float]
    subscriptionType: Literal["active", "inactive"]
    bagCount: int
    lastPickup: Optional[datetime] = None


class AddressClusterModel(BaseModel):
    id: str
    name: str
    addresses: List[CustomerAddressModel]
    centroid: tuple[float, float]
    totalCustomers: int
    estimatedRevenue: int
    status: Literal["available", "scheduled", "completed"]
    lastPickupDate: Optional[datetime] = None


class ClusterStatsModel(BaseModel):
    totalClusters: int
    totalCustomers: int
    totalRevenue: int
    availableClusters: int
    completedToday: int


class AddressClustersResponse(BaseModel):
    clusters: List[AddressClusterModel]
    stats: ClusterStatsModel


class OptimizeClusterRouteRequest(BaseModel):
    clusterId: str = Field(..., min_length=1, description="Slug of the cluster to route.")
    driverId: Optional[int] = Field(default=None, description="Driver the route is intended for.")


class RouteStopModel(BaseModel):
    sequence: int
    customerId: int
    username: str
    address: str
    coordinates: tuple[float, float]
    bagCount: int
    distanceFromPrevMiles: float
    navigationUrl: str


class OptimizedRouteResponse(BaseModel):
    clusterId: str
    clusterName: str
    driverId: Optional[int] = None
    totalStops: int
    estimatedRevenue: int
    totalDistanceMiles: float
    stops: List[RouteStopModel]
    routeUrl: Optional[str] = None


class ClusterExportResponse(BaseModel):
    runDirectory: str
    stats: ClusterStatsModel
