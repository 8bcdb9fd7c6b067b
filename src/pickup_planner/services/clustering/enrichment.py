"""Placeholder pickup details attached to each customer address.

The user store does not yet expose bag counts or pickup history, so the
clustering run asks a ``PickupEnricher`` for them. The random source mirrors
the demo data the admin dashboard was built against; the static source gives
reproducible output.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ...models.domain import Customer

MIN_BAGS = 2
MAX_BAGS = 5
PICKUP_LOOKBACK = timedelta(days=7)


@dataclass(slots=True)
class PickupDetails:
    bag_count: int
    last_pickup: Optional[datetime]


class PickupEnricher(ABC):
    def for_run(self) -> PickupEnricher:
        """Enricher to use for one clustering run."""
        return self

    @abstractmethod
    def enrich(self, customer: Customer, now: datetime) -> PickupDetails:
        raise NotImplementedError


class RandomPickupEnricher(PickupEnricher):
    """Bag count uniform in 2..5, last pickup uniform over the past week.

    With a seed, every run restarts from that seed, so the same roster gets the
    same details on every request.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def for_run(self) -> PickupEnricher:
        if self.seed is None:
            return self
        return RandomPickupEnricher(self.seed)

    def enrich(self, customer: Customer, now: datetime) -> PickupDetails:
        bag_count = self._random.randint(MIN_BAGS, MAX_BAGS)
        last_pickup = now - self._random.random() * PICKUP_LOOKBACK
        return PickupDetails(bag_count=bag_count, last_pickup=last_pickup)


class StaticPickupEnricher(PickupEnricher):
    def __init__(self, bag_count: int = 3, last_pickup: Optional[datetime] = None) -> None:
        self.bag_count = bag_count
        self.last_pickup = last_pickup

    def enrich(self, customer: Customer, now: datetime) -> PickupDetails:
        return PickupDetails(bag_count=self.bag_count, last_pickup=self.last_pickup)
