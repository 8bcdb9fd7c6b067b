"""Address geocoding for the clustering engine.

Only a placeholder geocoder ships here. ``HashGeocoder`` turns an address into
a stable coordinate inside the Philadelphia metro box by hashing its text; the
result has no relation to where the address actually is. A production
deployment should plug in an ``AddressGeocoder`` backed by a real geocoding
service, with its own timeout and retry policy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models.domain import Coordinate

LAT_ORIGIN = 39.8
LAT_STEPS = 400
LNG_ORIGIN = -75.8
LNG_STEPS = 900
STEP_DEGREES = 1000


class AddressGeocoder(ABC):
    """Contract for turning a free-text address into (lat, lng)."""

    @abstractmethod
    def geocode(self, address: str) -> Coordinate:
        raise NotImplementedError


def address_hash(address: str) -> int:
    """Signed 32-bit rolling hash (``h * 31 + c``) over UTF-16 code units."""

    encoded = address.encode("utf-16-le", "surrogatepass")
    value = 0
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        value = (value * 31 + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class HashGeocoder(AddressGeocoder):
    """Deterministic stand-in geocoder. Distinct addresses may collide."""

    def geocode(self, address: str) -> Coordinate:
        magnitude = abs(address_hash(address))
        lat = LAT_ORIGIN + (magnitude % LAT_STEPS) / STEP_DEGREES
        lng = LNG_ORIGIN + (magnitude % LNG_STEPS) / STEP_DEGREES
        return (lat, lng)
