"""Deep links into external map applications."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched besides alphanumerics.
_UNRESERVED = "-_.!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_UNRESERVED)


def navigation_url(address: str) -> str:
    """Turn-by-turn directions to a single stop."""
    return f"https://maps.google.com/maps?daddr={encode_component(address)}"


def search_url(address: str) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={encode_component(address)}"


def route_url(addresses: Sequence[str]) -> str | None:
    """Multi-stop directions through the addresses in order."""
    if not addresses:
        return None
    return "https://www.google.com/maps/dir/" + "/".join(encode_component(address) for address in addresses)
