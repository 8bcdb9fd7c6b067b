"""Route group exports."""

from . import clusters, health

__all__ = ["clusters", "health"]
