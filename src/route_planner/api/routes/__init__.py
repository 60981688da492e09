"""Route group exports."""

from . import health, locations, optimization, transports

__all__ = ["health", "locations", "transports", "optimization"]
