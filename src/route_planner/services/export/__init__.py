"""Export services."""

from .geojson import (
    build_route_lines,
    routes_to_geojson,
    save_geojson,
)

__all__ = [
    "build_route_lines",
    "routes_to_geojson",
    "save_geojson",
]
