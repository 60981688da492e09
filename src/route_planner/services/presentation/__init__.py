"""Presentation helpers for planning results."""

from .formatting import format_arrival_time, format_meters_to_kilometers, format_seconds_to_hhmm
from .map import map_configuration
from .report import build_route_details, compute_kpis, wrap_vehicle_index

__all__ = [
    "build_route_details",
    "compute_kpis",
    "wrap_vehicle_index",
    "map_configuration",
    "format_arrival_time",
    "format_meters_to_kilometers",
    "format_seconds_to_hhmm",
]
