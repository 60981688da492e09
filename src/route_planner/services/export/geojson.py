"""GeoJSON export of optimized routes for map overlays."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ...exceptions import IncompleteResultError
from ...schemas.optimization import OptimizedPlanModel, RouteModel


def generate_route_color(index: int) -> str:
    """Generate distinct colors for routes."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
        "#e000a2", "#e000e0", "#09e0e0", "#e0002f", "#22e000",
        "#15dde0", "#e00017", "#08e000", "#3100e0", "#e0bb0b",
    ]
    return colors[index % len(colors)]


def route_coordinates(plan: OptimizedPlanModel, route: RouteModel) -> List[List[float]]:
    """Stop positions of a route in visiting order, as [lat, lon] pairs."""
    coordinates: List[List[float]] = []
    for stop in route.stops:
        location = plan.location(stop.location_id)
        if location is None:
            raise IncompleteResultError(
                f"Stop references unknown location '{stop.location_id}'.",
                details={"plan_id": plan.id, "vehicle_id": route.vehicle_id},
            )
        coordinates.append([location.latitude, location.longitude])
    return coordinates


def build_route_lines(plan: OptimizedPlanModel) -> List[Dict[str, Any]]:
    return [
        {
            "vehicle_id": route.vehicle_id,
            "color": generate_route_color(idx),
            "coordinates": route_coordinates(plan, route),
        }
        for idx, route in enumerate(plan.routes)
    ]


def routes_to_geojson(plan: OptimizedPlanModel) -> Dict[str, Any]:
    """Convert an optimized plan to a FeatureCollection of route lines and stop points.

    GeoJSON positions are [lon, lat]; routes with fewer than two stops are
    emitted as points only.
    """
    features: List[Dict[str, Any]] = []

    for line in build_route_lines(plan):
        if len(line["coordinates"]) < 2:
            continue
        route = plan.route_for_vehicle(line["vehicle_id"])
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[lon, lat] for lat, lon in line["coordinates"]],
                },
                "properties": {
                    "kind": "route",
                    "vehicleId": line["vehicle_id"],
                    "color": line["color"],
                    "distance": route.report.distance if route else 0.0,
                    "travelTime": route.report.travel_time if route else 0.0,
                    "stopCount": len(line["coordinates"]),
                },
            }
        )

    for location in plan.locations:
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [location.longitude, location.latitude]},
                "properties": {"kind": "location", "locationId": location.id},
            }
        )

    return {"type": "FeatureCollection", "features": features}


def save_geojson(collection: Dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)
