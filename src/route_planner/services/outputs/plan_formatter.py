"""Serializers for optimized plan outputs."""

from __future__ import annotations

import csv
import io

from ...schemas.optimization import OptimizedPlanModel


def optimized_plan_to_json(plan: OptimizedPlanModel) -> dict:
    return plan.model_dump(by_alias=True)


def optimized_plan_to_csv(plan: OptimizedPlanModel) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "vehicle_id",
        "sequence",
        "location_id",
        "pickup_ids",
        "delivery_ids",
        "arrival_time",
        "route_distance_m",
        "route_travel_time_s",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in plan.routes:
        for sequence, stop in enumerate(route.stops, start=1):
            writer.writerow(
                {
                    "vehicle_id": route.vehicle_id,
                    "sequence": sequence,
                    "location_id": stop.location_id,
                    "pickup_ids": ";".join(stop.pickup_ids),
                    "delivery_ids": ";".join(stop.delivery_ids),
                    "arrival_time": stop.report_for_stop.arrival_time if stop.report_for_stop else "",
                    "route_distance_m": route.report.distance,
                    "route_travel_time_s": route.report.travel_time,
                }
            )
    return buffer.getvalue()
