"""Route detail tables and KPI aggregation for an optimized plan."""

from __future__ import annotations

from ...exceptions import IncompleteResultError, NoOptimizedPlanError
from ...schemas.optimization import OptimizedPlanModel
from ...schemas.planner import KPIResponse, RouteDetailsResponse, RouteStopRowModel
from ..session import PlanningSession
from .formatting import format_arrival_time, format_meters_to_kilometers, format_seconds_to_hhmm

TIME_TOTALS = ("travel_time", "driving_time", "break_time", "rest_time", "waiting_time")


def wrap_vehicle_index(current: int, step: int, used_count: int) -> int:
    """Step through used vehicles, wrapping around at both ends."""
    new_index = current + step
    if new_index < 0:
        new_index = used_count - 1
    if new_index > used_count - 1:
        new_index = 0
    return new_index


def build_route_details(session: PlanningSession, vehicle_index: int | None = None) -> RouteDetailsResponse:
    plan = session.require_optimized_plan()
    index = session.selected_vehicle_index if vehicle_index is None else vehicle_index
    used_vehicles = plan.used_vehicles()
    if not 0 <= index < len(used_vehicles):
        raise NoOptimizedPlanError(
            f"No used vehicle at index {index}.",
            details={"used_vehicles": len(used_vehicles)},
        )

    vehicle_id = used_vehicles[index].id
    route = plan.route_for_vehicle(vehicle_id)
    if route is None:
        raise IncompleteResultError(
            f"Used vehicle '{vehicle_id}' has no route.",
            details={"plan_id": plan.id, "vehicle_id": vehicle_id},
        )

    rows = [
        RouteStopRowModel(
            number=number,
            location_id=stop.location_id,
            address=session.lookup_location(stop.location_id).formatted_address,
            event="Delivery" if stop.delivery_ids else "Pickup",
            arrival_time=format_arrival_time(stop.report_for_stop.arrival_time if stop.report_for_stop else None),
        )
        for number, stop in enumerate(route.stops, start=1)
    ]
    return RouteDetailsResponse(
        vehicle_index=index,
        vehicle_id=vehicle_id,
        stops=rows,
        travel_distance=format_meters_to_kilometers(route.report.distance),
        travel_time=format_seconds_to_hhmm(route.report.travel_time),
    )


def compute_kpis(plan: OptimizedPlanModel) -> KPIResponse:
    totals = {
        name: sum(getattr(route.report, name) for route in plan.routes)
        for name in TIME_TOTALS
    }
    totals["distance"] = sum(route.report.distance for route in plan.routes)

    formatted = {name: format_seconds_to_hhmm(totals[name]) for name in TIME_TOTALS}
    formatted["distance"] = format_meters_to_kilometers(totals["distance"])

    return KPIResponse(
        used_vehicles=len(plan.vehicles) - len(plan.unplanned_vehicle_ids),
        unused_vehicles=len(plan.unplanned_vehicle_ids),
        planned_transports=len(plan.transports) - len(plan.unplanned_transport_ids),
        unplanned_transports=len(plan.unplanned_transport_ids),
        totals=totals,
        formatted=formatted,
    )
