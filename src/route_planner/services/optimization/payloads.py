"""Conversion of plan requests into the service's JSON shape."""

from __future__ import annotations

from ...models.domain import Location, Plan, Transport, Vehicle


def location_to_payload(location: Location) -> dict:
    return {
        "id": location.id,
        "type": location.type,
        "latitude": location.latitude,
        "longitude": location.longitude,
        "openingIntervals": [
            {"start": interval.start, "end": interval.end} for interval in location.opening_intervals
        ],
    }


def transport_to_payload(transport: Transport) -> dict:
    return {
        "id": transport.id,
        "pickupLocationId": transport.pickup_location_id,
        "pickupServiceTime": transport.pickup_service_time,
        "deliveryLocationId": transport.delivery_location_id,
        "deliveryServiceTime": transport.delivery_service_time,
    }


def vehicle_to_payload(vehicle: Vehicle) -> dict:
    return {"id": vehicle.id, "profile": vehicle.profile}


def plan_to_payload(plan: Plan) -> dict:
    return {
        "locations": [location_to_payload(location) for location in plan.locations],
        "transports": [transport_to_payload(transport) for transport in plan.transports],
        "vehicles": [vehicle_to_payload(vehicle) for vehicle in plan.vehicles],
    }
