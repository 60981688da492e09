"""Wire schemas of the geocoding and route optimization service responses."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ServiceModel(BaseModel):
    """Read-only model bound to the service's camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class JobStatus(str, Enum):
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class OperationModel(ServiceModel):
    status: str


class LocationsResponseModel(ServiceModel):
    """Geocoding search result; entries stay raw until they are parsed."""

    locations: List[Dict[str, Any]] = Field(default_factory=list)


class PlanCreatedModel(ServiceModel):
    id: str


class OpeningIntervalModel(ServiceModel):
    start: str
    end: str


class LocationModel(ServiceModel):
    id: str
    type: str = "CUSTOMER"
    latitude: float
    longitude: float
    opening_intervals: List[OpeningIntervalModel] = Field(default_factory=list)


class TransportModel(ServiceModel):
    id: str
    pickup_location_id: str
    delivery_location_id: str
    pickup_service_time: int = 0
    delivery_service_time: int = 0


class VehicleModel(ServiceModel):
    id: str
    profile: Optional[str] = None


class StopReportModel(ServiceModel):
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None


class StopModel(ServiceModel):
    location_id: str
    pickup_ids: List[str] = Field(default_factory=list)
    delivery_ids: List[str] = Field(default_factory=list)
    report_for_stop: Optional[StopReportModel] = None


class RouteReportModel(ServiceModel):
    distance: float = 0.0
    travel_time: float = 0.0
    driving_time: float = 0.0
    break_time: float = 0.0
    rest_time: float = 0.0
    waiting_time: float = 0.0


class RouteModel(ServiceModel):
    vehicle_id: str
    stops: List[StopModel] = Field(default_factory=list)
    report: RouteReportModel = Field(default_factory=RouteReportModel)


class OptimizedPlanModel(ServiceModel):
    id: str
    locations: List[LocationModel] = Field(default_factory=list)
    transports: List[TransportModel] = Field(default_factory=list)
    vehicles: List[VehicleModel] = Field(default_factory=list)
    routes: List[RouteModel] = Field(default_factory=list)
    unplanned_transport_ids: List[str] = Field(default_factory=list)
    unplanned_vehicle_ids: List[str] = Field(default_factory=list)

    def location(self, location_id: str) -> LocationModel | None:
        for location in self.locations:
            if location.id == location_id:
                return location
        return None

    def route_for_vehicle(self, vehicle_id: str) -> RouteModel | None:
        for route in self.routes:
            if route.vehicle_id == vehicle_id:
                return route
        return None

    def used_vehicles(self) -> List[VehicleModel]:
        unplanned = set(self.unplanned_vehicle_ids)
        return [vehicle for vehicle in self.vehicles if vehicle.id not in unplanned]
