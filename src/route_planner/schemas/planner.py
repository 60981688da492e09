"""Planner request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import ServiceType


class SuggestionModel(BaseModel):
    index: int
    label: str
    latitude: float
    longitude: float


class SuggestionsResponse(BaseModel):
    service_type: ServiceType
    suggestions: List[SuggestionModel]


class SelectSuggestionRequest(BaseModel):
    service_type: ServiceType
    index: int = Field(..., ge=0)


class SelectSuggestionResponse(BaseModel):
    service_type: ServiceType
    label: str
    latitude: float
    longitude: float
    can_add_transport: bool


class TransportForm(BaseModel):
    """Opening windows ("HH:MM") and service times (minutes) of a new transport."""

    pickup_from: str = Field(default="08:00", pattern=r"^\d{1,2}:\d{2}$")
    pickup_to: str = Field(default="18:00", pattern=r"^\d{1,2}:\d{2}$")
    delivery_from: str = Field(default="08:00", pattern=r"^\d{1,2}:\d{2}$")
    delivery_to: str = Field(default="18:00", pattern=r"^\d{1,2}:\d{2}$")
    pickup_service_minutes: float = Field(default=0.0, ge=0.0)
    delivery_service_minutes: float = Field(default=0.0, ge=0.0)


class TransportRowModel(BaseModel):
    transport_id: str
    pickup_address: str
    delivery_address: str


class TransportsOverviewResponse(BaseModel):
    transports: List[TransportRowModel]
    can_start_optimization: bool


class StartOptimizationRequest(BaseModel):
    vehicle_count: int | float | str = Field(default=1, description="Number of vehicles, coerced to an integer >= 0.")
    profile: str
    wait: bool = Field(
        default=False,
        description="If True, respond only after the optimization reached a terminal state.",
    )


class OptimizationStatusResponse(BaseModel):
    phase: str
    plan_id: Optional[str] = None
    busy: bool
    error: Optional[Dict[str, Any]] = None


class KPIResponse(BaseModel):
    used_vehicles: int
    unused_vehicles: int
    planned_transports: int
    unplanned_transports: int
    totals: Dict[str, float]
    formatted: Dict[str, str]


class RouteStopRowModel(BaseModel):
    number: int
    location_id: str
    address: str
    event: str
    arrival_time: str


class RouteDetailsResponse(BaseModel):
    vehicle_index: int
    vehicle_id: str
    stops: List[RouteStopRowModel]
    travel_distance: str
    travel_time: str


class SwitchVehicleRequest(BaseModel):
    step: int = Field(..., description="Usually -1 (previous) or +1 (next).")
