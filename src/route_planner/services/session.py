"""Session-scoped planning state shared by commands, lifecycle and presentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import IncompleteResultError, LifecycleBusyError, NoOptimizedPlanError
from ..models.domain import GeocodedLocation, Location, ServiceType, Transport
from ..schemas.optimization import OptimizedPlanModel, VehicleModel


class LifecyclePhase(str, Enum):
    IDLE = "IDLE"
    CREATING = "CREATING"
    PLAN_CREATED = "PLAN_CREATED"
    OPTIMIZING = "OPTIMIZING"
    FETCHING = "FETCHING"
    DONE = "DONE"
    FAILED = "FAILED"


ACTIVE_PHASES = frozenset(
    {
        LifecyclePhase.CREATING,
        LifecyclePhase.PLAN_CREATED,
        LifecyclePhase.OPTIMIZING,
        LifecyclePhase.FETCHING,
    }
)


@dataclass
class PlanningSession:
    """Registry of the transports being planned and of the latest result."""

    pending: Dict[ServiceType, Optional[GeocodedLocation]] = field(
        default_factory=lambda: {service_type: None for service_type in ServiceType}
    )
    suggestions: Dict[ServiceType, List[GeocodedLocation]] = field(
        default_factory=lambda: {service_type: [] for service_type in ServiceType}
    )
    geocoded_stops: List[Tuple[str, GeocodedLocation]] = field(default_factory=list)
    locations: List[Location] = field(default_factory=list)
    transports: List[Transport] = field(default_factory=list)
    optimized_plan: Optional[OptimizedPlanModel] = None
    selected_vehicle_index: int = 0
    phase: LifecyclePhase = LifecyclePhase.IDLE
    plan_id: Optional[str] = None
    last_error: Optional[Dict[str, Any]] = None

    @property
    def is_busy(self) -> bool:
        return self.phase in ACTIVE_PHASES

    @property
    def can_add_transport(self) -> bool:
        return all(self.pending[service_type] is not None for service_type in ServiceType)

    def ensure_idle(self, action: str) -> None:
        if self.is_busy:
            raise LifecycleBusyError(
                f"Cannot {action} while an optimization is in progress.",
                details={"phase": self.phase.value, "plan_id": self.plan_id},
            )

    def require_optimized_plan(self) -> OptimizedPlanModel:
        if self.optimized_plan is None:
            raise NoOptimizedPlanError("No optimized plan is available yet.")
        return self.optimized_plan

    def lookup_location(self, location_id: str) -> GeocodedLocation:
        for stop_id, location in self.geocoded_stops:
            if stop_id == location_id:
                return location
        raise IncompleteResultError(
            f"Location '{location_id}' is not part of the current session.",
            details={"location_id": location_id},
        )

    def used_vehicles(self) -> List[VehicleModel]:
        return self.require_optimized_plan().used_vehicles()

    def begin_attempt(self) -> None:
        self.ensure_idle("start an optimization")
        self.phase = LifecyclePhase.CREATING
        self.plan_id = None
        self.last_error = None

    def reset(self) -> None:
        """Forget all transports, locations and results."""
        self.ensure_idle("clear transports")
        for service_type in ServiceType:
            self.pending[service_type] = None
            self.suggestions[service_type] = []
        self.geocoded_stops.clear()
        self.locations.clear()
        self.transports.clear()
        self.optimized_plan = None
        self.selected_vehicle_index = 0
        self.phase = LifecyclePhase.IDLE
        self.plan_id = None
        self.last_error = None
