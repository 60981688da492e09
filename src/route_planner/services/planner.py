"""Command interface between a UI layer and the planning workflow."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Callable

from ..config import settings
from ..exceptions import LifecycleBusyError, NoOptimizedPlanError, PlanValidationError, RoutePlannerError
from ..models.domain import GeocodedLocation, ServiceType, Transport
from ..persistence.filesystem import FileStorage
from ..schemas.optimization import OptimizedPlanModel
from ..schemas.planner import TransportForm
from .geocoding.client import GeocodingClient
from .optimization.client import RouteOptimizationClient
from .optimization.lifecycle import PlanLifecycle
from .presentation.report import wrap_vehicle_index
from .session import PlanningSession
from .transports import build_location, build_transport, opening_interval

logger = logging.getLogger(__name__)


class PlannerService:
    """Holds one planning session and exposes the user-facing commands."""

    def __init__(
        self,
        geocoder: GeocodingClient,
        lifecycle: PlanLifecycle,
        session: PlanningSession | None = None,
        *,
        persist_results: bool | None = None,
        storage_factory: Callable[[], FileStorage] = FileStorage,
    ) -> None:
        self.geocoder = geocoder
        self.lifecycle = lifecycle
        self.session = session or PlanningSession()
        self.persist_results = settings.persist_results if persist_results is None else persist_results
        self.storage_factory = storage_factory
        self._task: asyncio.Task | None = None
        self.lifecycle.on_result.append(self._on_result)

    @classmethod
    def from_settings(cls) -> "PlannerService":
        return cls(GeocodingClient(), PlanLifecycle(RouteOptimizationClient()))

    async def on_location_query_changed(self, service_type: ServiceType, text: str) -> list[GeocodedLocation]:
        if not text or not text.strip():
            self.session.pending[service_type] = None
            self.session.suggestions[service_type] = []
            return []
        suggestions = await self.geocoder.search_locations(text.strip())
        self.session.suggestions[service_type] = suggestions
        return suggestions

    def on_select_suggestion(self, service_type: ServiceType, index: int) -> bool:
        """Mark a suggestion as the pending pickup or delivery; True once both are set."""
        suggestions = self.session.suggestions[service_type]
        if not 0 <= index < len(suggestions):
            raise PlanValidationError(
                f"No {service_type.value} suggestion at index {index}.",
                details={"available": len(suggestions)},
            )
        self.session.pending[service_type] = suggestions[index]
        return self.session.can_add_transport

    def on_add_transport(self, form: TransportForm | None = None) -> Transport:
        form = form or TransportForm()
        session = self.session
        self._ensure_idle("add a transport")
        if not session.can_add_transport:
            raise PlanValidationError("Select a pickup and a delivery location first.")

        pickup = session.pending[ServiceType.PICKUP]
        delivery = session.pending[ServiceType.DELIVERY]
        sequence = len(session.transports) + 1
        pickup_location = build_location(
            pickup, ServiceType.PICKUP, sequence, opening_interval(form.pickup_from, form.pickup_to)
        )
        delivery_location = build_location(
            delivery, ServiceType.DELIVERY, sequence, opening_interval(form.delivery_from, form.delivery_to)
        )
        transport = build_transport(
            pickup_location.id,
            delivery_location.id,
            form.pickup_service_minutes,
            form.delivery_service_minutes,
        )

        session.geocoded_stops.append((pickup_location.id, pickup))
        session.geocoded_stops.append((delivery_location.id, delivery))
        session.locations.extend([pickup_location, delivery_location])
        session.transports.append(transport)
        for service_type in ServiceType:
            session.pending[service_type] = None
            session.suggestions[service_type] = []
        logger.info(f"Added {transport.id}")
        return transport

    def transport_rows(self) -> list[tuple[str, str, str]]:
        return [
            (
                transport.id,
                self.session.lookup_location(transport.pickup_location_id).formatted_address,
                self.session.lookup_location(transport.delivery_location_id).formatted_address,
            )
            for transport in self.session.transports
        ]

    def on_clear_transports(self) -> None:
        self._ensure_idle("clear transports")
        self.session.reset()
        logger.info("Cleared all transports")

    @property
    def optimization_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def busy(self) -> bool:
        """True from the moment a start is accepted until the attempt ends."""
        return self.session.is_busy or self.optimization_running

    @property
    def can_start_optimization(self) -> bool:
        return bool(self.session.transports) and not self.busy

    def _ensure_idle(self, action: str) -> None:
        self.session.ensure_idle(action)
        if self.optimization_running:
            raise LifecycleBusyError(
                f"Cannot {action} while an optimization is in progress.",
                details={"plan_id": self.session.plan_id},
            )

    async def on_start_optimization(
        self, vehicle_count: Any, profile: str, *, wait: bool = False
    ) -> OptimizedPlanModel | None:
        """Start one optimization attempt; at most one runs at a time."""
        self._ensure_idle("start an optimization")
        if wait:
            return await self.lifecycle.run(self.session, vehicle_count, profile)
        self._task = asyncio.create_task(self._run_in_background(vehicle_count, profile))
        return None

    async def _run_in_background(self, vehicle_count: Any, profile: str) -> None:
        try:
            await self.lifecycle.run(self.session, vehicle_count, profile)
        except RoutePlannerError as exc:
            # already recorded on the session as last_error
            logger.info(f"Background optimization ended with {type(exc).__name__}")
        except Exception:
            logger.exception("Background optimization crashed")

    def on_switch_vehicle(self, step: int) -> int:
        used_vehicles = self.session.used_vehicles()
        if not used_vehicles:
            raise NoOptimizedPlanError("The optimized plan has no used vehicles.")
        self.session.selected_vehicle_index = wrap_vehicle_index(
            self.session.selected_vehicle_index, step, len(used_vehicles)
        )
        return self.session.selected_vehicle_index

    async def shutdown(self) -> None:
        """Cancel an in-flight optimization so no polling outlives the app."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _on_result(self, plan: OptimizedPlanModel) -> None:
        if not self.persist_results:
            return
        self.storage_factory().save_plan_run(plan)
