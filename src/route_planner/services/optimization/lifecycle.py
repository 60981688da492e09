"""Plan lifecycle: create, start, poll until terminal, fetch.

One attempt walks ``IDLE -> CREATING -> PLAN_CREATED -> OPTIMIZING -> FETCHING
-> DONE``; any failing step moves the session to ``FAILED`` and aborts the
remaining steps. Nothing is retried and already created plans are not rolled
back on the service.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Sequence

from ...config import settings
from ...exceptions import (
    IncompleteResultError,
    OptimizationFailedError,
    PlanValidationError,
    RoutePlannerError,
    UnknownJobStatusError,
)
from ...models.domain import Plan, Vehicle
from ...schemas.optimization import JobStatus, OptimizedPlanModel
from ..session import LifecyclePhase, PlanningSession
from .client import RouteOptimizationClient

logger = logging.getLogger(__name__)

ResultCallback = Callable[[OptimizedPlanModel], None]

# Phases in which the plan already exists on the service
ORPHANING_PHASES = frozenset(
    {LifecyclePhase.PLAN_CREATED, LifecyclePhase.OPTIMIZING, LifecyclePhase.FETCHING}
)


def coerce_vehicle_count(value: Any) -> int:
    """Integer vehicle count, negative values clamp to zero."""
    try:
        count = int(float(str(value).strip()))
    except (TypeError, ValueError) as exc:
        raise PlanValidationError(f"Number of vehicles '{value}' is not a number.") from exc
    return max(count, 0)


def build_vehicles(count: int, profile: str) -> list[Vehicle]:
    return [Vehicle(id=f"Vehicle {index}", profile=profile) for index in range(1, count + 1)]


def validate_plan_references(plan: Plan) -> None:
    location_ids = {location.id for location in plan.locations}
    missing = {
        transport.id: [
            location_id
            for location_id in (transport.pickup_location_id, transport.delivery_location_id)
            if location_id not in location_ids
        ]
        for transport in plan.transports
    }
    missing = {transport_id: ids for transport_id, ids in missing.items() if ids}
    if missing:
        raise PlanValidationError("Transports reference unknown locations.", details={"missing": missing})


def validate_optimized_plan(optimized: OptimizedPlanModel) -> None:
    location_ids = {location.id for location in optimized.locations}
    vehicle_ids = {vehicle.id for vehicle in optimized.vehicles}
    for route in optimized.routes:
        if route.vehicle_id not in vehicle_ids:
            raise IncompleteResultError(
                f"Route references unknown vehicle '{route.vehicle_id}'.",
                details={"plan_id": optimized.id, "vehicle_id": route.vehicle_id},
            )
        for stop in route.stops:
            if stop.location_id not in location_ids:
                raise IncompleteResultError(
                    f"Stop references unknown location '{stop.location_id}'.",
                    details={"plan_id": optimized.id, "vehicle_id": route.vehicle_id, "location_id": stop.location_id},
                )


class PlanLifecycle:
    """Drives optimization attempts against the remote service."""

    def __init__(
        self,
        client: RouteOptimizationClient,
        *,
        poll_interval_seconds: float | None = None,
        allowed_profiles: Sequence[str] | None = None,
        on_result: Iterable[ResultCallback] = (),
    ) -> None:
        self.client = client
        self.poll_interval_seconds = (
            poll_interval_seconds if poll_interval_seconds is not None else settings.poll_interval_seconds
        )
        self.allowed_profiles = tuple(allowed_profiles if allowed_profiles is not None else settings.vehicle_profiles)
        self.on_result = list(on_result)

    async def create(self, session: PlanningSession, vehicle_count: Any, profile: str) -> Plan:
        if profile not in self.allowed_profiles:
            raise PlanValidationError(
                f"Unknown vehicle profile '{profile}'.",
                details={"allowed_profiles": list(self.allowed_profiles)},
            )
        if not session.transports:
            raise PlanValidationError("At least one transport is required to create a plan.")

        plan = Plan(
            locations=list(session.locations),
            transports=list(session.transports),
            vehicles=build_vehicles(coerce_vehicle_count(vehicle_count), profile),
        )
        validate_plan_references(plan)
        created = await self.client.create_plan(plan)
        plan.id = created.id
        return plan

    async def start(self, plan_id: str) -> bool:
        return await self.client.start_optimization(plan_id)

    async def poll(self, plan_id: str) -> JobStatus:
        operation = await self.client.get_optimization_progress(plan_id)
        try:
            status = JobStatus(operation.status)
        except ValueError as exc:
            raise UnknownJobStatusError(
                f"Unknown optimization status '{operation.status}'.",
                details={"plan_id": plan_id, "status": operation.status},
            ) from exc
        return status

    async def fetch(self, plan_id: str) -> OptimizedPlanModel:
        optimized = await self.client.get_optimized_plan(plan_id)
        validate_optimized_plan(optimized)
        return optimized

    async def await_completion(
        self,
        plan_id: str,
        interval_seconds: float | None = None,
        session: PlanningSession | None = None,
    ) -> OptimizedPlanModel:
        """Poll until the job succeeds, then fetch the result once.

        Each poll is awaited before the next delay starts, so polls never
        overlap; any poll error ends the loop.
        """
        interval = interval_seconds if interval_seconds is not None else self.poll_interval_seconds
        while True:
            status = await self.poll(plan_id)
            logger.debug(f"Plan {plan_id} status: {status.value}")
            if status is JobStatus.SUCCEEDED:
                break
            if status is JobStatus.FAILED:
                raise OptimizationFailedError(
                    f"Optimization of plan '{plan_id}' failed.", details={"plan_id": plan_id}
                )
            await asyncio.sleep(interval)

        if session is not None:
            session.phase = LifecyclePhase.FETCHING
        return await self.fetch(plan_id)

    async def run(self, session: PlanningSession, vehicle_count: Any, profile: str) -> OptimizedPlanModel:
        """Run one complete attempt and publish the result on the session."""
        session.begin_attempt()
        try:
            plan = await self.create(session, vehicle_count, profile)
            session.plan_id = plan.id
            session.phase = LifecyclePhase.PLAN_CREATED
            logger.info(f"Plan {plan.id} created, starting optimization")

            await self.start(plan.id)
            session.phase = LifecyclePhase.OPTIMIZING

            optimized = await self.await_completion(plan.id, session=session)
        except RoutePlannerError as exc:
            self._fail(session, exc.to_payload())
            raise
        except asyncio.CancelledError:
            self._fail(session, {"message": "Optimization was cancelled."})
            raise
        except Exception as exc:
            self._fail(session, {"message": f"Unexpected error: {exc}"})
            raise

        session.optimized_plan = optimized
        session.selected_vehicle_index = 0
        session.phase = LifecyclePhase.DONE
        logger.info(f"Plan {optimized.id} optimized with {len(optimized.routes)} routes")
        for callback in self.on_result:
            try:
                callback(optimized)
            except Exception:
                logger.exception(f"Result handler {callback!r} failed for plan {optimized.id}")
        return optimized

    @staticmethod
    def _fail(session: PlanningSession, payload: dict) -> None:
        if session.plan_id and session.phase in ORPHANING_PHASES:
            logger.warning(f"Plan {session.plan_id} is left on the service after a failed attempt")
        logger.error(f"Optimization attempt failed in phase {session.phase.value}: {payload}")
        session.phase = LifecyclePhase.FAILED
        session.last_error = payload
