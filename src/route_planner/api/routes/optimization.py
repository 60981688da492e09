"""Optimization lifecycle and result endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...exceptions import RoutePlannerError
from ...schemas.planner import (
    KPIResponse,
    OptimizationStatusResponse,
    RouteDetailsResponse,
    StartOptimizationRequest,
    SwitchVehicleRequest,
)
from ...services.export.geojson import routes_to_geojson
from ...services.planner import PlannerService
from ...services.presentation import build_route_details, compute_kpis
from ..dependencies import get_planner
from ..errors import http_error

router = APIRouter(prefix="/optimization", tags=["optimization"])


def _status(planner: PlannerService) -> OptimizationStatusResponse:
    session = planner.session
    return OptimizationStatusResponse(
        phase=session.phase.value,
        plan_id=session.plan_id,
        busy=planner.busy,
        error=session.last_error,
    )


@router.post("", response_model=OptimizationStatusResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_optimization(
    payload: StartOptimizationRequest,
    planner: PlannerService = Depends(get_planner),
) -> OptimizationStatusResponse:
    """Start an optimization attempt.

    By default the attempt runs in the background and its progress is read
    from ``GET /optimization/status``; with ``wait`` the response is sent once
    the attempt is finished.
    """
    try:
        await planner.on_start_optimization(payload.vehicle_count, payload.profile, wait=payload.wait)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    return _status(planner)


@router.get("/status", response_model=OptimizationStatusResponse, status_code=status.HTTP_200_OK)
async def optimization_status(planner: PlannerService = Depends(get_planner)) -> OptimizationStatusResponse:
    return _status(planner)


@router.get("/kpis", response_model=KPIResponse, status_code=status.HTTP_200_OK)
async def optimization_kpis(planner: PlannerService = Depends(get_planner)) -> KPIResponse:
    try:
        return compute_kpis(planner.session.require_optimized_plan())
    except RoutePlannerError as exc:
        raise http_error(exc) from exc


@router.get("/route", response_model=RouteDetailsResponse, status_code=status.HTTP_200_OK)
async def route_details(
    vehicle_index: int | None = Query(default=None, ge=0, description="Defaults to the selected vehicle"),
    planner: PlannerService = Depends(get_planner),
) -> RouteDetailsResponse:
    try:
        return build_route_details(planner.session, vehicle_index)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc


@router.post("/vehicle", response_model=RouteDetailsResponse, status_code=status.HTTP_200_OK)
async def switch_vehicle(
    payload: SwitchVehicleRequest,
    planner: PlannerService = Depends(get_planner),
) -> RouteDetailsResponse:
    try:
        index = planner.on_switch_vehicle(payload.step)
        return build_route_details(planner.session, index)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc


@router.get("/map", status_code=status.HTTP_200_OK)
async def route_map(planner: PlannerService = Depends(get_planner)) -> dict:
    """Route lines and stop points as a GeoJSON FeatureCollection."""
    try:
        return routes_to_geojson(planner.session.require_optimized_plan())
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
