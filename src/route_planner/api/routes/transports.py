"""Transport registry endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...exceptions import RoutePlannerError
from ...schemas.planner import TransportForm, TransportRowModel, TransportsOverviewResponse
from ...services.planner import PlannerService
from ..dependencies import get_planner
from ..errors import http_error

router = APIRouter(prefix="/transports", tags=["transports"])


def _overview(planner: PlannerService) -> TransportsOverviewResponse:
    try:
        rows = planner.transport_rows()
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    return TransportsOverviewResponse(
        transports=[
            TransportRowModel(transport_id=transport_id, pickup_address=pickup, delivery_address=delivery)
            for transport_id, pickup, delivery in rows
        ],
        can_start_optimization=planner.can_start_optimization,
    )


@router.get("", response_model=TransportsOverviewResponse, status_code=status.HTTP_200_OK)
async def list_transports(planner: PlannerService = Depends(get_planner)) -> TransportsOverviewResponse:
    return _overview(planner)


@router.post("", response_model=TransportsOverviewResponse, status_code=status.HTTP_201_CREATED)
async def add_transport(
    form: TransportForm,
    planner: PlannerService = Depends(get_planner),
) -> TransportsOverviewResponse:
    try:
        planner.on_add_transport(form)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    return _overview(planner)


@router.delete("", status_code=status.HTTP_200_OK)
async def clear_transports(planner: PlannerService = Depends(get_planner)) -> dict:
    """Remove every transport, location and optimization result of the session."""
    try:
        planner.on_clear_transports()
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    return {"success": True, "message": "All transports cleared"}
