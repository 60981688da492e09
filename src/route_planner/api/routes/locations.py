"""Location search and selection endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...exceptions import RoutePlannerError
from ...models.domain import ServiceType
from ...schemas.planner import (
    SelectSuggestionRequest,
    SelectSuggestionResponse,
    SuggestionModel,
    SuggestionsResponse,
)
from ...services.planner import PlannerService
from ..dependencies import get_planner
from ..errors import http_error

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("/search", response_model=SuggestionsResponse, status_code=status.HTTP_200_OK)
async def search_locations(
    service_type: ServiceType = Query(..., description="Whether the search is for the pickup or the delivery"),
    text: str = Query(default="", description="Free text typed by the user"),
    planner: PlannerService = Depends(get_planner),
) -> SuggestionsResponse:
    try:
        suggestions = await planner.on_location_query_changed(service_type, text)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    return SuggestionsResponse(
        service_type=service_type,
        suggestions=[
            SuggestionModel(index=index, label=location.label, latitude=location.latitude, longitude=location.longitude)
            for index, location in enumerate(suggestions)
        ],
    )


@router.post("/select", response_model=SelectSuggestionResponse, status_code=status.HTTP_200_OK)
async def select_location(
    payload: SelectSuggestionRequest,
    planner: PlannerService = Depends(get_planner),
) -> SelectSuggestionResponse:
    try:
        can_add = planner.on_select_suggestion(payload.service_type, payload.index)
    except RoutePlannerError as exc:
        raise http_error(exc) from exc
    selected = planner.session.pending[payload.service_type]
    if selected is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Selection was not stored.")
    return SelectSuggestionResponse(
        service_type=payload.service_type,
        label=selected.label,
        latitude=selected.latitude,
        longitude=selected.longitude,
        can_add_transport=can_add,
    )
