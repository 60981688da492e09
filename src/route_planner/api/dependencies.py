"""Request dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from ..services.planner import PlannerService


def get_planner(request: Request) -> PlannerService:
    """Return the application's planner, building it from settings on first use."""
    planner = getattr(request.app.state, "planner", None)
    if planner is None:
        try:
            planner = PlannerService.from_settings()
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        request.app.state.planner = planner
    return planner
