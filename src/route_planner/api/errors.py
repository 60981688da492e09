"""Translation of planner errors into HTTP errors."""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from ..exceptions import (
    ConnectivityError,
    LifecycleBusyError,
    NoOptimizedPlanError,
    PlanRejectedError,
    PlanValidationError,
    RoutePlannerError,
    ServiceResponseError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[RoutePlannerError], int]] = [
    (PlanValidationError, status.HTTP_400_BAD_REQUEST),
    (NoOptimizedPlanError, status.HTTP_404_NOT_FOUND),
    (LifecycleBusyError, status.HTTP_409_CONFLICT),
    (ConnectivityError, status.HTTP_503_SERVICE_UNAVAILABLE),
    # before ServiceResponseError, of which it is a subclass
    (PlanRejectedError, status.HTTP_400_BAD_REQUEST),
    (ServiceResponseError, status.HTTP_502_BAD_GATEWAY),
]


def http_error(exc: RoutePlannerError) -> HTTPException:
    """Map a planner error to an HTTPException carrying its payload as detail."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    if status_code >= 500:
        logger.warning(f"{type(exc).__name__}: {exc.message}")
    return HTTPException(status_code=status_code, detail=exc.to_payload())
