"""Exception hierarchy for planning and remote service failures.

Every failure of a plan lifecycle step is raised as one of these classes so
callers can abort the remaining steps and surface ``to_payload()`` to the user.
"""

from __future__ import annotations

from typing import Any


class RoutePlannerError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class PlanValidationError(RoutePlannerError):
    """Raised when a plan request is malformed before it reaches the service."""


class ConnectivityError(RoutePlannerError):
    """Raised when the remote service cannot be reached."""


class ServiceResponseError(RoutePlannerError):
    """Raised for non-2xx responses; ``payload`` holds the remote error body verbatim."""

    def __init__(self, message: str, status_code: int, payload: Any) -> None:
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code
        self.payload = payload

    def to_payload(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error": self.payload,
        }


class PlanRejectedError(ServiceResponseError):
    """Raised when the service refuses to create a plan (HTTP 400)."""


class IncompleteResultError(RoutePlannerError):
    """Raised when an optimized plan references entities it does not contain."""


class OptimizationFailedError(RoutePlannerError):
    """Raised when the optimization job ends in the FAILED state."""


class UnknownJobStatusError(RoutePlannerError):
    """Raised when the service reports a job status outside the known vocabulary."""


class LifecycleBusyError(RoutePlannerError):
    """Raised when a mutating command arrives while an optimization is in flight."""


class NoOptimizedPlanError(RoutePlannerError):
    """Raised when result views are requested before an optimization succeeded."""
