"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...services.presentation import map_configuration

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_service_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.geocoding.client import check_health as service_health_check
    return service_health_check


@router.get("/health/service", status_code=status.HTTP_200_OK)
async def health_service() -> dict:
    """Check that the remote services accept the configured API key."""
    try:
        service_health_check = _get_service_health_check()
        status_flag = await service_health_check()
        return {"service": "ptv", "healthy": status_flag}
    except Exception as e:
        return {"service": "ptv", "healthy": False, "error": str(e)}


@router.get("/map/config", status_code=status.HTTP_200_OK)
def map_config() -> dict:
    return map_configuration()
