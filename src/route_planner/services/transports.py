"""Builders turning geocoded selections into plan locations and transports."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from ..config import settings
from ..exceptions import PlanValidationError
from ..models.domain import GeocodedLocation, Location, OpeningInterval, ServiceType, Transport


def parse_clock(value: str) -> time:
    """Parse an "HH:MM" input into a time of day."""
    try:
        hours, minutes = (int(part) for part in value.split(":"))
        return time(hours, minutes)
    except ValueError as exc:
        raise PlanValidationError(f"Invalid time of day '{value}', expected HH:MM.") from exc


def opening_interval(
    opening_from: str,
    opening_to: str,
    *,
    day: date | None = None,
    tz_name: str | None = None,
) -> OpeningInterval:
    """Opening window on ``day`` (today by default) in local time, as UTC ISO timestamps."""
    tz = ZoneInfo(tz_name or settings.timezone)
    day = day or datetime.now(tz).date()
    start = datetime.combine(day, parse_clock(opening_from), tzinfo=tz)
    end = datetime.combine(day, parse_clock(opening_to), tzinfo=tz)
    if end < start:
        raise PlanValidationError(f"Opening window {opening_from}-{opening_to} ends before it starts.")
    return OpeningInterval(
        start=start.astimezone(timezone.utc).isoformat(),
        end=end.astimezone(timezone.utc).isoformat(),
    )


def build_location(
    candidate: GeocodedLocation,
    service_type: ServiceType,
    sequence: int,
    interval: OpeningInterval,
) -> Location:
    return Location(
        id=f"{service_type.location_prefix}{sequence}",
        latitude=candidate.latitude,
        longitude=candidate.longitude,
        opening_intervals=[interval],
    )


def build_transport(
    pickup_location_id: str,
    delivery_location_id: str,
    pickup_service_minutes: float = 0.0,
    delivery_service_minutes: float = 0.0,
) -> Transport:
    return Transport(
        id=f"Transport-{pickup_location_id}-{delivery_location_id}",
        pickup_location_id=pickup_location_id,
        pickup_service_time=int(round(pickup_service_minutes * 60)),
        delivery_location_id=delivery_location_id,
        delivery_service_time=int(round(delivery_service_minutes * 60)),
    )
