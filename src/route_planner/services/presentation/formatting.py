"""Display formatting for distances, durations and timestamps."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from ...config import settings


def format_meters_to_kilometers(value_in_meters: float) -> str:
    kilometers = f"{value_in_meters / 1000:.3f}".rstrip("0").rstrip(".")
    return f"{kilometers} km"


def format_seconds_to_hhmm(value_in_seconds: float) -> str:
    total = int(value_in_seconds)
    hours, remainder = divmod(total, 3600)
    minutes = remainder // 60
    return f"{hours:02d} h {minutes:02d} min"


def format_arrival_time(timestamp: str | None, tz_name: str | None = None) -> str:
    if not timestamp:
        return ""
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz_name or settings.timezone))
    return parsed.strftime("%H:%M:%S")
