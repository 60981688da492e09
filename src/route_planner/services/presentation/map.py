"""Map view configuration handed to the UI."""

from __future__ import annotations

from datetime import datetime

from ...config import settings


def map_configuration() -> dict:
    return {
        "tiles_url": settings.raster_tiles_url,
        "api_key_header": "apiKey",
        "attribution": f"© {datetime.now().year}, PTV Logistics, HERE",
        "center": list(settings.map_center),
        "zoom": settings.map_zoom,
        "min_zoom": 5,
        "max_zoom": 23,
    }
