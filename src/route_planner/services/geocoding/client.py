"""Client for the by-text geocoding search."""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...models.domain import GeocodedLocation
from ...schemas.optimization import LocationsResponseModel
from ..http import ServiceClient

logger = logging.getLogger(__name__)


def parse_location(entry: dict[str, Any]) -> GeocodedLocation | None:
    position = entry.get("referencePosition")
    if not isinstance(position, dict):
        return None
    latitude = position.get("latitude")
    longitude = position.get("longitude")
    if latitude is None or longitude is None:
        return None
    address = entry.get("address")
    if not isinstance(address, dict):
        address = {}
    return GeocodedLocation(
        formatted_address=entry.get("formattedAddress", ""),
        country_name=address.get("countryName"),
        latitude=float(latitude),
        longitude=float(longitude),
        raw=entry,
    )


class GeocodingClient(ServiceClient):
    def __init__(self, *args: Any, path: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.path = (path or settings.geocoding_path).strip("/")

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{self.path}/locations/by-text"

    async def search_locations(self, search_text: str) -> list[GeocodedLocation]:
        """Return candidate locations for free text, in service order."""
        response = await self._request("GET", self.search_url, params={"searchText": search_text})
        result = self._parse(LocationsResponseModel, response)
        candidates: list[GeocodedLocation] = []
        for entry in result.locations:
            location = parse_location(entry)
            if location is None:
                logger.warning(f"Skipping geocoding result without reference position: {entry.get('formattedAddress')}")
                continue
            candidates.append(location)
        return candidates


async def check_health(client: GeocodingClient | None = None) -> bool:
    """Check reachability and credentials with a small search request."""
    try:
        client = client or GeocodingClient()
        await client.search_locations("Berlin")
        return True
    except Exception as exc:
        logger.warning(f"Geocoding health check failed: {exc}")
        return False
