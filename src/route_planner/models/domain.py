"""Domain models for geocoded points and plan building blocks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ServiceType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"

    @property
    def location_prefix(self) -> str:
        return "P" if self is ServiceType.PICKUP else "D"


@dataclass(slots=True)
class GeocodedLocation:
    """A search candidate returned by the geocoding service."""

    formatted_address: str
    country_name: Optional[str]
    latitude: float
    longitude: float
    raw: dict = field(default_factory=dict)

    @property
    def label(self) -> str:
        if self.country_name:
            return f"{self.formatted_address}, {self.country_name}"
        return self.formatted_address


@dataclass(slots=True)
class OpeningInterval:
    start: str
    end: str


@dataclass(slots=True)
class Location:
    """A customer stop submitted with a plan."""

    id: str
    latitude: float
    longitude: float
    opening_intervals: List[OpeningInterval]
    type: str = "CUSTOMER"


@dataclass(slots=True)
class Transport:
    id: str
    pickup_location_id: str
    delivery_location_id: str
    pickup_service_time: int = 0
    delivery_service_time: int = 0


@dataclass(slots=True)
class Vehicle:
    id: str
    profile: str


@dataclass(slots=True)
class Plan:
    """A plan request; ``id`` is assigned by the service on creation."""

    locations: List[Location]
    transports: List[Transport]
    vehicles: List[Vehicle]
    id: Optional[str] = None
