# Provider interfaces and dataclasses.
# placepicker/providers/base.py
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

LatLng = Tuple[float, float]
Polygon = Tuple[LatLng, ...]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned extent of a place, as (lat, lng) corner pairs."""
    southwest: LatLng
    northeast: LatLng


@dataclass(frozen=True)
class Location:
    """
    Canonical place record shared by search, reverse lookups and history.
    Equality is field-by-field; `geometry` is a tuple of polygons so the whole
    record stays hashable.
    """
    latitude: float
    longitude: float

    display_name: Optional[str] = None
    name: Optional[str] = None
    road: Optional[str] = None
    city: Optional[str] = None
    suburb: Optional[str] = None
    neighbourhood: Optional[str] = None
    postcode: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    house_number: Optional[str] = None
    borough: Optional[str] = None
    municipality: Optional[str] = None

    bounds: Optional[Bounds] = None
    geometry: Optional[Tuple[Polygon, ...]] = None
    zoom: Optional[float] = None

    def __post_init__(self):
        lat, lng = self.latitude, self.longitude
        if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
            raise ValueError(f"latitude out of range: {lat!r}")
        if not (math.isfinite(lng) and -180.0 <= lng <= 180.0):
            raise ValueError(f"longitude out of range: {lng!r}")

    @property
    def lat_lng(self) -> LatLng:
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return self.display_name or f"{self.latitude}, {self.longitude}"


@dataclass(frozen=True)
class Position:
    """A raw device fix without any address data."""
    lat: float
    lon: float


class PermissionStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    DENIED_FOREVER = "denied_forever"


class GeocodingProvider(Protocol):
    provider_name: str

    async def search(self, query: str, *, limit: int = 10) -> List[Location]:
        """Forward geocoding of a free-text query."""
        ...

    async def reverse(self, lat: float, lon: float) -> Optional[Location]:
        """
        Reverse geocoding. Returns None when the provider has no coverage at
        the coordinate (zero features).
        """
        ...

    async def search_country(self, country_code: str) -> List[Location]:
        """Structured search on the `country` field only."""
        ...


class PositionProvider(Protocol):
    """
    Device location capability. Every call may be unsupported by the runtime;
    implementations raise rather than return sentinel values in that case.
    """

    async def is_location_service_enabled(self) -> bool:
        ...

    async def check_permission(self) -> PermissionStatus:
        ...

    async def request_permission(self) -> PermissionStatus:
        """Interactive prompt. Called at most once per resolution attempt."""
        ...

    async def get_current_position(self) -> Position:
        ...

    async def get_last_known_position(self) -> Optional[Position]:
        ...
