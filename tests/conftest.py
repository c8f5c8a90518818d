import asyncio
from typing import Dict, List, Optional

import pytest

from placepicker.providers.base import Location, PermissionStatus, Position


class FakeGeocoder:
    """In-memory GeocodingProvider that records every call."""

    provider_name = "fake"

    def __init__(self):
        self.calls: List[tuple] = []
        self.search_results: Dict[str, List[Location]] = {}
        self.search_delays: Dict[str, float] = {}
        self.search_error: Optional[Exception] = None
        self.reverse_result: Optional[Location] = None
        self.reverse_error: Optional[Exception] = None
        self.country_results: List[Location] = []
        self.country_error: Optional[Exception] = None

    async def search(self, query, *, limit=10):
        self.calls.append(("search", query, limit))
        await asyncio.sleep(self.search_delays.get(query, 0))
        if self.search_error is not None:
            raise self.search_error
        return list(self.search_results.get(query, []))

    async def reverse(self, lat, lon):
        self.calls.append(("reverse", lat, lon))
        if self.reverse_error is not None:
            raise self.reverse_error
        return self.reverse_result

    async def search_country(self, country_code):
        self.calls.append(("search_country", country_code))
        if self.country_error is not None:
            raise self.country_error
        return list(self.country_results)


class FakePositions:
    """PositionProvider with scripted answers."""

    def __init__(self):
        self.calls: List[str] = []
        self.enabled = True
        self.permission = PermissionStatus.GRANTED
        self.requested_permission = PermissionStatus.GRANTED
        self.current = Position(lat=52.37, lon=4.89)
        self.last_known: Optional[Position] = None
        self.last_known_error: Optional[Exception] = None

    async def is_location_service_enabled(self):
        self.calls.append("is_location_service_enabled")
        return self.enabled

    async def check_permission(self):
        self.calls.append("check_permission")
        return self.permission

    async def request_permission(self):
        self.calls.append("request_permission")
        return self.requested_permission

    async def get_current_position(self):
        self.calls.append("get_current_position")
        return self.current

    async def get_last_known_position(self):
        self.calls.append("get_last_known_position")
        if self.last_known_error is not None:
            raise self.last_known_error
        return self.last_known


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def positions():
    return FakePositions()


@pytest.fixture
def amsterdam():
    return Location(latitude=52.3730796, longitude=4.8924534, display_name="Amsterdam", city="Amsterdam", zoom=10.0)


@pytest.fixture
def utrecht():
    return Location(latitude=52.0907006, longitude=5.1215634, display_name="Utrecht", city="Utrecht", zoom=10.0)
