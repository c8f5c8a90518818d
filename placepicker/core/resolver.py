from __future__ import annotations

import logging
from typing import List, Optional

from ..providers.base import GeocodingProvider, Location, PermissionStatus, PositionProvider
from .errors import (
    GeocodingError,
    PermissionDenied,
    PermissionDeniedForever,
    ServicesDisabled,
)
from .resolution_types import ResolutionContext
from .steps import ExplicitLocationStep, LastKnownPositionStep, LocaleCountryStep

logger = logging.getLogger(__name__)


class LocationResolver:
    """
    Start-up location: explicit value, then the last known device position
    reverse geocoded, then the country of the active locale.
    """

    def __init__(
        self,
        geocoder: GeocodingProvider,
        positions: PositionProvider,
        *,
        region_code: Optional[str] = None,
        steps: Optional[List] = None,
    ):
        self.geocoder = geocoder
        self.positions = positions
        self.steps = steps or [
            ExplicitLocationStep(),
            LastKnownPositionStep(geocoder, positions),
            LocaleCountryStep(geocoder, region_code),
        ]

    async def resolve(self, explicit: Optional[Location] = None) -> ResolutionContext:
        ctx = ResolutionContext(explicit=explicit)
        for step in self.steps:
            ctx = await step.run(ctx)
            if ctx.location is not None:
                ctx.resolved_by = step.name
                logger.info("initial location resolved by %s: %s", step.name, ctx.location)
                return ctx

        # Nothing found is fine; every attempted step blowing up is not.
        if ctx.attempted and len(ctx.errors) == len(ctx.attempted):
            raise ctx.errors[-1]
        return ctx

    async def resolve_initial(self, explicit: Optional[Location] = None) -> Optional[Location]:
        ctx = await self.resolve(explicit)
        return ctx.location

    async def _ensure_permission(self) -> None:
        status = await self.positions.check_permission()
        if status == PermissionStatus.DENIED:
            status = await self.positions.request_permission()
            if status == PermissionStatus.DENIED:
                raise PermissionDenied()
        if status == PermissionStatus.DENIED_FOREVER:
            raise PermissionDeniedForever()

    async def get_current_location(self) -> Location:
        """
        Live fix for an explicit "locate me" action. Raises ServicesDisabled,
        PermissionDenied or PermissionDeniedForever; a failed address lookup
        only degrades the result to bare coordinates.
        """
        if not await self.positions.is_location_service_enabled():
            raise ServicesDisabled()
        await self._ensure_permission()

        position = await self.positions.get_current_position()
        try:
            location = await self.geocoder.reverse(position.lat, position.lon)
        except GeocodingError as e:
            logger.warning("reverse geocoding of current position failed: %s", e)
            location = None
        if location is not None:
            return location
        return Location(latitude=position.lat, longitude=position.lon)
