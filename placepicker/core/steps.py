from __future__ import annotations

import logging
from typing import Optional

from ..providers.base import GeocodingProvider, PositionProvider
from .resolution_types import ResolutionContext

logger = logging.getLogger(__name__)


class ExplicitLocationStep:
    name = "explicit"

    async def run(self, ctx: ResolutionContext) -> ResolutionContext:
        if ctx.explicit is not None:
            ctx.location = ctx.explicit
        return ctx


class LastKnownPositionStep:
    name = "last_known_position"

    def __init__(self, geocoder: GeocodingProvider, positions: PositionProvider):
        self.geocoder = geocoder
        self.positions = positions

    async def run(self, ctx: ResolutionContext) -> ResolutionContext:
        try:
            position = await self.positions.get_last_known_position()
        except Exception as e:
            # Unsupported on this runtime counts as a failed step.
            logger.warning("last known position unavailable: %s", e)
            ctx.attempted.append(self.name)
            ctx.errors.append(e)
            return ctx
        if position is None:
            return ctx

        ctx.attempted.append(self.name)
        try:
            ctx.location = await self.geocoder.reverse(position.lat, position.lon)
        except Exception as e:
            logger.warning("reverse geocoding of last known position failed: %s", e)
            ctx.errors.append(e)
        return ctx


class LocaleCountryStep:
    name = "locale_country"

    def __init__(self, geocoder: GeocodingProvider, region_code: Optional[str]):
        self.geocoder = geocoder
        self.region_code = region_code

    async def run(self, ctx: ResolutionContext) -> ResolutionContext:
        if not self.region_code:
            return ctx

        ctx.attempted.append(self.name)
        try:
            results = await self.geocoder.search_country(self.region_code)
        except Exception as e:
            logger.warning("country search for %s failed: %s", self.region_code, e)
            ctx.errors.append(e)
            return ctx
        if results:
            ctx.location = results[0]
        return ctx
