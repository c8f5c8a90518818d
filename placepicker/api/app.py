from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .routes import router
from ..core.config import settings
from ..core.coordinator import SearchCoordinator
from ..core.localization import parse_locale
from ..core.logging_setup import configure_logging
from ..core.resolver import LocationResolver
from ..providers.base import GeocodingProvider, Position, PositionProvider
from ..providers.nominatim import NominatimClient, NominatimConfig
from ..providers.position import StaticPositionProvider


def _default_positions() -> StaticPositionProvider:
    if settings.device_lat is None or settings.device_lon is None:
        return StaticPositionProvider(None)
    return StaticPositionProvider(Position(lat=settings.device_lat, lon=settings.device_lon))


def create_app(
    geocoder: Optional[GeocodingProvider] = None,
    positions: Optional[PositionProvider] = None,
) -> FastAPI:
    configure_logging(settings.log_level)
    language, region = parse_locale(settings.locale)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with AsyncExitStack() as stack:
            geo = geocoder
            if geo is None:
                cfg = NominatimConfig(user_agent=settings.user_agent, language_code=language, base_url=settings.base_url)
                geo = await stack.enter_async_context(NominatimClient(cfg))
            app.state.coordinator = SearchCoordinator(geo)
            app.state.resolver = LocationResolver(geo, positions or _default_positions(), region_code=region)
            yield

    app = FastAPI(title="PlacePicker API", version="0.1.0", lifespan=lifespan)
    app.include_router(router, prefix="/v1")
    return app


app = create_app()
