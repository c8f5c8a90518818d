from __future__ import annotations

import asyncio
import os
from pathlib import Path
from dotenv import load_dotenv

from placepicker.core.config import Settings
from placepicker.core.coordinator import SearchCoordinator
from placepicker.core.localization import parse_locale
from placepicker.core.logging_setup import configure_logging
from placepicker.core.resolver import LocationResolver
from placepicker.providers.base import Position
from placepicker.providers.nominatim import NominatimClient, NominatimConfig
from placepicker.providers.position import StaticPositionProvider


async def main():
    repo_root = Path(__file__).resolve().parents[2]
    load_dotenv(repo_root / ".env", override=False)
    # Re-read after .env so its values win over the import-time defaults.
    settings = Settings()
    configure_logging(settings.log_level)

    language, region = parse_locale(settings.locale)
    position = None
    if settings.device_lat is not None and settings.device_lon is not None:
        position = Position(lat=settings.device_lat, lon=settings.device_lon)

    cfg = NominatimConfig(user_agent=settings.user_agent, language_code=language, base_url=settings.base_url)
    async with NominatimClient(cfg) as geocoder:
        resolver = LocationResolver(geocoder, StaticPositionProvider(position), region_code=region)
        initial = await resolver.resolve_initial()
        print(f"Initial location: {initial or 'none'}")

        coordinator = SearchCoordinator(
            geocoder,
            on_error=lambda kind, message: print(f"search failed ({kind}): {message}"),
        )
        # Simulate typing: only the last query reaches the network.
        query = os.getenv("PLACEPICKER_EXAMPLE_QUERY", "Amsterdam Centraal")
        prefixes = [query[:i] for i in range(1, len(query) + 1)]
        searches = []
        for prefix in prefixes:
            searches.append(asyncio.create_task(coordinator.search(prefix)))
            await asyncio.sleep(0.05)
        outcomes = await asyncio.gather(*searches)
        results = outcomes[-1]
        print(f"Got {len(results)} results for {query!r}")
        for loc in results:
            print(f"  {loc} (zoom {loc.zoom})")

        if results:
            coordinator.select_result(results[0])
            print(f"History: {[str(loc) for loc in coordinator.history]}")

if __name__ == "__main__":
    asyncio.run(main())
