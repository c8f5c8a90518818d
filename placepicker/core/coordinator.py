from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..providers.base import GeocodingProvider, Location
from .debounce import DEFAULT_DEBOUNCE_S, Debouncer
from .errors import PlacePickerError
from .history import SearchHistory

logger = logging.getLogger(__name__)

ResultsCallback = Callable[[List[Location]], None]
LocationCallback = Callable[[Location], None]
ErrorCallback = Callable[[str, str], None]


class SearchCoordinator:
    """
    Debounced free-text search, map long-press lookups and selection history
    for a single search box.

    Public calls never raise: failures are logged, passed to `on_error` as
    (kind, message) and turned into an empty result.
    """

    def __init__(
        self,
        geocoder: GeocodingProvider,
        *,
        history: Optional[SearchHistory] = None,
        debounce_s: float = DEFAULT_DEBOUNCE_S,
        limit: int = 10,
        on_results: Optional[ResultsCallback] = None,
        on_location: Optional[LocationCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.geocoder = geocoder
        self.history = history if history is not None else SearchHistory()
        self.limit = limit
        self.on_results = on_results
        self.on_location = on_location
        self.on_error = on_error
        self._debounced: Debouncer[str, Optional[List[Location]]] = Debouncer(self._fetch, debounce_s)
        # Sequence number of the most recently dispatched network request.
        self._dispatched = 0

    def _report(self, exc: Exception) -> None:
        if isinstance(exc, PlacePickerError):
            kind = exc.kind
            logger.warning("geocoding failed (%s): %s", kind, exc)
        else:
            kind = "error"
            logger.error("unexpected geocoding failure", exc_info=exc)
        if self.on_error is not None:
            self.on_error(kind, str(exc))

    async def _fetch(self, query: str) -> Optional[List[Location]]:
        self._dispatched += 1
        seq = self._dispatched
        failure: Optional[Exception] = None
        results: List[Location] = []
        try:
            results = await self.geocoder.search(query, limit=self.limit)
        except Exception as exc:
            failure = exc

        if seq != self._dispatched:
            logger.debug("discarding stale response #%d for %r (latest #%d)", seq, query, self._dispatched)
            return None
        if failure is not None:
            self._report(failure)
            return []
        return results

    async def search(self, query: str) -> List[Location]:
        if not query or not query.strip():
            return []
        results = await self._debounced(query)
        if results is None:
            return []
        if self.on_results is not None:
            self.on_results(results)
        return results

    async def pick_at(self, lat: float, lon: float) -> Optional[Location]:
        """Reverse lookup for a long-pressed map coordinate."""
        try:
            location = await self.geocoder.reverse(lat, lon)
        except Exception as exc:
            self._report(exc)
            return None
        if location is not None and self.on_location is not None:
            self.on_location(location)
        return location

    def select_result(self, location: Location) -> None:
        self.history.add(location)
        if self.on_location is not None:
            self.on_location(location)

    def cancel_pending(self) -> None:
        self._debounced.cancel()
