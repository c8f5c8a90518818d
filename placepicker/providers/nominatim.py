# placepicker/providers/nominatim.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..core.errors import MalformedResponse, NoConnection, ProviderError, ServerError, Timeout
from .base import Location
from .normalizer import from_address_record, from_feature_collection

logger = logging.getLogger(__name__)

# Fixed per request; not part of the config on purpose.
REQUEST_TIMEOUT_S = 5.0


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class NominatimConfig:
    # Nominatim's usage policy rejects anonymous clients.
    user_agent: str
    # e.g. "en"; sent as accept-language
    language_code: str = "en"
    base_url: str = "https://nominatim.openstreetmap.org"


class NominatimClient:
    """
    OpenStreetMap Nominatim geocoder:
      - GET {base_url}/search?q=...&limit=...
      - GET {base_url}/search?country=...
      - GET {base_url}/reverse?lat=...&lon=...

    Every request carries format/addressdetails/accept-language, does not
    follow redirects, does not keep connections alive and is attempted once.
    """

    provider_name = "nominatim"

    def __init__(self, cfg: NominatimConfig, client: Optional[httpx.AsyncClient] = None):
        if not cfg.user_agent:
            raise ValueError("NominatimConfig.user_agent is required")
        self.cfg = cfg
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT_S,
                follow_redirects=False,
                limits=httpx.Limits(max_keepalive_connections=0),
            )
            self._owns_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("NominatimClient must be used with 'async with' or provide a client.")
        return self._client

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": self.cfg.user_agent,
            "Connection": "close",
        }

    async def request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        *,
        response_format: str = "geojson",
    ) -> Any:
        """
        Single GET against the provider. Returns the decoded JSON body, or
        raises one of Timeout / NoConnection / ServerError / MalformedResponse /
        ProviderError.
        """
        query = {k: _param_value(v) for k, v in (params or {}).items()}
        query.update(
            {
                "format": response_format,
                "addressdetails": "1",
                "accept-language": self.cfg.language_code,
            }
        )
        url = f"{self.cfg.base_url.rstrip('/')}/{path.lstrip('/')}"
        logger.debug("Requesting %s params=%s", url, query)

        try:
            resp = await self.client.get(
                url,
                params=query,
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT_S,
                follow_redirects=False,
            )
        except httpx.TimeoutException as e:
            logger.warning("Nominatim request timed out: %s", url)
            raise Timeout() from e
        except httpx.DecodingError as e:
            logger.warning("Nominatim sent an undecodable body for %s: %s", url, e)
            raise MalformedResponse() from e
        except httpx.TransportError as e:
            logger.warning("Nominatim transport failure for %s: %s", url, e)
            raise NoConnection() from e
        except httpx.RequestError as e:
            logger.warning("Nominatim request failed for %s: %s", url, e)
            raise NoConnection() from e

        if not 200 <= resp.status_code < 300:
            logger.warning("Nominatim returned HTTP %s for %s", resp.status_code, url)
            raise ServerError(resp.status_code)

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Nominatim returned a non-JSON body for %s", url)
            raise MalformedResponse() from e

        if isinstance(data, dict) and "error" in data:
            err = ProviderError.from_payload(data["error"])
            logger.warning("Nominatim reported an error for %s: %s", url, err.message)
            raise err
        return data

    async def search(self, query: str, *, limit: int = 10) -> List[Location]:
        # https://nominatim.org/release-docs/latest/api/Search/#free-form-query
        data = await self.request("search", {"q": query, "limit": limit})
        return from_feature_collection(data)

    async def reverse(self, lat: float, lon: float) -> Optional[Location]:
        # Exactly one feature, or none where OSM has no coverage.
        data = await self.request("reverse", {"lat": lat, "lon": lon})
        results = from_feature_collection(data)
        return results[0] if results else None

    async def search_country(self, country_code: str) -> List[Location]:
        # https://nominatim.org/release-docs/latest/api/Search/#structured-query
        data = await self.request("search", {"country": country_code})
        return from_feature_collection(data)

    async def reverse_record(self, lat: float, lon: float) -> Location:
        """Flat `format=json` reverse lookup including the outline geometry."""
        data = await self.request(
            "reverse",
            {"lat": lat, "lon": lon, "polygon_geojson": 1},
            response_format="json",
        )
        if not isinstance(data, dict):
            raise MalformedResponse("Expected JSON object response")
        return from_address_record(data)
