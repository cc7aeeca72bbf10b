"""
OpenRouteService API client for geocoding, autocomplete and directions
"""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from routeplanner.config.models import Settings
from routeplanner.config.parser import API_KEY_ENV
from routeplanner.core.exceptions import GeocodeNoMatchError, MalformedResponseError, ServiceError
from routeplanner.core.models import Coordinate, GeocodingResult, Route, RouteSummary, Suggestion

from .models import DirectionsRequest
from .ports import RoutingProvider


class OpenRouteServiceClient(RoutingProvider):
    """
    Async client for the OpenRouteService API
    Handles address resolution, suggestions and driving directions
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.api_key = api_key or self.settings.api_key or os.getenv(API_KEY_ENV)
        self.base_url = self.settings.base_url
        self.timeout = self.settings.timeout
        self.logger = logging.getLogger(__name__)

        if not self.api_key:
            raise ValueError(f"OpenRouteService API key required. Set {API_KEY_ENV}")

    @property
    def headers(self) -> Dict[str, str]:
        """HTTP headers for directions requests"""
        return {
            "Authorization": self.api_key,
            "Content-Type": "application/json",
        }

    async def _get(self, path: str, params: Dict[str, Any], action: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise ServiceError(f"{action} failed: {e}", status_code=e.response.status_code)
        except httpx.HTTPError as e:
            raise ServiceError(f"{action} failed: {e}")
        except ValueError as e:
            raise MalformedResponseError(f"{action} returned invalid JSON: {e}")

    async def resolve_address(self, address: str) -> GeocodingResult:
        """
        Geocode an address to its first candidate

        Args:
            address: Free-text address

        Returns:
            GeocodingResult with the position in (lat, lon) order

        Raises:
            ValueError: If the address is blank
            GeocodeNoMatchError: If the service returns no candidate
            ServiceError: On network or HTTP failure
            MalformedResponseError: If the payload cannot be read
        """
        if not address or not address.strip():
            raise ValueError("Address must not be empty")

        data = await self._get(
            "/geocode/search",
            params={
                "api_key": self.api_key,
                "text": address,
                "boundary.country": self.settings.country,
            },
            action="Geocoding",
        )

        try:
            features = data.get("features")
            if not features:
                self.logger.warning(f"No geocoding results for address: {address}")
                raise GeocodeNoMatchError(address)

            feature = features[0]
            properties = feature.get("properties") or {}

            return GeocodingResult(
                address=address,
                position=Coordinate.from_lonlat(feature["geometry"]["coordinates"]),  # ORS returns [lon, lat]
                label=properties.get("label"),
                confidence=properties.get("confidence"),
            )
        except (AttributeError, KeyError, TypeError, ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Error parsing geocoding response for {address}: {e}")

    async def suggest(self, text: str) -> List[Suggestion]:
        """
        Address suggestions for partial input

        Text shorter than the configured minimum gives an empty list
        without calling the service.
        """
        if len(text.strip()) < self.settings.min_query_length:
            return []

        data = await self._get(
            "/geocode/autocomplete",
            params={
                "api_key": self.api_key,
                "text": text,
                "size": self.settings.autocomplete_size,
                "boundary_country": self.settings.country,
            },
            action="Autocomplete",
        )

        try:
            suggestions = []
            for i, feature in enumerate(data.get("features") or []):
                properties = feature.get("properties") or {}
                label = properties.get("label")
                if not label:
                    continue
                key = properties.get("id") or f"{label}-{i}"
                suggestions.append(Suggestion(label=label, key=str(key)))
            return suggestions
        except (AttributeError, TypeError, ValidationError) as e:
            raise MalformedResponseError(f"Error parsing autocomplete response for {text}: {e}")

    async def compute_route(self, start: Coordinate, end: Coordinate, avoid_tolls: bool = False) -> Route:
        """
        Calculate a driving route

        Args:
            start: Start position
            end: Destination position
            avoid_tolls: Exclude toll roads

        Returns:
            Route with geometry in (lat, lon) order and its summary
        """
        request = DirectionsRequest.between(start, end, avoid_tolls=avoid_tolls)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/v2/directions/{self.settings.profile}/geojson",
                    headers=self.headers,
                    json=request.to_body()
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise ServiceError(f"Directions failed: {e}", status_code=e.response.status_code)
        except httpx.HTTPError as e:
            raise ServiceError(f"Directions failed: {e}")
        except ValueError as e:
            raise MalformedResponseError(f"Directions returned invalid JSON: {e}")

        return self._parse_route(data)

    def _parse_route(self, data: Dict[str, Any]) -> Route:
        """Parse a GeoJSON directions response into a Route"""
        try:
            feature = data["features"][0]
            geometry = [Coordinate.from_lonlat(pair) for pair in feature["geometry"]["coordinates"]]
            summary = feature["properties"]["summary"]

            # ORS leaves out zero-valued summary fields
            return Route(
                geometry=geometry,
                summary=RouteSummary(
                    distance=summary.get("distance", 0.0),
                    duration=summary.get("duration", 0.0),
                ),
            )
        except (AttributeError, IndexError, KeyError, TypeError, ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Error parsing directions response: {e}")
