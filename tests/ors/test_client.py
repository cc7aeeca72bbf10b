"""
Tests for OpenRouteService API client
"""

import os
from unittest.mock import Mock, patch

import httpx
import pytest

from routeplanner.config.models import Settings
from routeplanner.core.exceptions import GeocodeNoMatchError, MalformedResponseError, ServiceError
from routeplanner.core.models import Coordinate, GeocodingResult, Route, Suggestion
from routeplanner.ors.client import OpenRouteServiceClient

PARIS = Coordinate(lat=48.8566, lon=2.3522)
LYON = Coordinate(lat=45.7578, lon=4.8320)


def mock_response(data):
    response = Mock()
    response.json.return_value = data
    response.raise_for_status.return_value = None
    return response


def directions_payload(distance=465123.4, duration=16320.0):
    return {
        "type": "FeatureCollection",
        "features": [{
            "geometry": {
                "type": "LineString",
                "coordinates": [[2.3522, 48.8566], [3.5, 47.0], [4.8320, 45.7578]],
            },
            "properties": {"summary": {"distance": distance, "duration": duration}},
        }],
    }


@pytest.fixture
def client():
    return OpenRouteServiceClient(api_key="test_key")


class TestClientInitialization:
    """Test client construction"""

    def test_client_initialization(self, client):
        assert client.api_key == "test_key"
        assert client.base_url == "https://api.openrouteservice.org"
        assert client.timeout == 30

    def test_client_initialization_from_settings(self):
        client = OpenRouteServiceClient(settings=Settings(api_key="settings_key", timeout=5))

        assert client.api_key == "settings_key"
        assert client.timeout == 5

    def test_client_initialization_from_env(self):
        with patch.dict(os.environ, {"ORS_API_KEY": "env_key"}):
            client = OpenRouteServiceClient()
        assert client.api_key == "env_key"

    def test_client_missing_key(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="OpenRouteService API key required"):
                OpenRouteServiceClient()

    def test_headers_property(self, client):
        assert client.headers["Authorization"] == "test_key"
        assert client.headers["Content-Type"] == "application/json"


class TestResolveAddress:
    """Test forward geocoding"""

    @pytest.mark.asyncio
    async def test_resolve_success(self, client):
        payload = {
            "features": [{
                "geometry": {"coordinates": [4.8320, 45.7578]},  # [lon, lat]
                "properties": {"label": "Lyon, France", "confidence": 1},
            }]
        }

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response(payload)

            result = await client.resolve_address("Lyon")

            assert isinstance(result, GeocodingResult)
            assert result.address == "Lyon"
            assert result.position == LYON
            assert result.label == "Lyon, France"
            assert result.confidence == 1

            mock_get.assert_called_once()
            call_args = mock_get.call_args
            assert call_args[0][0] == "https://api.openrouteservice.org/geocode/search"
            assert call_args[1]["params"] == {
                "api_key": "test_key",
                "text": "Lyon",
                "boundary.country": "FR",
            }

    @pytest.mark.asyncio
    async def test_resolve_uses_first_candidate(self, client):
        payload = {
            "features": [
                {"geometry": {"coordinates": [4.8320, 45.7578]}, "properties": {}},
                {"geometry": {"coordinates": [-0.5, 50.0]}, "properties": {}},
            ]
        }

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response(payload)
            result = await client.resolve_address("Lyon")

        assert result.position == LYON
        assert result.label is None

    @pytest.mark.asyncio
    async def test_resolve_no_results(self, client):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response({"features": []})

            with pytest.raises(GeocodeNoMatchError) as exc_info:
                await client.resolve_address("Nowhere at all")

        assert exc_info.value.address == "Nowhere at all"

    @pytest.mark.asyncio
    async def test_resolve_blank_address(self, client):
        with patch("httpx.AsyncClient.get") as mock_get:
            with pytest.raises(ValueError, match="must not be empty"):
                await client.resolve_address("   ")
            mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolve_http_error(self, client):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.side_effect = httpx.HTTPError("API Error")

            with pytest.raises(ServiceError, match="Geocoding failed"):
                await client.resolve_address("Lyon")

    @pytest.mark.asyncio
    async def test_resolve_auth_error_keeps_status(self, client):
        request = httpx.Request("GET", "https://api.openrouteservice.org/geocode/search")
        response = Mock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "403 Forbidden", request=request, response=httpx.Response(403, request=request)
        )

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = response

            with pytest.raises(ServiceError) as exc_info:
                await client.resolve_address("Lyon")

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_resolve_malformed_response(self, client):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response({"features": [{"properties": {}}]})

            with pytest.raises(MalformedResponseError):
                await client.resolve_address("Lyon")

    @pytest.mark.asyncio
    async def test_resolve_uses_configured_country(self):
        client = OpenRouteServiceClient(api_key="k", settings=Settings(country="BE"))
        payload = {"features": [{"geometry": {"coordinates": [4.3517, 50.8503]}}]}

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response(payload)
            await client.resolve_address("Bruxelles")

        assert mock_get.call_args[1]["params"]["boundary.country"] == "BE"


class TestSuggest:
    """Test autocomplete"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "L", "Ly", "  Ly  "])
    async def test_short_input_skips_network(self, client, text):
        with patch("httpx.AsyncClient.get") as mock_get:
            suggestions = await client.suggest(text)

            assert suggestions == []
            mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_suggest_success(self, client):
        payload = {
            "features": [
                {"properties": {"label": "Lyon, France", "id": "101748923"}},
                {"properties": {"label": "Lyons-la-Forêt, France"}},
                {"properties": {"label": "Lyons-la-Forêt, France"}},
            ]
        }

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response(payload)

            suggestions = await client.suggest("Lyo")

            assert suggestions == [
                Suggestion(label="Lyon, France", key="101748923"),
                Suggestion(label="Lyons-la-Forêt, France", key="Lyons-la-Forêt, France-1"),
                Suggestion(label="Lyons-la-Forêt, France", key="Lyons-la-Forêt, France-2"),
            ]

            call_args = mock_get.call_args
            assert call_args[0][0] == "https://api.openrouteservice.org/geocode/autocomplete"
            assert call_args[1]["params"] == {
                "api_key": "test_key",
                "text": "Lyo",
                "size": 5,
                "boundary_country": "FR",
            }

    @pytest.mark.asyncio
    async def test_suggest_skips_features_without_label(self, client):
        payload = {"features": [{"properties": {}}, {"properties": {"label": "Lille", "id": "x"}}]}

        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = mock_response(payload)
            suggestions = await client.suggest("Lil")

        assert [s.label for s in suggestions] == ["Lille"]

    @pytest.mark.asyncio
    async def test_suggest_http_error(self, client):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.side_effect = httpx.ConnectError("Connection refused")

            with pytest.raises(ServiceError, match="Autocomplete failed"):
                await client.suggest("Lyon")


class TestComputeRoute:
    """Test directions"""

    @pytest.mark.asyncio
    async def test_compute_route_success(self, client):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = mock_response(directions_payload())

            route = await client.compute_route(PARIS, LYON)

            assert isinstance(route, Route)
            assert route.geometry[0] == PARIS
            assert route.geometry[-1] == LYON
            assert route.geometry[1] == Coordinate(lat=47.0, lon=3.5)
            assert route.summary.distance == 465123.4
            assert route.summary.duration == 16320.0

            call_args = mock_post.call_args
            assert call_args[0][0] == "https://api.openrouteservice.org/v2/directions/driving-car/geojson"
            assert call_args[1]["headers"]["Authorization"] == "test_key"
            assert call_args[1]["json"]["coordinates"] == [[2.3522, 48.8566], [4.8320, 45.7578]]

    @pytest.mark.asyncio
    async def test_avoid_tolls_adds_option(self, client):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = mock_response(directions_payload())
            await client.compute_route(PARIS, LYON, avoid_tolls=True)

        body = mock_post.call_args[1]["json"]
        assert body["options"] == {"avoid_features": ["tollways"]}

    @pytest.mark.asyncio
    async def test_without_avoid_tolls_option_omitted(self, client):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = mock_response(directions_payload())
            await client.compute_route(PARIS, LYON, avoid_tolls=False)

        body = mock_post.call_args[1]["json"]
        assert "options" not in body

    @pytest.mark.asyncio
    async def test_missing_summary_values_default_to_zero(self, client):
        payload = directions_payload()
        payload["features"][0]["properties"]["summary"] = {}

        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = mock_response(payload)
            route = await client.compute_route(PARIS, PARIS)

        assert route.summary.distance == 0
        assert route.summary.duration == 0

    @pytest.mark.asyncio
    async def test_no_features_is_malformed(self, client):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = mock_response({"features": []})

            with pytest.raises(MalformedResponseError):
                await client.compute_route(PARIS, LYON)

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self, client):
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.side_effect = ValueError("Expecting value")

        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = response

            with pytest.raises(MalformedResponseError, match="invalid JSON"):
                await client.compute_route(PARIS, LYON)

    @pytest.mark.asyncio
    async def test_compute_route_http_error(self, client):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.side_effect = httpx.ReadTimeout("timed out")

            with pytest.raises(ServiceError, match="Directions failed"):
                await client.compute_route(PARIS, LYON)
