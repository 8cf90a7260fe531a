"""Tests for the HTTP service clients and the nearby search adapter."""
from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest

from datemapz.core.config import ApiSettings
from datemapz.core.schemas import Category, Coordinates
from datemapz.core.search_params import build_search_spec
from datemapz.services.geocoding import Nominatim, create_geocoding_client
from datemapz.services.google_places import (
    GooglePlaces,
    NearbySearch,
    PlacesApiError,
    PlacesSearchAdapter,
    create_google_places_client,
)


def _nearby_payload() -> Dict[str, Any]:
    return {
        "status": "OK",
        "results": [
            {
                "name": "Harbour Lights",
                "vicinity": "1 Pier Rd",
                "geometry": {"location": {"lat": 19.21, "lng": 72.91}},
                "types": ["bar", "restaurant", "point_of_interest"],
                "rating": 4.5,
            },
            {
                "name": "Marine Gardens",
                "vicinity": "Seafront",
                "geometry": {"location": {"lat": 19.22, "lng": 72.92}},
                "types": ["park"],
            },
            {
                "name": "No Geometry Cafe",
                "vicinity": "2 Pier Rd",
                "types": ["cafe"],
            },
        ],
    }


class Recorder:
    """MockTransport handler capturing requests."""

    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.mark.asyncio
async def test_nearby_search_sends_expected_query():
    recorder = Recorder(_nearby_payload())
    client = GooglePlaces("test-key", transport=httpx.MockTransport(recorder))

    output = await client.nearby_search(NearbySearch.around(19.2, 72.9, 2000, "cafe OR park"))
    await client.aclose()

    request = recorder.requests[0]
    assert request.url.path == "/maps/api/place/nearbysearch/json"
    assert request.url.params["location"] == "19.2,72.9"
    assert request.url.params["radius"] == "2000"
    assert request.url.params["keyword"] == "cafe OR park"
    assert request.url.params["key"] == "test-key"
    assert len(output.results) == 3


@pytest.mark.asyncio
async def test_nearby_search_error_status_raises():
    recorder = Recorder({"status": "REQUEST_DENIED", "error_message": "bad key", "results": []})
    async with GooglePlaces("bad", transport=httpx.MockTransport(recorder)) as client:
        with pytest.raises(PlacesApiError) as excinfo:
            await client.nearby_search(NearbySearch.around(0, 0, 1000))

    assert excinfo.value.status == "REQUEST_DENIED"


@pytest.mark.asyncio
async def test_adapter_maps_and_classifies_results():
    client = GooglePlaces("test-key", transport=httpx.MockTransport(Recorder(_nearby_payload())))
    adapter = PlacesSearchAdapter(client)

    records = await adapter.search(Coordinates(lat=19.2, lng=72.9), 2000, "date night")
    await client.aclose()

    assert [record.name for record in records] == ["Harbour Lights", "Marine Gardens"]
    assert records[0].category is Category.BAR
    assert records[0].address == "1 Pier Rd"
    assert records[0].rating == 4.5
    assert records[1].category is Category.PARK


@pytest.mark.asyncio
async def test_adapter_contains_provider_failures():
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = GooglePlaces("test-key", transport=httpx.MockTransport(fail))
    adapter = PlacesSearchAdapter(client)

    assert await adapter.search(Coordinates(lat=1, lng=1), 3000, "anything") == []
    await client.aclose()


@pytest.mark.asyncio
async def test_adapter_contains_http_and_status_errors():
    for recorder in (
        Recorder({"error": "server"}, status_code=500),
        Recorder({"status": "OVER_QUERY_LIMIT", "results": []}),
        Recorder(["not", "an", "object"]),
    ):
        client = GooglePlaces("test-key", transport=httpx.MockTransport(recorder))
        assert await PlacesSearchAdapter(client).search(Coordinates(lat=1, lng=1), 3000, "x") == []
        await client.aclose()


@pytest.mark.asyncio
async def test_nominatim_search_and_reverse():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/search":
            return httpx.Response(200, json=[{"lat": "35.6895", "lon": "139.6917"}])
        return httpx.Response(200, json={"address": {"suburb": "Shibuya", "city": "Tokyo"}})

    requests: List[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    geocoder = Nominatim(user_agent="DateMapzTests/1.0", transport=httpx.MockTransport(recording_handler))

    matches = await geocoder.search("Tokyo")
    record = await geocoder.reverse(35.6895, 139.6917)
    await geocoder.aclose()

    assert matches[0]["lat"] == "35.6895"
    assert record["address"]["city"] == "Tokyo"

    search_request, reverse_request = requests
    assert search_request.url.params["q"] == "Tokyo"
    assert search_request.url.params["limit"] == "1"
    assert search_request.url.params["format"] == "json"
    assert reverse_request.url.params["lon"] == "139.6917"
    assert reverse_request.headers["user-agent"] == "DateMapzTests/1.0"


@pytest.mark.asyncio
async def test_nominatim_unexpected_payload_shapes():
    geocoder = Nominatim(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"error": "x"})))

    assert await geocoder.search("Nowhere") == []
    await geocoder.aclose()


def test_client_factories_use_settings():
    settings = ApiSettings(google_maps_api_key="maps-key", http_timeout_s=3.0)

    places = create_google_places_client(settings)
    geocoder = create_geocoding_client(settings)

    assert isinstance(places, GooglePlaces)
    assert places.api_key == "maps-key"
    assert isinstance(geocoder, Nominatim)


def test_places_factory_requires_key():
    with pytest.raises(RuntimeError):
        create_google_places_client(ApiSettings())


@pytest.mark.asyncio
async def test_adapter_search_with_derived_parameters():
    recorder = Recorder(_nearby_payload())
    client = GooglePlaces("test-key", transport=httpx.MockTransport(recorder))

    spec = build_search_spec(19.2, 72.9, "Romantic", "Transit", True)
    records = await PlacesSearchAdapter(client).search(spec.location, spec.radius_meters, spec.keyword)
    await client.aclose()

    assert len(records) == 2
    params = recorder.requests[0].url.params
    assert params["radius"] == "5000"
    assert params["keyword"] == spec.keyword
