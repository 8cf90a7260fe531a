from typing import Any, Dict

import httpx

from datemapz.core.config import ApiSettings
from datemapz.services.google_places.schemas import NearbySearch, NearbySearchOutput

# Statuses the Places API uses for a well-formed answer.
_SUCCESS_STATUSES = {"OK", "ZERO_RESULTS"}


class PlacesApiError(RuntimeError):
    """The Places API answered with an error status."""

    def __init__(self, status: str, message: str | None = None) -> None:
        detail = f"{status}: {message}" if message else status
        super().__init__(f"Places API error {detail}")
        self.status = status


class GooglePlaces:
    """Thin async wrapper around the Google Places web service."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://maps.googleapis.com/maps/api/place",
        timeout_s: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "GooglePlaces":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Execute an authenticated GET request and return the parsed JSON."""

        response = await self._client.get(path, params={"key": self.api_key, **params})
        response.raise_for_status()
        return response.json()

    async def nearby_search(self, input: NearbySearch) -> NearbySearchOutput:
        """Run one Nearby Search and return the raw result items.

        Raises:
            httpx.HTTPError: transport failures, timeouts and non-2xx answers
            PlacesApiError: the API reported an error status (quota, denied key, ...)
        """

        data = await self._aget("/nearbysearch/json", input.model_dump(exclude_none=True))
        output = NearbySearchOutput.model_validate(data)
        if output.status not in _SUCCESS_STATUSES:
            raise PlacesApiError(output.status, output.error_message)
        return output


def create_google_places_client(settings: ApiSettings) -> GooglePlaces:
    """Instantiate the Places client using project settings."""

    api_key = settings.ensure("google_maps_api_key")
    return GooglePlaces(api_key, timeout_s=settings.http_timeout_s)
