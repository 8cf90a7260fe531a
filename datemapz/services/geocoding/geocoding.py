"""Small async client for the public Nominatim geocoding service."""
from __future__ import annotations

from typing import Any, Dict, List

import httpx

from datemapz.core.config import ApiSettings


class Nominatim:
    """Forward and reverse geocoding against an OpenStreetMap Nominatim instance."""

    def __init__(
        self,
        *,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "DateMapz/1.0",
        timeout_s: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"User-Agent": user_agent, "accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0)),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Any:
        response = await self._client.get(path, params={"format": "json", "addressdetails": 1, **params})
        response.raise_for_status()
        return response.json()

    async def search(self, query: str, *, limit: int = 1) -> List[Dict[str, Any]]:
        """Return raw matches (``lat``/``lon`` as strings) for a free-text place name."""

        data = await self._aget("/search", {"q": query, "limit": limit})
        return data if isinstance(data, list) else []

    async def reverse(self, lat: float, lng: float) -> Dict[str, Any]:
        """Return the raw reverse-geocoding record for a coordinate pair."""

        data = await self._aget("/reverse", {"lat": lat, "lon": lng})
        return data if isinstance(data, dict) else {}


def create_geocoding_client(settings: ApiSettings) -> Nominatim:
    """Instantiate the Nominatim client using project settings."""

    return Nominatim(
        base_url=settings.nominatim_url,
        user_agent=settings.nominatim_user_agent,
        timeout_s=settings.http_timeout_s,
    )
