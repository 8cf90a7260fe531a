"""Turn place names into coordinates and coordinates into area descriptions."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from datemapz.core.errors import LocationNotFound
from datemapz.core.schemas import Coordinates

logger = logging.getLogger(__name__)

GENERIC_AREA = "the local area"

# Most specific first.
AREA_KEYS = ("suburb", "neighbourhood", "quarter", "road")
CITY_KEYS = ("city", "town", "village")


class Geocoder(Protocol):
    async def search(self, query: str, *, limit: int = 1) -> List[Dict[str, Any]]: ...

    async def reverse(self, lat: float, lng: float) -> Dict[str, Any]: ...


def _first_present(address: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = address.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def format_area(address: Dict[str, Any]) -> str:
    """Compose ``"the {area} area of {city}"`` from a Nominatim address block."""

    area = _first_present(address, AREA_KEYS)
    city = _first_present(address, CITY_KEYS)
    if area and city:
        return f"the {area} area of {city}"
    return area or city or GENERIC_AREA


class LocationResolver:
    """Geocoding front for the planner.

    Forward lookups are essential (a request without a base location cannot be
    planned) so their failures surface; reverse lookups only add flavour to the
    prompt and degrade to a placeholder.
    """

    def __init__(self, geocoder: Geocoder) -> None:
        self.geocoder = geocoder

    async def resolve_by_name(self, text: str) -> Coordinates:
        query = (text or "").strip()
        if not query:
            raise LocationNotFound("Location not found: empty location name")

        try:
            matches = await self.geocoder.search(query, limit=1)
        except Exception as exc:
            logger.error(f"Forward geocoding failed for {query!r}: {exc}")
            raise LocationNotFound(f"Location not found: {query}") from exc

        if not matches:
            logger.warning(f"No geocoding match for {query!r}")
            raise LocationNotFound(f"Location not found: {query}")

        first = matches[0]
        try:
            coordinates = Coordinates(lat=first.get("lat"), lng=first.get("lon"))
        except ValidationError as exc:
            raise LocationNotFound(f"Location not found: {query}") from exc

        logger.info(f"Resolved {query!r} to {coordinates.lat},{coordinates.lng}")
        return coordinates

    async def describe_area(self, lat: float, lng: float) -> str:
        try:
            record = await self.geocoder.reverse(lat, lng)
        except Exception as exc:
            logger.warning(f"Reverse geocoding failed for {lat},{lng}: {exc}")
            return GENERIC_AREA

        address = record.get("address") if isinstance(record, dict) else None
        if not isinstance(address, dict):
            return GENERIC_AREA
        return format_area(address)
