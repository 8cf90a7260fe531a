"""Google Places Nearby Search integration.

Public API:
    - GooglePlaces: Async HTTP client for the Places web service
    - create_google_places_client: Factory building the client from settings
    - PlacesSearchAdapter: Failure-contained search returning PlaceRecords
    - NearbySearch: Pydantic schema for nearby search parameters
"""
from datemapz.services.google_places.client import (
    GooglePlaces,
    PlacesApiError,
    create_google_places_client,
)
from datemapz.services.google_places.schemas import NearbySearch, PlaceResult
from datemapz.services.google_places.search import PlacesSearchAdapter

__all__ = [
    "GooglePlaces",
    "PlacesApiError",
    "create_google_places_client",
    "NearbySearch",
    "PlaceResult",
    "PlacesSearchAdapter",
]
