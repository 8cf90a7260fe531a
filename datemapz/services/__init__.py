"""External service integrations for date planning.

This package provides async HTTP clients for the services used by the
planning workflow:

- Google Places: Nearby Search for candidate venues
- Geocoding: Nominatim forward and reverse lookups

Each service module exports:
    - create_*_client: Factory to create the API client from settings
    - The client class itself, usable as an async context manager

Example Usage:
    >>> from datemapz.services.google_places import create_google_places_client, PlacesSearchAdapter
    >>> from datemapz.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> adapter = PlacesSearchAdapter(create_google_places_client(settings))
"""

# Google Places nearby search
from datemapz.services.google_places import (
    GooglePlaces,
    NearbySearch,
    PlaceResult,
    PlacesApiError,
    PlacesSearchAdapter,
    create_google_places_client,
)

# Geocoding
from datemapz.services.geocoding import Nominatim, create_geocoding_client

__all__ = [
    # Google Places
    "GooglePlaces",
    "NearbySearch",
    "PlaceResult",
    "PlacesApiError",
    "PlacesSearchAdapter",
    "create_google_places_client",
    # Geocoding
    "Nominatim",
    "create_geocoding_client",
]
