"""Geocoding and location resolution services.

This module provides geocoding functionality for converting place names to
coordinates and coordinates to addresses using the Nominatim OpenStreetMap API.

Public API:
    - Nominatim: Async forward/reverse geocoding client
    - create_geocoding_client: Factory building the client from settings
"""
from datemapz.services.geocoding.geocoding import Nominatim, create_geocoding_client

__all__ = [
    "Nominatim",
    "create_geocoding_client",
]
