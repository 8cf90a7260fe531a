"""Nearby search adapter producing classified candidate places."""
from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from datemapz.core.classifier import classify
from datemapz.core.schemas import Coordinates, PlaceRecord
from datemapz.services.google_places.client import GooglePlaces
from datemapz.services.google_places.schemas import NearbySearch, PlaceResult

logger = logging.getLogger(__name__)


class PlacesSearchAdapter:
    """Run a single nearby search and never let a provider failure escape.

    An empty list is a valid, degraded outcome: the caller decides whether the
    candidates it ends up with are enough to plan from.
    """

    def __init__(self, client: GooglePlaces) -> None:
        self.client = client

    async def search(self, location: Coordinates, radius_meters: int, keyword: str) -> List[PlaceRecord]:
        logger.info(f"Nearby search: radius={radius_meters}m keyword={keyword!r}")
        try:
            output = await self.client.nearby_search(
                NearbySearch.around(location.lat, location.lng, radius_meters, keyword)
            )
        except Exception as exc:
            logger.warning(f"Nearby search failed for keyword {keyword!r}: {exc}")
            return []

        records: List[PlaceRecord] = []
        for idx, item in enumerate(output.results):
            try:
                place = PlaceResult.model_validate(item)
                records.append(
                    PlaceRecord(
                        name=place.name,
                        address=place.address,
                        lat=place.geometry.location.lat,
                        lng=place.geometry.location.lng,
                        category=classify(place.types),
                        rating=place.rating,
                    )
                )
            except ValidationError as exc:
                logger.warning(f"Skipping nearby result at position {idx}: {exc}")

        logger.info(f"Nearby search for {keyword!r} returned {len(records)} places")
        return records
