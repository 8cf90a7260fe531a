"""Derive nearby-search parameters from the user's preferences.

The radius and keyword tables are plain data so new transport modes or vibes
can be added without touching the search orchestration.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from datemapz.core.schemas import Coordinates, SearchSpec

DEFAULT_RADIUS_METERS = 3000

RADIUS_BY_TRANSPORT: Dict[str, int] = {
    "walking": 2000,
    "transit": 5000,
    "driving": 10000,
}

ADULT_KEYWORDS: Dict[str, str] = {
    "romantic": "romantic restaurant OR scenic viewpoint OR cocktail lounge OR wine bar",
    "adventurous": "axe throwing OR escape room OR rock climbing OR live music venue OR go karting",
    "artsy": "art gallery OR museum OR theatre OR live music venue OR comedy club",
    "foodie": "gourmet restaurant OR brewery OR distillery OR unique dining OR gastropub",
    "casual": "pub OR bar OR lounge OR beer garden OR sports bar",
}

ALL_AGES_KEYWORDS: Dict[str, str] = {
    "romantic": "romantic restaurant OR scenic viewpoint OR cozy cafe OR beautiful park",
    "adventurous": "adventure OR escape room OR rock climbing OR hiking trail OR outdoor activity OR go karting",
    "artsy": "art gallery OR museum OR public art OR sculpture OR theatre",
    "foodie": "gourmet restaurant OR food market OR unique dining OR top rated food",
    "casual": "cafe OR lounge OR park OR casual dining OR board game cafe",
}

ADULT_FALLBACK_KEYWORD = "bar OR lounge OR point of interest"
ALL_AGES_FALLBACK_KEYWORD = "point of interest"

ADULT_FOOD_KEYWORD = "restaurant OR gastropub OR bar with food"
ALL_AGES_FOOD_KEYWORD = "restaurant OR cafe dinner"

ADULT_AMBIANCE_KEYWORD = "lounge OR rooftop bar OR pool hall"
ALL_AGES_AMBIANCE_KEYWORD = "park OR scenic viewpoint OR dessert"

FOODIE_VIBE = "foodie"


def _normalise(value: Optional[str]) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def radius_for(transport_mode: Optional[str]) -> int:
    """Search radius in meters for a transport mode; unknown modes get the default."""

    return RADIUS_BY_TRANSPORT.get(_normalise(transport_mode), DEFAULT_RADIUS_METERS)


def keyword_for(vibe: Optional[str], is_adult: bool) -> str:
    """Disjunctive Places keyword expressing the vibe for the given age bucket."""

    if is_adult:
        return ADULT_KEYWORDS.get(_normalise(vibe), ADULT_FALLBACK_KEYWORD)
    return ALL_AGES_KEYWORDS.get(_normalise(vibe), ALL_AGES_FALLBACK_KEYWORD)


def food_keyword(is_adult: bool) -> str:
    return ADULT_FOOD_KEYWORD if is_adult else ALL_AGES_FOOD_KEYWORD


def ambiance_keyword(is_adult: bool) -> str:
    return ADULT_AMBIANCE_KEYWORD if is_adult else ALL_AGES_AMBIANCE_KEYWORD


def is_foodie(vibe: Optional[str]) -> bool:
    return _normalise(vibe) == FOODIE_VIBE


def build_search_spec(
    lat: float,
    lng: float,
    vibe: Optional[str],
    transport_mode: Optional[str],
    is_adult: bool,
) -> SearchSpec:
    """Build the primary search for a request."""

    return SearchSpec(
        location=Coordinates(lat=lat, lng=lng),
        radius_meters=radius_for(transport_mode),
        keyword=keyword_for(vibe, is_adult),
    )


def supplemental_search_specs(primary: SearchSpec, vibe: Optional[str], is_adult: bool) -> List[SearchSpec]:
    """Follow-up searches around the primary location, food first unless the vibe already is food."""

    keywords: List[str] = []
    if not is_foodie(vibe):
        keywords.append(food_keyword(is_adult))
    keywords.append(ambiance_keyword(is_adult))
    return [primary.model_copy(update={"keyword": keyword}) for keyword in keywords]
