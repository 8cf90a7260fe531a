"""Map Google Places type tags onto the application's venue categories."""
from __future__ import annotations

from typing import FrozenSet, Iterable, Tuple

from datemapz.core.schemas import Category

# Evaluated top to bottom; a venue usually carries several overlapping tags and
# only the first matching rule counts.
CATEGORY_RULES: Tuple[Tuple[FrozenSet[str], Category], ...] = (
    (frozenset({"bar", "night_club"}), Category.BAR),
    (frozenset({"cafe"}), Category.CAFE),
    (frozenset({"restaurant"}), Category.FOOD),
    (frozenset({"park", "tourist_attraction"}), Category.PARK),
    (frozenset({"book_store", "clothing_store", "store"}), Category.SHOP),
    (
        frozenset({"art_gallery", "museum", "bowling_alley", "movie_theater", "amusement_park"}),
        Category.ACTIVITY,
    ),
)

DEFAULT_CATEGORY = Category.ACTIVITY


def classify(provider_types: Iterable[str] | None) -> Category:
    """Return the category of the first rule matching any of the provider tags."""

    tags = {tag.lower() for tag in provider_types or () if isinstance(tag, str)}
    for rule_tags, category in CATEGORY_RULES:
        if tags & rule_tags:
            return category
    return DEFAULT_CATEGORY
