from __future__ import annotations

import pandas as pd

from .models import ALL_CATEGORIES, Event, FilterCriteria, Place


def filter_places(places: list[Place], criteria: FilterCriteria) -> list[Place]:
    """Return the places matching every criterion, in their original order.

    Each criterion is an independent mask; a place is kept only when all
    masks agree. Unset criteria (empty text, ``"all"`` category, open-now off,
    no required amenities) contribute an all-True mask.
    """
    if not places:
        return []

    df = pd.DataFrame({
        "name": [p.name for p in places],
        "categories": [p.categories for p in places],
        "open_now": [p.open_now for p in places],
        "amenities": [p.amenities for p in places],
    })
    mask = pd.Series(True, index=df.index)

    query = criteria.search_query.lower()
    if query:
        mask = mask & df["name"].str.lower().str.contains(query, regex=False)

    if criteria.category != ALL_CATEGORIES:
        category = criteria.category
        mask = mask & df["categories"].apply(lambda cats: category in cats)

    if criteria.open_now:
        mask = mask & df["open_now"].astype(bool)

    if criteria.amenities:
        required = set(criteria.amenities)
        mask = mask & df["amenities"].apply(lambda am: required.issubset(am))

    return [place for place, keep in zip(places, mask.tolist()) if keep]


def events_for_place(events: list[Event], place_id: str) -> list[Event]:
    """Events hosted at ``place_id``; standalone events never match."""
    return [e for e in events if e.place_id is not None and e.place_id == place_id]


def visible_events(events: list[Event], criteria: FilterCriteria) -> list[Event]:
    return list(events) if criteria.show_events else []


def toggle_amenity(criteria: FilterCriteria, amenity: str) -> FilterCriteria:
    """Add ``amenity`` to the required set, or drop it if already required."""
    if amenity in criteria.amenities:
        amenities = [a for a in criteria.amenities if a != amenity]
    else:
        amenities = [*criteria.amenities, amenity]
    return criteria.model_copy(update={"amenities": amenities})
