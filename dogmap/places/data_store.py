from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import numpy as np
import pandas as pd

from .config import DEFAULT_MAP_CONFIG, MapConfig
from .models import Coordinate, Event, Place
from .sampler import sample_point, sample_points

_frames: dict[Path, pd.DataFrame] = {}


def _split_tags(value: object) -> list[str]:
    if pd.isna(value):
        return []
    return [t.strip() for t in str(value).split("|") if t.strip()]


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    for column in ("categories", "amenities", "tags"):
        if column in df.columns:
            df[column] = df[column].apply(_split_tags)
    return df


def _get_frame(path: Path) -> pd.DataFrame:
    """Return the seed catalog at ``path``, loading it on first call."""
    if path not in _frames:
        _frames[path] = _load(path)
    return _frames[path]


def get_places_frame(config: MapConfig = DEFAULT_MAP_CONFIG) -> pd.DataFrame:
    return _get_frame(config.places_csv)


def get_events_frame(config: MapConfig = DEFAULT_MAP_CONFIG) -> pd.DataFrame:
    return _get_frame(config.events_csv)


def fetch_places(
    center: Coordinate,
    rng: np.random.Generator | None = None,
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> list[Place]:
    """Return the seed places scattered around ``center``."""
    df = get_places_frame(config)
    positions = sample_points(center, config.place_radius_m, len(df), rng)

    places: list[Place] = []
    for (_, row), position in zip(df.iterrows(), positions):
        places.append(Place(
            id=row["id"],
            name=row["name"],
            position=position,
            categories=row["categories"],
            rating=float(row["rating"]),
            open_now=bool(row["open_now"]),
            amenities=row["amenities"],
        ))
    return places


def fetch_events(
    center: Coordinate,
    now: datetime | None = None,
    rng: np.random.Generator | None = None,
    config: MapConfig = DEFAULT_MAP_CONFIG,
) -> list[Event]:
    """Return the seed events scheduled relative to ``now``.

    Events hosted at a place stay close to the center; standalone events
    spread over a wider radius.
    """
    df = get_events_frame(config)
    now = now or datetime.now(timezone.utc)
    rng = rng or np.random.default_rng()

    events: list[Event] = []
    for _, row in df.iterrows():
        place_id = row["place_id"] if pd.notna(row["place_id"]) else None
        radius = (
            config.hosted_event_radius_m if place_id
            else config.standalone_event_radius_m
        )
        start = now + timedelta(hours=float(row["start_offset_hours"]))
        events.append(Event(
            id=row["id"],
            place_id=place_id,
            position=sample_point(center, radius, rng),
            title=row["title"],
            description=row["description"] if pd.notna(row["description"]) else "",
            start_time=start,
            end_time=start + timedelta(hours=float(row["duration_hours"])),
            tags=row["tags"],
        ))
    return events


def catalog_metadata(config: MapConfig = DEFAULT_MAP_CONFIG) -> dict[str, list[str]]:
    """Distinct categories and amenities offered as filter options."""
    df = get_places_frame(config)
    categories = sorted(set(df["categories"].explode().dropna()))
    amenities = sorted(set(df["amenities"].explode().dropna()))
    return {
        "categories": [c for c in config.category_options if c == "all" or c in categories],
        "amenities": amenities,
    }
