from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import numpy as np

from dogmap.places.config import MapConfig
from dogmap.places.data_store import catalog_metadata, fetch_events, fetch_places
from dogmap.places.models import Coordinate
from dogmap.places.sampler import METERS_PER_DEGREE

CENTER = Coordinate(lat=40.7128, lng=-74.0060)
NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


def _distance_m(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(a.lat - b.lat, a.lng - b.lng) * METERS_PER_DEGREE


def test_fetch_places_returns_seed_catalog():
    places = fetch_places(CENTER, rng=np.random.default_rng(1))
    assert [p.id for p in places] == [f"p{i}" for i in range(1, 11)]
    by_id = {p.id: p for p in places}
    assert by_id["p4"].categories == ["cafe", "store"]
    assert by_id["p3"].amenities == []
    assert by_id["p3"].open_now is False
    assert by_id["p10"].rating == 5.0
    assert by_id["p1"].amenities == ["dog water bowls", "shaded areas"]


def test_fetch_places_positions_within_radius():
    places = fetch_places(CENTER, rng=np.random.default_rng(2))
    for p in places:
        assert _distance_m(CENTER, p.position) <= 2000.0 + 1e-6


def test_fetch_places_honours_config_radius():
    config = MapConfig(place_radius_m=0.0)
    places = fetch_places(CENTER, rng=np.random.default_rng(3), config=config)
    assert all(p.position == CENTER for p in places)


def test_fetch_events_schedule():
    events = fetch_events(CENTER, now=NOW, rng=np.random.default_rng(4))
    assert [e.id for e in events] == ["e1", "e2", "e3", "e4"]
    by_id = {e.id: e for e in events}

    assert by_id["e1"].place_id == "p2"
    assert by_id["e1"].start_time == NOW + timedelta(hours=2)
    assert by_id["e1"].end_time == NOW + timedelta(hours=4)
    assert by_id["e3"].place_id is None
    assert by_id["e3"].end_time - by_id["e3"].start_time == timedelta(hours=4)
    assert by_id["e4"].tags == ["meetup"]
    for e in events:
        assert e.end_time >= e.start_time


def test_fetch_events_positions_by_kind():
    rng = np.random.default_rng(5)
    for _ in range(20):
        for e in fetch_events(CENTER, now=NOW, rng=rng):
            limit = 200.0 if e.place_id else 3000.0
            assert _distance_m(CENTER, e.position) <= limit + 1e-6


def test_fetch_events_defaults_to_now():
    before = datetime.now(timezone.utc)
    events = fetch_events(CENTER)
    assert events[0].start_time >= before + timedelta(hours=2)


def test_catalog_metadata():
    meta = catalog_metadata()
    assert meta["categories"] == ["all", "cafe", "park", "store"]
    assert meta["amenities"] == ["dog water bowls", "shaded areas"]
