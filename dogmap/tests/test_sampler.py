from __future__ import annotations

import math

import numpy as np
import pytest

from dogmap.places.models import Coordinate
from dogmap.places.sampler import METERS_PER_DEGREE, sample_point, sample_points

CENTER = Coordinate(lat=37.7749, lng=-122.4194)


def _distance_m(a: Coordinate, b: Coordinate) -> float:
    # Same flat approximation the sampler uses.
    return math.hypot(a.lat - b.lat, a.lng - b.lng) * METERS_PER_DEGREE


# ── Radius bound ─────────────────────────────────────────────────────────


@pytest.mark.parametrize("radius", [1.0, 200.0, 2000.0, 3000.0])
def test_samples_stay_within_radius(radius):
    rng = np.random.default_rng(11)
    points = sample_points(CENTER, radius, 2000, rng)
    assert len(points) == 2000
    for p in points:
        assert _distance_m(CENTER, p) <= radius + 1e-6


def test_single_samples_stay_within_radius():
    rng = np.random.default_rng(5)
    for _ in range(1000):
        p = sample_point(CENTER, 500.0, rng)
        assert _distance_m(CENTER, p) <= 500.0 + 1e-6


def test_zero_radius_returns_center_exactly():
    origin = Coordinate(lat=0.0, lng=0.0)
    rng = np.random.default_rng(3)
    for _ in range(100):
        assert sample_point(origin, 0.0, rng) == origin


def test_zero_radius_without_rng():
    origin = Coordinate(lat=0.0, lng=0.0)
    p = sample_point(origin, 0)
    assert p.lat == 0.0
    assert p.lng == 0.0


# ── Distribution ─────────────────────────────────────────────────────────


def test_squared_distance_is_uniform():
    """Uniform areal density means (r/R)^2 is uniform on [0, 1)."""
    radius = 1000.0
    origin = Coordinate(lat=0.0, lng=0.0)
    rng = np.random.default_rng(2024)
    points = sample_points(origin, radius, 5000, rng)

    ratios = np.array([(_distance_m(origin, p) / radius) ** 2 for p in points])
    counts, _ = np.histogram(ratios, bins=10, range=(0.0, 1.0))

    # Expected 500 per decile; sd is about 21.
    for c in counts:
        assert 400 <= c <= 600
    assert abs(ratios.mean() - 0.5) < 0.02


def test_inner_half_radius_holds_a_quarter_of_points():
    radius = 2000.0
    rng = np.random.default_rng(99)
    points = sample_points(CENTER, radius, 4000, rng)
    inner = sum(1 for p in points if _distance_m(CENTER, p) <= radius / 2)
    assert abs(inner / len(points) - 0.25) < 0.03


def test_angles_cover_all_quadrants():
    rng = np.random.default_rng(8)
    points = sample_points(CENTER, 1000.0, 2000, rng)
    quadrants = {
        (p.lat >= CENTER.lat, p.lng >= CENTER.lng) for p in points
    }
    assert len(quadrants) == 4


# ── Determinism & input checks ───────────────────────────────────────────


def test_same_seed_same_points():
    a = sample_points(CENTER, 750.0, 50, np.random.default_rng(42))
    b = sample_points(CENTER, 750.0, 50, np.random.default_rng(42))
    assert a == b


def test_negative_radius_rejected():
    with pytest.raises(ValueError):
        sample_point(CENTER, -1.0)
    with pytest.raises(ValueError):
        sample_points(CENTER, -0.5, 10)


def test_points_near_pole_stay_valid():
    north = Coordinate(lat=89.9999, lng=0.0)
    rng = np.random.default_rng(1)
    for p in sample_points(north, 100_000.0, 500, rng):
        assert -90.0 <= p.lat <= 90.0


def test_points_near_antimeridian_wrap():
    edge = Coordinate(lat=0.0, lng=179.999)
    rng = np.random.default_rng(1)
    points = sample_points(edge, 5000.0, 500, rng)
    for p in points:
        assert -180.0 <= p.lng <= 180.0
    assert any(p.lng < 0 for p in points)
