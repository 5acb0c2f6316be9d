from __future__ import annotations

import numpy as np

from .models import Coordinate

# Flat local approximation; drifts at large radii and near the poles.
METERS_PER_DEGREE = 111_300.0


def _radius_in_degrees(radius_m: float) -> float:
    if radius_m < 0:
        raise ValueError(f"radius must be non-negative, got {radius_m}")
    return radius_m / METERS_PER_DEGREE


def _normalise(lat: float, lng: float) -> Coordinate:
    """Clamp latitude and wrap longitude back into valid ranges."""
    lat = max(-90.0, min(90.0, lat))
    if lng > 180.0 or lng < -180.0:
        lng = (lng + 180.0) % 360.0 - 180.0
    return Coordinate(lat=lat, lng=lng)


def _offsets(rd: float, u: np.ndarray, v: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    # sqrt(u) keeps the areal density uniform; plain u would crowd the center.
    w = rd * np.sqrt(u)
    t = 2.0 * np.pi * v
    return w * np.cos(t), w * np.sin(t)


def sample_point(
    center: Coordinate,
    radius_m: float,
    rng: np.random.Generator | None = None,
) -> Coordinate:
    """Return a point drawn uniformly from the disk of ``radius_m`` around ``center``."""
    rd = _radius_in_degrees(radius_m)
    rng = rng or np.random.default_rng()

    u, v = rng.random(2)
    x, y = _offsets(rd, np.asarray(u), np.asarray(v))
    return _normalise(center.lat + float(y), center.lng + float(x))


def sample_points(
    center: Coordinate,
    radius_m: float,
    n: int,
    rng: np.random.Generator | None = None,
) -> list[Coordinate]:
    """Vectorised variant of :func:`sample_point` drawing ``n`` points at once."""
    rd = _radius_in_degrees(radius_m)
    rng = rng or np.random.default_rng()

    u = rng.random(n)
    v = rng.random(n)
    xs, ys = _offsets(rd, u, v)
    return [
        _normalise(center.lat + float(y), center.lng + float(x))
        for x, y in zip(xs, ys)
    ]
