from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class MapConfig:
    places_csv: Path = _DATA_DIR / "places.csv"
    events_csv: Path = _DATA_DIR / "events.csv"
    place_radius_m: float = 2000.0
    hosted_event_radius_m: float = 200.0
    standalone_event_radius_m: float = 3000.0
    category_options: tuple[str, ...] = ("all", "cafe", "park", "store")
    max_sessions: int = 10_000


DEFAULT_MAP_CONFIG = MapConfig()
