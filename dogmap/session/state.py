from __future__ import annotations

from collections import OrderedDict

from pydantic import BaseModel, Field

from ..assistant.models import AiResponse
from ..places.config import DEFAULT_MAP_CONFIG
from ..places.models import Coordinate, Event, FilterCriteria, Place


class MapSession(BaseModel):
    """What one map view currently shows."""

    center: Coordinate | None = None
    places: list[Place] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    filters: FilterCriteria = Field(default_factory=FilterCriteria)
    last_ai_response: AiResponse | None = None

    def replace_area(self, center: Coordinate, places: list[Place], events: list[Event]) -> None:
        # A refresh supersedes whatever the previous area showed.
        self.center = center
        self.places = list(places)
        self.events = list(events)

    def find_place(self, place_id: str) -> Place | None:
        return next((p for p in self.places if p.id == place_id), None)

    def find_event(self, event_id: str) -> Event | None:
        return next((e for e in self.events if e.id == event_id), None)


_sessions: OrderedDict[str, MapSession] = OrderedDict()


def get_session(
    session_id: str,
    max_sessions: int = DEFAULT_MAP_CONFIG.max_sessions,
) -> MapSession:
    """Return the stored session for ``session_id``, creating it if needed.

    The store keeps at most ``max_sessions`` entries and evicts the least
    recently used one when a new session would exceed the cap.
    """
    session = _sessions.get(session_id)
    if session is not None:
        _sessions.move_to_end(session_id)
        return session

    session = MapSession()
    _sessions[session_id] = session
    while len(_sessions) > max_sessions:
        _sessions.popitem(last=False)
    return session


def peek_session(session_id: str | None) -> MapSession:
    """Return the stored session, or an unsaved empty one for unknown ids."""
    if session_id is None:
        return MapSession()
    session = _sessions.get(session_id)
    if session is None:
        return MapSession()
    _sessions.move_to_end(session_id)
    return session


def session_count() -> int:
    return len(_sessions)


def clear_sessions() -> None:
    _sessions.clear()
