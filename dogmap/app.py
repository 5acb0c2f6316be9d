from __future__ import annotations

import os
import time
import uuid

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .assistant.gemini_client import DEFAULT_SUGGESTION_QUERY, FALLBACK_TEXT, ask_about_places
from .assistant.models import AiResponse, AssistantRequest
from .notifications.fcm_client import send_notification
from .notifications.models import (
    NotificationDeliveryError,
    NotificationRequest,
    NotificationResult,
)
from .places.data_store import catalog_metadata, fetch_events, fetch_places
from .places.filters import events_for_place, filter_places, toggle_amenity, visible_events
from .places.models import (
    AmenityToggle,
    AreaResponse,
    Coordinate,
    Event,
    FilterCriteria,
    FilterUpdate,
    PlaceDetail,
    PlacesResponse,
)
from .session.state import MapSession, get_session, peek_session

app = FastAPI(title="Dog Friendly Map Assistant API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "dogmap-secret-change-in-production"),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def map_session(request: Request) -> MapSession:
    """Session for endpoints that change state; allocates one on first write."""
    session_id = request.session.get("sid")
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session["sid"] = session_id
    return get_session(session_id)


def read_session(request: Request) -> MapSession:
    """Session for read-only endpoints; never stores a new one."""
    return peek_session(request.session.get("sid"))


def _places_response(session: MapSession) -> PlacesResponse:
    return PlacesResponse(
        places=filter_places(session.places, session.filters),
        total_places=len(session.places),
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return catalog_metadata()


# ── Map area ─────────────────────────────────────────────────────────────


@app.post("/area", response_model=AreaResponse)
def refresh_area(
    center: Coordinate,
    session: MapSession = Depends(map_session),
) -> AreaResponse:
    places = fetch_places(center)
    events = fetch_events(center)
    session.replace_area(center, places, events)

    record_event("area_refresh", {
        "lat": center.lat,
        "lng": center.lng,
        "places_count": len(places),
        "events_count": len(events),
    })

    return AreaResponse(
        center=center,
        places=filter_places(places, session.filters),
        events=visible_events(events, session.filters),
        total_places=len(places),
        total_events=len(events),
    )


@app.get("/places", response_model=PlacesResponse)
def list_places(session: MapSession = Depends(read_session)) -> PlacesResponse:
    return _places_response(session)


@app.get("/places/{place_id}", response_model=PlaceDetail)
def place_detail(place_id: str, session: MapSession = Depends(read_session)) -> PlaceDetail:
    place = session.find_place(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return PlaceDetail(place=place, events=events_for_place(session.events, place_id))


@app.get("/events", response_model=list[Event])
def list_events(session: MapSession = Depends(read_session)) -> list[Event]:
    return visible_events(session.events, session.filters)


@app.get("/events/{event_id}", response_model=Event)
def event_detail(event_id: str, session: MapSession = Depends(read_session)) -> Event:
    event = session.find_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


# ── Filters ──────────────────────────────────────────────────────────────


@app.get("/filters", response_model=FilterCriteria)
def get_filters(session: MapSession = Depends(read_session)) -> FilterCriteria:
    return session.filters


@app.patch("/filters", response_model=PlacesResponse)
def update_filters(
    body: FilterUpdate,
    session: MapSession = Depends(map_session),
) -> PlacesResponse:
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    session.filters = session.filters.model_copy(update=changes)
    record_event("filter_update", session.filters.model_dump())
    return _places_response(session)


@app.post("/filters/amenities/toggle", response_model=PlacesResponse)
def toggle_amenity_filter(
    body: AmenityToggle,
    session: MapSession = Depends(map_session),
) -> PlacesResponse:
    session.filters = toggle_amenity(session.filters, body.amenity)
    record_event("filter_update", session.filters.model_dump())
    return _places_response(session)


# ── AI assistant ─────────────────────────────────────────────────────────


def _ask(query: str, location: Coordinate | None, session: MapSession) -> AiResponse:
    start_time = time.time()
    response = ask_about_places(query, location)
    session.last_ai_response = response

    record_event("assistant_query", {
        "query": query,
        "has_location": location is not None,
        "fallback": response.text == FALLBACK_TEXT,
        "sources_count": len(response.sources),
        "response_time_ms": round((time.time() - start_time) * 1000, 1),
    })
    return response


@app.post("/assistant", response_model=AiResponse)
def assistant(
    body: AssistantRequest,
    session: MapSession = Depends(map_session),
) -> AiResponse:
    return _ask(body.query, body.location or session.center, session)


@app.post("/assistant/suggest", response_model=AiResponse)
def assistant_suggest(session: MapSession = Depends(map_session)) -> AiResponse:
    # Reopening the assistant shows the previous answer instead of asking again.
    if session.last_ai_response is not None:
        return session.last_ai_response
    return _ask(DEFAULT_SUGGESTION_QUERY, session.center, session)


# ── Notifications ────────────────────────────────────────────────────────


@app.post("/notifications/send", response_model=NotificationResult)
def send_push_notification(body: NotificationRequest) -> NotificationResult:
    if not body.token:
        raise HTTPException(status_code=400, detail="Missing FCM token")

    try:
        result = send_notification(body)
    except NotificationDeliveryError as exc:
        record_event("notification", {
            "notification_type": body.type or "general",
            "success": False,
            "status_code": exc.status_code,
        })
        raise HTTPException(status_code=exc.status_code, detail=exc.reason) from exc

    record_event("notification", {
        "notification_type": body.type or "general",
        "success": True,
        "status_code": 200,
    })
    return result


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
