from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

ALL_CATEGORIES = "all"


class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class Place(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    position: Coordinate
    categories: list[str] = Field(..., min_length=1)
    rating: float = Field(..., ge=0.0, le=5.0)
    open_now: bool
    amenities: list[str] = Field(default_factory=list)


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    place_id: str | None = None
    position: Coordinate
    title: str
    description: str = ""
    start_time: datetime
    end_time: datetime
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_time_order(self) -> Event:
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class FilterCriteria(BaseModel):
    search_query: str = ""
    category: str = Field(
        default=ALL_CATEGORIES,
        description='Single category tag, or "all" to match every place',
    )
    open_now: bool = False
    show_events: bool = True
    amenities: list[str] = Field(default_factory=list)


class FilterUpdate(BaseModel):
    """Partial update for the session's filter criteria."""

    search_query: str | None = None
    category: str | None = None
    open_now: bool | None = None
    show_events: bool | None = None
    amenities: list[str] | None = None


class AmenityToggle(BaseModel):
    amenity: str = Field(..., min_length=1)


class PlacesResponse(BaseModel):
    places: list[Place]
    total_places: int


class AreaResponse(BaseModel):
    center: Coordinate
    places: list[Place]
    events: list[Event]
    total_places: int
    total_events: int


class PlaceDetail(BaseModel):
    place: Place
    events: list[Event]
