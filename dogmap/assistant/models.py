from __future__ import annotations

from pydantic import BaseModel, Field

from ..places.models import Coordinate


class AssistantRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=1000)
    location: Coordinate | None = Field(
        default=None, description="Falls back to the session's map center"
    )


class MapSource(BaseModel):
    uri: str
    title: str = ""


class AiResponse(BaseModel):
    text: str
    sources: list[MapSource] = Field(default_factory=list)
