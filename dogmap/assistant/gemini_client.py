from __future__ import annotations

import logging
from typing import Any

from google.genai import Client, types

from ..places.models import Coordinate
from .config import DEFAULT_ASSISTANT_CONFIG, AssistantConfig
from .models import AiResponse, MapSource

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'You are the assistant inside a "Dog Friendly Map" app and you help '
    "people find places that welcome dogs.\n"
    "- Open with a very short answer of one or two sentences.\n"
    "- Follow it with a bulleted list of suggested places.\n"
    "- For each place give its name and a brief reason it fits the request.\n"
    "- Use the googleMaps tool so that every suggestion comes with a map link; "
    "a suggestion without a link is not useful.\n"
    "- Stay friendly and concise."
)

FALLBACK_TEXT = (
    "Sorry, I encountered an error while searching. "
    "Please check your connection or try again later."
)

DEFAULT_SUGGESTION_QUERY = "Suggest some good dog friendly places nearby"


def _fallback() -> AiResponse:
    return AiResponse(text=FALLBACK_TEXT, sources=[])


def _build_user_message(query: str, location: Coordinate | None) -> str:
    if location:
        context = (
            f"The user is currently located at latitude {location.lat} "
            f"and longitude {location.lng}."
        )
    else:
        context = "The user has not provided their location."
    return f'{context}\n\nUser query: "{query}"'


def _build_request_config(location: Coordinate | None) -> types.GenerateContentConfig:
    tool_config = None
    if location:
        tool_config = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(latitude=location.lat, longitude=location.lng),
            ),
        )
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_PROMPT,
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=tool_config,
    )


def _extract_map_sources(response: Any) -> list[MapSource]:
    """Keep only the grounding chunks that point at Google Maps."""
    candidates = response.candidates or []
    if not candidates:
        return []
    metadata = candidates[0].grounding_metadata
    if metadata is None or not metadata.grounding_chunks:
        return []

    sources: list[MapSource] = []
    for chunk in metadata.grounding_chunks:
        maps = chunk.maps
        if maps is None or not maps.uri:
            continue
        sources.append(MapSource(uri=maps.uri, title=maps.title or ""))
    return sources


def ask_about_places(
    query: str,
    location: Coordinate | None = None,
    config: AssistantConfig = DEFAULT_ASSISTANT_CONFIG,
) -> AiResponse:
    """
    Ask Gemini for dog-friendly places, grounded on Google Maps.

    Returns the answer text with its map citations. Returns the apology
    text with no citations on any failure (disabled, missing key, API
    error, empty answer).
    """
    if not config.enabled or not config.api_key:
        logger.warning("Gemini assistant is disabled or has no API key")
        return _fallback()

    try:
        client = Client(
            api_key=config.api_key,
            http_options=types.HttpOptions(timeout=config.timeout_ms),
        )
        response = client.models.generate_content(
            model=config.model,
            contents=_build_user_message(query, location),
            config=_build_request_config(location),
        )

        text = response.text
        if not text:
            logger.warning("Gemini returned an empty answer, using fallback")
            return _fallback()

        return AiResponse(text=text, sources=_extract_map_sources(response))

    except Exception:
        logger.warning("Gemini call failed, using fallback", exc_info=True)
        return _fallback()
