"""Single-call tour resolver.

Design goals:
- One outbound model call per request, no retries.
- Both response modes come back as one tagged itinerary type.
- Make the flow testable by injecting settings and a client, plus a mock path.
"""

from __future__ import annotations

import asyncio
import json
import time
from types import SimpleNamespace
from typing import Any

from google import genai
from google.genai import types
from pydantic import ValidationError as PydanticValidationError

from map_links.routes import full_route_url
from map_links.staticmap import direction_map_url, stop_image_url

from .errors import ConfigurationError, ParseError, UpstreamError
from .logging import get_logger
from .prompts import BuiltRequest
from .schemas import GroundedItinerary, Itinerary, PlaceReference, StructuredItinerary
from .settings import PLACEHOLDER_GEMINI_KEY, TourSettings

logger = get_logger("resolver")

FALLBACK_TEXT = "Sorry, I couldn't generate a tour at this time."


class TourResolver:
    def __init__(self, settings: TourSettings, client: Any | None = None) -> None:
        self._settings = settings
        self._client = client

    def submit(self, built: BuiltRequest) -> asyncio.Task:
        """Schedule resolution and hand back a cancellable task."""
        return asyncio.create_task(self.resolve(built))

    async def resolve(self, built: BuiltRequest) -> Itinerary:
        response = await self._generate(built)
        if built.mode == "grounded":
            return self._to_grounded(response)
        return self.enrich(parse_structured(response.text or ""))

    async def _generate(self, built: BuiltRequest) -> Any:
        if self._settings.mock_llm:
            return _mock_response(built)

        client = self._get_client()
        start = time.time()
        try:
            response = await client.aio.models.generate_content(
                model=self._settings.gemini_model,
                contents=built.prompt,
                config=build_generate_config(built),
            )
        except Exception as exc:  # noqa: BLE001
            logger.info(
                "llm_error",
                extra={"extra": {"mode": built.mode, "error": str(exc)}},
            )
            raise UpstreamError(f"Tour generation failed: {exc}") from exc
        logger.info(
            "llm_call",
            extra={
                "extra": {
                    "model": self._settings.gemini_model,
                    "mode": built.mode,
                    "latency_ms": int((time.time() - start) * 1000),
                    "text_len": len(response.text or ""),
                }
            },
        )
        return response

    def _get_client(self) -> Any:
        key = self._settings.gemini_api_key
        if not key or key == PLACEHOLDER_GEMINI_KEY:
            raise ConfigurationError("Gemini API Key is missing or invalid. Please check your configuration.")
        if self._client is None:
            self._client = genai.Client(api_key=key)
        return self._client

    def _to_grounded(self, response: Any) -> GroundedItinerary:
        chunks = extract_place_references(response)
        return GroundedItinerary(
            text=response.text or FALLBACK_TEXT,
            grounding_chunks=chunks,
            route_url=full_route_url(chunks),
        )

    def enrich(self, itinerary: StructuredItinerary) -> StructuredItinerary:
        """Attach static map URLs where coordinates allow it."""
        api_key = self._settings.maps_key
        if not api_key:
            return itinerary
        for stop in itinerary.stops:
            if stop.lat is not None and stop.lng is not None:
                stop.image_url = stop_image_url(api_key, stop.lat, stop.lng)
        for direction in itinerary.directions:
            start, end = direction.from_lat_lng, direction.to_lat_lng
            if start is not None and end is not None and start.complete and end.complete:
                direction.map_url = direction_map_url(
                    api_key,
                    (start.lat, start.lng),
                    (end.lat, end.lng),
                )
        return itinerary


def build_generate_config(built: BuiltRequest) -> types.GenerateContentConfig:
    if built.mode == "structured":
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=built.response_schema,
        )
    tool_config = None
    if built.lat_lng is not None:
        tool_config = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(
                    latitude=built.lat_lng.latitude,
                    longitude=built.lat_lng.longitude,
                )
            )
        )
    return types.GenerateContentConfig(
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=tool_config,
    )


def parse_structured(raw_text: str) -> StructuredItinerary:
    """Parse a structured-mode body; missing stops/directions become empty."""
    try:
        tour = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.info("parse_error", extra={"extra": {"raw_len": len(raw_text), "error": str(exc)}})
        raise ParseError("Failed to parse AI response as JSON") from exc
    if not isinstance(tour, dict):
        raise ParseError("Failed to parse AI response as JSON", {"type": type(tour).__name__})

    tour["stops"] = tour.get("stops") or []
    tour["directions"] = tour.get("directions") or []
    tour.pop("mode", None)
    try:
        return StructuredItinerary.model_validate(tour)
    except PydanticValidationError as exc:
        logger.info("parse_error", extra={"extra": {"raw_len": len(raw_text), "error": str(exc)}})
        raise ParseError("AI response does not match the tour schema", {"errors": exc.errors()}) from exc


def extract_place_references(response: Any) -> list[PlaceReference]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    references: list[PlaceReference] = []
    for chunk in chunks:
        place = getattr(chunk, "maps", None)
        if place is None:
            continue
        references.append(
            PlaceReference(
                title=getattr(place, "title", None),
                uri=getattr(place, "uri", None),
                place_id=getattr(place, "place_id", None),
            )
        )
    return references


def _mock_response(built: BuiltRequest) -> SimpleNamespace:
    """Deterministic stand-in for the model; enables E2E flow without a key."""
    if built.mode == "grounded":
        titles = ["Old Town Square", "Market Hall", "Riverside Park"]
        chunks = [
            SimpleNamespace(maps=SimpleNamespace(title=title, uri=f"https://maps.google.com/?cid={idx}", place_id=None))
            for idx, title in enumerate(titles, start=1)
        ]
        text = "\n".join(f"{idx}. **{title}**" for idx, title in enumerate(titles, start=1))
        metadata = SimpleNamespace(grounding_chunks=chunks)
        return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])

    tour = {
        "tourName": "Mock Walking Tour",
        "summary": "A short loop used for local testing.",
        "totalDistance": "1.2 km",
        "stops": [
            {"name": "Old Town Square", "description": "Start here.", "timeToSpend": "15 min", "lat": 50.0875, "lng": 14.4213},
            {"name": "Market Hall", "description": "Snack stop.", "timeToSpend": "20 min", "lat": 50.0860, "lng": 14.4170},
        ],
        "directions": [
            {
                "from": "Old Town Square",
                "to": "Market Hall",
                "instructions": "Walk west along the main street.",
                "fromLatLng": {"lat": 50.0875, "lng": 14.4213},
                "toLatLng": {"lat": 50.0860, "lng": 14.4170},
            }
        ],
    }
    return SimpleNamespace(text=json.dumps(tour), candidates=[])
