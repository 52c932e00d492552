"""Prompt construction for walking tour generation.

Keep prompts here so resolver logic remains clean and testable. Everything in
this module is pure: same request in, same prompt out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from map_links.staticmap import format_coordinate

from .errors import ValidationError
from .schemas import FOOD_TOUR, TOUR_RESPONSE_SCHEMA, Coordinates, ResponseMode, TourRequest

FOOD_TOUR_GUIDANCE = (
    "Provide a food tour that includes destinations within a walkable distance from the start point. "
    "Select destinations that are unique to the area, such as food stops with historical significance, "
    "menu items that include dishes or ingredients unique to the local area or region, or are otherwise "
    "highly unique and can only be found in the local area. These destinations should be high quality "
    "with a Google maps rating of at least 4 stars. And you should be able to visit each destination and "
    "partake in the suggested dish within the requested time.\n\n"
    "For each destination, suggest a menu item that is a must try and describe why it is highly "
    "recommended. Be fun, interesting, and detailed in your description."
)

# Categories that get extra place-selection guidance.
CATEGORY_GUIDANCE: dict[str, str] = {FOOD_TOUR: FOOD_TOUR_GUIDANCE}

GROUNDED_INSTRUCTIONS = (
    "For each of the 3-5 main stops in the tour, you MUST:\n"
    "1. Use the Google Maps tool to find the specific location.\n"
    "2. List the stop with its official name, a brief description, estimated time, and walking directions.\n\n"
    "CRITICAL: Only use the Google Maps tool for the main stops of the tour. Do not ground the starting "
    "location if it's a general area, and do not ground other places mentioned in the descriptions.\n\n"
    "The output should be a clear, step-by-step itinerary."
)

STRUCTURED_INSTRUCTIONS = (
    "Plan 3-5 main stops visited in order, with walking directions between consecutive stops.\n\n"
    "Use real, existing places. Ensure coordinates are accurate for the specified location."
)


@dataclass(frozen=True)
class BuiltRequest:
    """Everything the resolver needs for one model call."""

    mode: ResponseMode
    prompt: str
    response_schema: dict[str, Any] | None = None
    lat_lng: Coordinates | None = None


def validate_request(payload: Mapping[str, Any]) -> TourRequest:
    try:
        return TourRequest.model_validate(payload)
    except PydanticValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}" for err in exc.errors()
        ]
        raise ValidationError("Invalid tour request: " + "; ".join(problems), {"errors": problems}) from exc


def category_guidance(category: str) -> str | None:
    return CATEGORY_GUIDANCE.get(category)


def build_prompt(request: TourRequest, mode: ResponseMode) -> str:
    sections = [
        f'Create a sequential walking tour itinerary for a "{request.category}" tour '
        f'starting from "{request.location}".\n'
        f"The total duration should be approximately {request.duration} minutes."
    ]
    if request.lat_lng is not None:
        sections.append(
            f"The start point is at latitude {format_coordinate(request.lat_lng.latitude)}, "
            f"longitude {format_coordinate(request.lat_lng.longitude)}."
        )
    guidance = category_guidance(request.category)
    if guidance:
        sections.append(guidance)
    sections.append(GROUNDED_INSTRUCTIONS if mode == "grounded" else STRUCTURED_INSTRUCTIONS)
    return "\n\n".join(sections)


def build_tour_request(request: TourRequest, mode: ResponseMode | None = None) -> BuiltRequest:
    """Turn a validated request into a prompt plus its response-shaping contract."""
    mode = mode or request.mode or "structured"
    if mode not in ("structured", "grounded"):
        raise ValidationError(f"Unsupported response mode: {mode!r}")
    return BuiltRequest(
        mode=mode,
        prompt=build_prompt(request, mode),
        response_schema=TOUR_RESPONSE_SCHEMA if mode == "structured" else None,
        lat_lng=request.lat_lng,
    )
