"""Tour request and itinerary models.

Wire names are camelCase; the web client and the CLI read these directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ResponseMode = Literal["structured", "grounded"]

FOOD_TOUR = "Food tour"


@dataclass(frozen=True)
class Category:
    id: str
    title: str
    description: str


CATEGORIES: tuple[Category, ...] = (
    Category(FOOD_TOUR, "Food Tour", "Unique local restaurants, snacks, and beverages."),
    Category("Nature walk", "Nature Walk", "Parks, lakes, gardens, and scenic viewpoints."),
    Category("Points of interest", "Points of Interest", "The most popular landmarks and attractions."),
    Category("Historical", "Historical", "Deep dive into the area's rich history."),
)
CATEGORY_IDS = frozenset(cat.id for cat in CATEGORIES)
DURATION_PRESETS: tuple[int, ...] = (30, 60, 90, 120)


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Coordinates(WireModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class TourRequest(WireModel):
    category: str
    location: str
    duration: int
    lat_lng: Coordinates | None = Field(default=None, alias="latLng")
    mode: ResponseMode | None = None

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in CATEGORY_IDS:
            raise ValueError(f"Unsupported category: {value!r}")
        return value

    @field_validator("location")
    @classmethod
    def _non_empty_location(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Location must not be empty.")
        return value

    @field_validator("duration")
    @classmethod
    def _preset_duration(cls, value: int) -> int:
        if value not in DURATION_PRESETS:
            raise ValueError(f"Duration must be one of {list(DURATION_PRESETS)} minutes.")
        return value


class LatLng(WireModel):
    lat: float | None = None
    lng: float | None = None

    @property
    def complete(self) -> bool:
        return self.lat is not None and self.lng is not None


class Stop(WireModel):
    name: str = ""
    description: str = ""
    time_to_spend: str = Field(default="", alias="timeToSpend")
    lat: float | None = None
    lng: float | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")


class Direction(WireModel):
    from_: str = Field(default="", alias="from")
    to: str = ""
    instructions: str = ""
    from_lat_lng: LatLng | None = Field(default=None, alias="fromLatLng")
    to_lat_lng: LatLng | None = Field(default=None, alias="toLatLng")
    map_url: str | None = Field(default=None, alias="mapUrl")


class PlaceReference(WireModel):
    """A grounding chunk that points at a maps place."""

    title: str | None = None
    uri: str | None = None
    place_id: str | None = Field(default=None, alias="placeId")


class StructuredItinerary(WireModel):
    mode: Literal["structured"] = "structured"
    tour_name: str = Field(default="", alias="tourName")
    summary: str = ""
    total_distance: str = Field(default="", alias="totalDistance")
    stops: list[Stop] = Field(default_factory=list)
    directions: list[Direction] = Field(default_factory=list)


class GroundedItinerary(WireModel):
    mode: Literal["grounded"] = "grounded"
    text: str
    grounding_chunks: list[PlaceReference] = Field(default_factory=list, alias="groundingChunks")
    route_url: str | None = Field(default=None, alias="routeUrl")


Itinerary = Annotated[Union[StructuredItinerary, GroundedItinerary], Field(discriminator="mode")]


def dump_itinerary(itinerary: Itinerary) -> dict[str, Any]:
    """Wire form: camelCase keys, unset optionals omitted."""
    return itinerary.model_dump(by_alias=True, exclude_none=True)


# Gemini response schema for structured mode.
_LAT_LNG_SCHEMA = {
    "type": "OBJECT",
    "properties": {"lat": {"type": "NUMBER"}, "lng": {"type": "NUMBER"}},
    "required": ["lat", "lng"],
}

TOUR_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "tourName": {"type": "STRING"},
        "summary": {"type": "STRING"},
        "totalDistance": {"type": "STRING"},
        "stops": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "timeToSpend": {"type": "STRING"},
                    "lat": {"type": "NUMBER"},
                    "lng": {"type": "NUMBER"},
                },
                "required": ["name", "description", "timeToSpend", "lat", "lng"],
            },
        },
        "directions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "from": {"type": "STRING"},
                    "to": {"type": "STRING"},
                    "instructions": {"type": "STRING"},
                    "fromLatLng": _LAT_LNG_SCHEMA,
                    "toLatLng": _LAT_LNG_SCHEMA,
                },
                "required": ["from", "to", "instructions", "fromLatLng", "toLatLng"],
            },
        },
    },
    "required": ["tourName", "summary", "totalDistance", "stops", "directions"],
}
