"""Combined walking route links for Google Maps."""

from __future__ import annotations

from typing import Iterable, Protocol
from urllib.parse import quote

MAPS_SEARCH_URL = "https://www.google.com/maps/search/"
MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class HasTitle(Protocol):
    title: str | None


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def unique_place_titles(references: Iterable[HasTitle]) -> list[str]:
    """Titles in first-seen order; exact, case-sensitive de-duplication."""
    seen: dict[str, None] = {}
    for ref in references:
        if ref.title:
            seen.setdefault(ref.title, None)
    return list(seen)


def route_url(titles: list[str]) -> str | None:
    """Map link covering every place, walking between them in order."""
    if not titles:
        return None
    if len(titles) == 1:
        return f"{MAPS_SEARCH_URL}?api=1&query={encode_component(titles[0])}"

    origin = encode_component(titles[0])
    destination = encode_component(titles[-1])
    waypoints = "|".join(encode_component(title) for title in titles[1:-1])
    url = f"{MAPS_DIRECTIONS_URL}?api=1&origin={origin}&destination={destination}"
    if waypoints:
        url += f"&waypoints={waypoints}"
    return url + "&travelmode=walking"


def full_route_url(references: Iterable[HasTitle]) -> str | None:
    return route_url(unique_place_titles(references))
