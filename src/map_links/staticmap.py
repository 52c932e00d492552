"""Static Maps URL builder.

Encapsulates the Google Static Maps URL format. Nothing here talks to the
network; the returned URL is fetched later by whoever renders it.
"""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import quote, urlencode

STATIC_MAP_BASE_URL = "https://maps.googleapis.com/maps/api/staticmap"
DEFAULT_SIZE = "800x450"
STOP_ZOOM = 17


def format_coordinate(value: float) -> str:
    """Shortest plain decimal form; never exponent notation (-5e-05 -> -0.00005)."""
    return format(Decimal(repr(float(value))), "f")


def _point(lat: float, lng: float) -> str:
    return f"{format_coordinate(lat)},{format_coordinate(lng)}"


def marker(lat: float, lng: float, *, color: str, label: str | None = None) -> str:
    parts = [f"color:{color}"]
    if label:
        parts.append(f"label:{label}")
    parts.append(_point(lat, lng))
    return "|".join(parts)


def path(points: list[tuple[float, float]], *, color: str, weight: int) -> str:
    parts = [f"color:{color}", f"weight:{weight}"]
    parts.extend(_point(lat, lng) for lat, lng in points)
    return "|".join(parts)


def static_map_url(
    api_key: str,
    *,
    center: tuple[float, float] | None = None,
    zoom: int | None = None,
    size: str = DEFAULT_SIZE,
    markers: list[str] | None = None,
    path_spec: str | None = None,
) -> str:
    """Return a fully-qualified static map image URL.

    Parameter order is fixed so identical inputs always give the same string.
    """
    params: list[tuple[str, str]] = []
    if center is not None:
        params.append(("center", _point(*center)))
    if zoom is not None:
        params.append(("zoom", str(zoom)))
    params.append(("size", size))
    if path_spec:
        params.append(("path", path_spec))
    for spec in markers or []:
        params.append(("markers", spec))
    params.append(("key", api_key))
    # "|" must go out as %7C; ":" and "," are left readable.
    return f"{STATIC_MAP_BASE_URL}?{urlencode(params, safe=':,', quote_via=quote)}"


def stop_image_url(api_key: str, lat: float, lng: float) -> str:
    """Close-up of a single stop with a red marker."""
    return static_map_url(
        api_key,
        center=(lat, lng),
        zoom=STOP_ZOOM,
        markers=[marker(lat, lng, color="red")],
    )


def direction_map_url(api_key: str, start: tuple[float, float], end: tuple[float, float]) -> str:
    """Walking leg drawn as a blue line from marker A to marker B."""
    return static_map_url(
        api_key,
        path_spec=path([start, end], color="0x0000ff", weight=5),
        markers=[
            marker(*start, color="blue", label="A"),
            marker(*end, color="green", label="B"),
        ],
    )
