"""Command-line client for the tour server."""

from __future__ import annotations

import argparse
import json

import httpx

from map_links.routes import full_route_url
from tour_server.schemas import CATEGORY_IDS, DURATION_PRESETS, PlaceReference


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a walking tour")
    parser.add_argument("category", choices=sorted(CATEGORY_IDS), help="Tour category")
    parser.add_argument("location", help="Start location")
    parser.add_argument("duration", type=int, choices=DURATION_PRESETS, help="Duration in minutes")
    parser.add_argument("--lat", type=float, help="Start latitude")
    parser.add_argument("--lng", type=float, help="Start longitude")
    parser.add_argument("--mode", choices=["structured", "grounded"], help="Response mode")
    parser.add_argument("--server-url", default="http://localhost:3000", help="Tour server base URL")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout seconds")
    parser.add_argument("--verbose", action="store_true", help="Print the raw itinerary JSON")
    return parser


def build_payload(args: argparse.Namespace) -> dict:
    payload: dict = {"category": args.category, "location": args.location, "duration": args.duration}
    if args.lat is not None and args.lng is not None:
        payload["latLng"] = {"latitude": args.lat, "longitude": args.lng}
    if args.mode:
        payload["mode"] = args.mode
    return payload


def render_itinerary(data: dict) -> list[str]:
    if data.get("mode") == "grounded":
        lines = [data.get("text", "")]
        route = data.get("routeUrl") or full_route_url(
            PlaceReference.model_validate(chunk) for chunk in data.get("groundingChunks", [])
        )
        if route:
            lines += ["", f"Full route: {route}"]
        return lines

    lines = [data.get("tourName", ""), data.get("summary", "")]
    if data.get("totalDistance"):
        lines.append(f"Distance: {data['totalDistance']}")
    for idx, stop in enumerate(data.get("stops", []), start=1):
        lines.append(f"\n{idx}. {stop.get('name', '')} ({stop.get('timeToSpend', '')})")
        lines.append(f"   {stop.get('description', '')}")
        if stop.get("imageUrl"):
            lines.append(f"   Map: {stop['imageUrl']}")
    if data.get("directions"):
        lines.append("\nDirections:")
        for step in data["directions"]:
            lines.append(f"- {step.get('from', '')} -> {step.get('to', '')}: {step.get('instructions', '')}")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    url = f"{args.server_url}/api/generate-tour"
    # Avoid inheriting system proxy settings that can break localhost calls.
    try:
        with httpx.Client(timeout=args.timeout, trust_env=False) as client:
            resp = client.post(url, json=build_payload(args))
    except httpx.ReadTimeout:
        print("Request timed out. The server may still be generating the tour.")
        print("Try again with a longer timeout, e.g. --timeout 240")
        return 1
    except httpx.RequestError as exc:
        print(f"Could not reach the tour server: {exc}")
        return 1
    if resp.status_code >= 400:
        print("Something went wrong while generating your tour. Please try again.")
        try:
            print(resp.json().get("error", resp.text))
        except ValueError:
            print(resp.text)
        return 1

    data = resp.json()
    print("\n".join(render_itinerary(data)))

    if args.verbose:
        print("\n--- itinerary ---")
        print(json.dumps(data, ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
