"""Protocol adapter for incoming requests.

Keep this layer thin so protocol changes do not affect core resolver logic.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from .logging import get_logger
from .prompts import build_tour_request, validate_request
from .resolver import TourResolver
from .schemas import dump_itinerary

logger = get_logger("executor")


async def handle_generate(payload: Mapping[str, Any], resolver: TourResolver, default_mode: str) -> dict[str, Any]:
    # Validation happens here so nothing goes out for a bad request.
    request = validate_request(payload)
    built = build_tour_request(request, request.mode or default_mode)
    logger.info(
        "generate_tour",
        extra={
            "extra": {
                "category": request.category,
                "location": request.location,
                "duration": request.duration,
                "mode": built.mode,
                "has_lat_lng": request.lat_lng is not None,
            }
        },
    )
    started_at_ts = time.time()
    itinerary = await resolver.resolve(built)
    logger.info(
        "generate_tour_done",
        extra={"extra": {"mode": built.mode, "latency_ms": int((time.time() - started_at_ts) * 1000)}},
    )
    return dump_itinerary(itinerary)
