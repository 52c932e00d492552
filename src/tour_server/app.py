"""FastAPI entry for the tour server."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .errors import TourError
from .executor import handle_generate
from .logging import get_logger
from .resolver import TourResolver
from .schemas import CATEGORIES, DURATION_PRESETS
from .settings import TourSettings, get_settings

app = FastAPI(title="Walking Tour Server", version="0.1.0")
logger = get_logger("app")

GENERIC_ERROR = "Failed to generate tour"


def get_resolver(settings: TourSettings = Depends(get_settings)) -> TourResolver:
    return TourResolver(settings)


@app.on_event("startup")
def log_startup_config() -> None:
    settings = get_settings()
    logger.info(
        "tour_server_config",
        extra={
            "extra": {
                "gemini_model": settings.gemini_model,
                "response_mode": settings.response_mode,
                "mock_llm": settings.mock_llm,
                "gemini_key_set": bool(settings.gemini_api_key),
                "maps_key_set": bool(settings.maps_key),
            }
        },
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/options")
def options() -> dict[str, object]:
    return {
        "categories": [
            {"id": cat.id, "title": cat.title, "description": cat.description} for cat in CATEGORIES
        ],
        "durations": list(DURATION_PRESETS),
        "modes": ["structured", "grounded"],
    }


@app.post("/api/generate-tour")
async def generate_tour(
    request: Request,
    resolver: TourResolver = Depends(get_resolver),
    settings: TourSettings = Depends(get_settings),
):
    # Every failure collapses to one {error} shape for the client.
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            return JSONResponse(status_code=500, content={"error": "Request body must be a JSON object"})
        return await handle_generate(payload, resolver, settings.response_mode)
    except TourError as exc:
        logger.info(
            "generate_tour_error",
            extra={"extra": {"error_code": exc.code, "error": exc.message}},
        )
        return JSONResponse(status_code=500, content={"error": exc.message})
    except Exception as exc:  # noqa: BLE001
        logger.exception("generate_tour_unexpected_error", extra={"extra": {"error": str(exc)}})
        return JSONResponse(status_code=500, content={"error": str(exc) or GENERIC_ERROR})
