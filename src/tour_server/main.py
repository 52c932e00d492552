"""Run the tour server under uvicorn with settings from the environment."""

from __future__ import annotations

import uvicorn

from .logging import get_logger
from .settings import TourSettings, get_settings

logger = get_logger("main")


def uvicorn_options(settings: TourSettings) -> dict[str, object]:
    return {
        "host": settings.host,
        "port": settings.port,
        "log_level": settings.log_level,
        "reload": False,
    }


def main() -> None:
    settings = get_settings()
    options = uvicorn_options(settings)
    logger.info("tour_server_start", extra={"extra": {"host": settings.host, "port": settings.port}})
    uvicorn.run("tour_server.app:app", **options)


if __name__ == "__main__":
    main()
