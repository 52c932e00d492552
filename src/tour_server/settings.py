"""Tour server configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(ENV_FILE, override=False)

# Value shipped in the sample .env; treated the same as a missing key.
PLACEHOLDER_GEMINI_KEY = "MY_GEMINI_API_KEY"


class TourSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WALKTOUR_", env_file=str(ENV_FILE), extra="ignore", populate_by_name=True
    )

    host: str = "0.0.0.0"
    port: int = 3000

    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY", "WALKTOUR_GEMINI_API_KEY"),
    )
    google_maps_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_MAPS_API_KEY", "WALKTOUR_GOOGLE_MAPS_API_KEY"),
    )
    gemini_model: str = "gemini-2.5-flash"
    response_mode: Literal["structured", "grounded"] = "structured"

    mock_llm: bool = False
    log_level: Literal["debug", "info", "warning", "error"] = "info"

    @property
    def maps_key(self) -> str | None:
        """Static Maps key, or None when blank."""
        if self.google_maps_api_key and self.google_maps_api_key.strip():
            return self.google_maps_api_key
        return None


@lru_cache(maxsize=1)
def get_settings() -> TourSettings:
    return TourSettings()
