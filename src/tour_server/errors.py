"""Error taxonomy for tour generation."""

from __future__ import annotations


class TourError(RuntimeError):
    code = "TOUR_ERROR"

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TourError):
    """Bad input, caught before any outbound call."""

    code = "INVALID_ARGUMENT"


class UpstreamError(TourError):
    """The model call itself failed."""

    code = "UPSTREAM_ERROR"


class ConfigurationError(UpstreamError):
    """Access credential is missing or still the placeholder."""

    code = "MISSING_API_KEY"


class ParseError(TourError):
    """Structured response body was not valid JSON for the tour schema."""

    code = "PARSE_ERROR"
