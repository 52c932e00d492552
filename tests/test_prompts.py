import pytest

from tour_server.errors import ValidationError
from tour_server.prompts import FOOD_TOUR_GUIDANCE, build_tour_request, validate_request
from tour_server.schemas import CATEGORY_IDS, DURATION_PRESETS, TOUR_RESPONSE_SCHEMA


def _payload(**overrides):
    payload = {"category": "Historical", "location": "Old Town, Prague", "duration": 60}
    payload.update(overrides)
    return payload


@pytest.mark.parametrize("category", sorted(CATEGORY_IDS))
@pytest.mark.parametrize("mode", ["structured", "grounded"])
def test_prompt_quotes_request_verbatim(category, mode):
    request = validate_request(_payload(category=category, duration=90))
    built = build_tour_request(request, mode)
    assert category in built.prompt
    assert "Old Town, Prague" in built.prompt
    assert "90" in built.prompt
    assert "3-5" in built.prompt


@pytest.mark.parametrize("category", sorted(CATEGORY_IDS))
def test_food_guidance_only_for_food_tour(category):
    built = build_tour_request(validate_request(_payload(category=category)), "grounded")
    assert (FOOD_TOUR_GUIDANCE in built.prompt) == (category == "Food tour")


def test_structured_mode_carries_schema():
    built = build_tour_request(validate_request(_payload()), "structured")
    assert built.mode == "structured"
    assert built.response_schema is TOUR_RESPONSE_SCHEMA
    assert "Use real, existing places" in built.prompt


def test_grounded_mode_has_no_schema_and_keeps_bias():
    request = validate_request(_payload(latLng={"latitude": 50.08, "longitude": 14.42}))
    built = build_tour_request(request, "grounded")
    assert built.response_schema is None
    assert built.lat_lng is not None
    assert built.lat_lng.latitude == 50.08
    assert "Google Maps tool" in built.prompt
    assert "latitude 50.08" in built.prompt


def test_request_mode_used_when_not_overridden():
    built = build_tour_request(validate_request(_payload(mode="grounded")))
    assert built.mode == "grounded"


def test_builder_is_deterministic():
    request = validate_request(_payload(category="Food tour"))
    assert build_tour_request(request, "structured") == build_tour_request(request, "structured")


@pytest.mark.parametrize(
    "overrides",
    [
        {"category": "Pub crawl"},
        {"location": "   "},
        {"duration": 45},
        {"duration": -30},
        {"latLng": {"latitude": 91, "longitude": 0}},
        {"latLng": {"latitude": 0, "longitude": 200}},
        {"mode": "xml"},
    ],
)
def test_invalid_requests_raise_validation_error(overrides):
    with pytest.raises(ValidationError):
        validate_request(_payload(**overrides))


def test_missing_fields_are_reported():
    with pytest.raises(ValidationError) as info:
        validate_request({"category": "Historical"})
    assert "location" in info.value.message
    assert "duration" in info.value.message


def test_all_presets_accepted():
    for duration in DURATION_PRESETS:
        assert validate_request(_payload(duration=duration)).duration == duration


def test_prompt_coordinates_without_exponent():
    request = validate_request(_payload(latLng={"latitude": 51.4779, "longitude": -0.00005}))
    prompt = build_tour_request(request, "structured").prompt
    assert "longitude -0.00005" in prompt
    assert "e-05" not in prompt
