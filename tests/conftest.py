from types import SimpleNamespace

import pytest

from tour_server.settings import TourSettings


class FakeModels:
    """Records generate_content calls and returns a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def fake_client(response=None, error=None):
    models = FakeModels(response=response, error=error)
    return SimpleNamespace(aio=SimpleNamespace(models=models)), models


def text_response(text, chunks=None):
    metadata = SimpleNamespace(grounding_chunks=chunks)
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


def maps_chunk(title, uri=None):
    return SimpleNamespace(maps=SimpleNamespace(title=title, uri=uri, place_id=None), web=None)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = {
            "gemini_api_key": "test-key",
            "google_maps_api_key": None,
            "mock_llm": False,
            "response_mode": "structured",
        }
        values.update(overrides)
        return TourSettings(_env_file=None, **values)

    return _make
