"""Pytest fixtures for backend tests."""
from itertools import cycle
from typing import Any, Generator, Iterable

import pytest
from fastapi.testclient import TestClient

from slotspin.logic.rng import RNGBase, SeededRNG
from slotspin.main import app, grid_engine, reel_engine
from slotspin.telemetry import telemetry_service


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (seeded statistical simulations)"
    )


class ScriptedRNG(RNGBase):
    """Random source that replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, draws: Iterable[float]):
        self._draws = cycle(list(draws))

    def random(self) -> float:
        return next(self._draws)


def symbol_draw(symbol: int) -> float:
    """A draw that lands squarely on the given symbol (of 3)."""
    return (symbol + 0.5) / 3


def grid_draws(cells: Iterable[int]) -> list[float]:
    """Draws that make GridEngine generate exactly the given cells."""
    return [symbol_draw(cell) for cell in cells]


class RecordingTelemetrySink:
    """Telemetry sink that keeps every emitted event."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def get_events(self, event_name: str) -> list[dict[str, Any]]:
        return [data for name, data in self.events if name == event_name]


@pytest.fixture
def test_client() -> TestClient:
    """Create basic TestClient."""
    return TestClient(app)


@pytest.fixture
def seeded_engines() -> Generator[None, None, None]:
    """Swap the app's engines onto seeded sources for the duration of a test."""
    original = reel_engine.rng, grid_engine.rng
    reel_engine.rng = SeededRNG(seed=1234)
    grid_engine.rng = SeededRNG(seed=5678)
    yield
    reel_engine.rng, grid_engine.rng = original


@pytest.fixture
def recording_telemetry() -> Generator[RecordingTelemetrySink, None, None]:
    """Route telemetry into a RecordingTelemetrySink."""
    sink = RecordingTelemetrySink()
    original = telemetry_service._sink
    telemetry_service.set_sink(sink)
    yield sink
    telemetry_service.set_sink(original)


@pytest.fixture
def client_with_recording_telemetry(
    recording_telemetry: RecordingTelemetrySink,
) -> tuple[TestClient, RecordingTelemetrySink]:
    """TestClient plus the sink its telemetry lands in."""
    return TestClient(app), recording_telemetry
