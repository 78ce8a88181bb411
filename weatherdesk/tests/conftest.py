"""Shared test fixtures."""

from concurrent.futures import Future
from pathlib import Path

import pytest
import yaml

from weatherdesk.models.forecast import (
    CurrentEntry,
    DayNight,
    DayOfWeek,
    FutureEntry,
    Temperature,
    TemperatureKind,
    WarningEntry,
)


class FakeGateway:
    """In-memory gateway: scripted fetch results and a manual push trigger."""

    def __init__(self, results=None, subscribe_error: Exception | None = None):
        self.results = list(results or [])
        self.subscribe_error = subscribe_error
        self.fetch_calls = 0
        self.handlers = []
        self.unsubscribed = 0

    def fetch_forecast(self):
        self.fetch_calls += 1
        result = self.results.pop(0) if self.results else []
        if isinstance(result, Exception):
            raise result
        return result

    def subscribe_refresh(self, handler):
        if self.subscribe_error is not None:
            raise self.subscribe_error
        self.handlers.append(handler)

        def _unsubscribe():
            self.unsubscribed += 1
            if handler in self.handlers:
                self.handlers.remove(handler)

        return _unsubscribe

    def push(self, entries):
        for handler in list(self.handlers):
            handler(entries)


class InlineExecutor:
    """Runs submitted work immediately on the calling thread."""

    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future: Future = Future()
        future.set_result(fn(*args, **kwargs))
        return future

    def shutdown(self, wait=True, cancel_futures=False):
        pass


class DeferredExecutor:
    """Holds submitted work until run_all() is called, keeping a fetch in flight."""

    def __init__(self):
        self.pending = []

    def submit(self, fn, *args, **kwargs):
        self.pending.append((fn, args, kwargs))
        return Future()

    def run_all(self):
        pending, self.pending = self.pending, []
        for fn, args, kwargs in pending:
            fn(*args, **kwargs)

    def shutdown(self, wait=True, cancel_futures=False):
        pass


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway instances."""
    return FakeGateway


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def feed_xml(fixtures_dir: Path) -> bytes:
    return (fixtures_dir / "weather_feed.xml").read_bytes()


@pytest.fixture
def current_entry() -> CurrentEntry:
    return CurrentEntry(
        summary="<b>Temperature:</b> 21.4&deg;C <br/>",
        celsius=Temperature(TemperatureKind.CURRENT, 21.4),
        fahrenheit=Temperature(TemperatureKind.CURRENT, 70.52),
        description="Sunny",
    )


@pytest.fixture
def day_half() -> DayNight:
    return DayNight(
        celsius=Temperature(TemperatureKind.HIGH, 15.0),
        fahrenheit=Temperature(TemperatureKind.HIGH, 59.0),
        day_of_week=DayOfWeek.MONDAY,
        description="Sunny.",
        summary="Sunny. High 15.",
    )


@pytest.fixture
def night_half() -> DayNight:
    return DayNight(
        celsius=Temperature(TemperatureKind.LOW, -9.0),
        fahrenheit=Temperature(TemperatureKind.LOW, 15.8),
        day_of_week=DayOfWeek.MONDAY,
        description="Cloudy periods.",
        summary="Cloudy periods. Low minus 9.",
    )


@pytest.fixture
def future_entry(day_half: DayNight, night_half: DayNight) -> FutureEntry:
    return FutureEntry(day=day_half, night=night_half)


@pytest.fixture
def warning_entry() -> WarningEntry:
    return WarningEntry(title="Frost Advisory", summary="Frost expected overnight.")


@pytest.fixture
def sample_entries(current_entry, future_entry, warning_entry) -> list:
    return [warning_entry, current_entry, future_entry]


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "gateway": {"mode": "feed", "timeout_seconds": 5.0},
        "display": {"unit": "Celsius"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
