"""Pytest configuration for monoview tests."""

import pytest

from monoview.display import HeadlessDisplaySink
from monoview.monitors import NS_PER_SECOND
from monoview.sources import NoiseFrameSource


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, start_ns: int = 0):
        self.now = start_ns

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> int:
        self.now += int(round(seconds * NS_PER_SECOND))
        return self.now


class ReportRecorder:
    """Reporter that remembers every FPS value instead of printing it."""

    def __init__(self):
        self.values = []

    def __call__(self, fps: int) -> None:
        self.values.append(fps)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return ReportRecorder()


@pytest.fixture
def headless_sink():
    sink = HeadlessDisplaySink()
    yield sink
    sink.close()


@pytest.fixture
def small_source():
    """A seeded 8x4 noise source, already open."""
    with NoiseFrameSource(8, 4, seed=1234) as src:
        yield src
