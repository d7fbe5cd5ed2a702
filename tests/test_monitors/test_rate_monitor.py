"""Tests for the frames-per-second monitor."""

import pytest

from monoview.core import RateState
from monoview.errors import ConfigurationError
from monoview.monitors import NS_PER_SECOND, RateMonitor, print_fps


class TestRateMonitor:
    def test_initial_state(self, fake_clock, recorder):
        monitor = RateMonitor(clock=fake_clock, reporter=recorder)
        assert monitor.state == RateState.ACCUMULATING
        assert monitor.tally == 0
        assert monitor.last_fps is None
        assert monitor.reports == 0

    @pytest.mark.parametrize("n", [0, 1, 17, 240])
    def test_reports_frames_seen_in_window(self, fake_clock, recorder, n):
        """N ticks inside one second, then one past it, reports N."""
        monitor = RateMonitor(clock=fake_clock, reporter=recorder)
        step = 0.9 / max(n, 1)
        for _ in range(n):
            fake_clock.advance(step)
            assert monitor.tick() is None

        fake_clock.now = NS_PER_SECOND + 1
        assert monitor.tick() == n
        assert recorder.values == [n]
        assert monitor.tally == 0
        assert monitor.last_fps == n
        assert monitor.state == RateState.ACCUMULATING

    def test_exactly_one_second_does_not_report(self, recorder):
        monitor = RateMonitor(clock=lambda: 0, reporter=recorder)
        monitor.tick(now=NS_PER_SECOND // 2)
        assert monitor.tick(now=NS_PER_SECOND) is None
        assert recorder.values == []
        assert monitor.tally == 2

    def test_just_past_one_second_reports(self, recorder):
        monitor = RateMonitor(clock=lambda: 0, reporter=recorder)
        monitor.tick(now=NS_PER_SECOND // 2)
        assert monitor.tick(now=NS_PER_SECOND + 1) == 1
        assert recorder.values == [1]

    def test_reporting_tick_is_not_counted(self, recorder):
        monitor = RateMonitor(clock=lambda: 0, reporter=recorder)
        monitor.tick(now=2 * NS_PER_SECOND)
        assert monitor.tally == 0
        monitor.tick(now=2 * NS_PER_SECOND + 1)
        assert monitor.tally == 1

    def test_window_restarts_at_reporting_tick(self, recorder):
        """Windows drift: the next one is measured from the late report."""
        monitor = RateMonitor(clock=lambda: 0, reporter=recorder)
        late = NS_PER_SECOND + NS_PER_SECOND // 4
        monitor.tick(now=late)

        assert monitor.tick(now=late + NS_PER_SECOND) is None
        assert monitor.tick(now=late + NS_PER_SECOND + 1) == 1

    def test_uniform_25_fps_over_two_seconds(self, capsys):
        """50 frames spaced 40 ms apart give two 'FPS: 25' lines."""
        period = 40_000_000
        monitor = RateMonitor(clock=lambda: 0, reporter=print_fps)

        reports = []
        k = 0
        while len(reports) < 2:
            k += 1
            fps = monitor.tick(now=k * period)
            if fps is not None:
                reports.append(fps)

        assert reports == [25, 25]
        assert k - len(reports) == 50
        assert capsys.readouterr().out == "FPS: 25\nFPS: 25\n"

    def test_start_resets(self, fake_clock, recorder):
        monitor = RateMonitor(clock=fake_clock, reporter=recorder)
        monitor.tick()
        monitor.tick()
        fake_clock.advance(5.0)
        monitor.start()
        assert monitor.tally == 0
        assert monitor.tick() is None

    def test_custom_window(self, recorder):
        monitor = RateMonitor(window_seconds=0.5, clock=lambda: 0, reporter=recorder)
        assert monitor.window_ns == NS_PER_SECOND // 2
        monitor.tick(now=NS_PER_SECOND // 4)
        assert monitor.tick(now=NS_PER_SECOND // 2 + 1) == 1

    @pytest.mark.parametrize("window", [0, -1.0])
    def test_invalid_window(self, window):
        with pytest.raises(ConfigurationError):
            RateMonitor(window_seconds=window)
