"""Frames-per-second monitor for the preview loop.

Counts frames and, once more than one window (one second by default)
has elapsed since the last report, emits the count and starts over.
Windows are not aligned to a fixed tick: each new window starts at the
frame that closed the previous one, so boundaries drift by however far
the last window overran.  Good enough for a coarse throughput readout.
"""

import logging
import time
from typing import Callable, Optional

from monoview.core import RateState
from monoview.errors import ConfigurationError


logger = logging.getLogger(__name__)

NS_PER_SECOND = 1_000_000_000

# Monotonic clock returning integer nanoseconds.
Clock = Callable[[], int]
Reporter = Callable[[int], None]


def print_fps(fps: int) -> None:
    """Default reporter: one ``FPS: <n>`` line on stdout."""
    print(f"FPS: {fps}", flush=True)


class RateMonitor:
    """Approximate frames-per-second counter.

    Each :meth:`tick` either counts one frame (ACCUMULATING) or, when
    strictly more than ``window_seconds`` have passed since the last
    report, passes through REPORTING: the tally is handed to the
    reporter, the tally resets to 0 and the window restarts at ``now``.
    The tick that triggers a report is not counted.

    Args:
        window_seconds: Length of one measurement window.
        clock: Monotonic nanosecond clock (default ``time.monotonic_ns``).
        reporter: Called with the tally at each report (default
            :func:`print_fps`).
    """

    def __init__(
        self,
        window_seconds: float = 1.0,
        clock: Optional[Clock] = None,
        reporter: Optional[Reporter] = None,
    ):
        window_ns = int(round(window_seconds * NS_PER_SECOND))
        if window_ns <= 0:
            raise ConfigurationError(
                f"Rate window must be positive, got {window_seconds}s"
            )
        self._window_ns = window_ns
        self._clock = clock or time.monotonic_ns
        self._reporter = reporter if reporter is not None else print_fps

        self._state = RateState.ACCUMULATING
        self._tally = 0
        self._last_report_ns = self._clock()
        self._last_fps: Optional[int] = None
        self._reports = 0

    def start(self, now: Optional[int] = None) -> None:
        """(Re)start measuring from ``now`` with an empty tally."""
        self._last_report_ns = self._clock() if now is None else now
        self._tally = 0
        self._state = RateState.ACCUMULATING

    def tick(self, now: Optional[int] = None) -> Optional[int]:
        """Observe one processed frame.

        Args:
            now: Current clock reading in nanoseconds (read from the
                clock when omitted).

        Returns:
            The frames-per-second value if this tick closed a window,
            otherwise ``None``.
        """
        if now is None:
            now = self._clock()

        if now - self._last_report_ns > self._window_ns:
            self._state = RateState.REPORTING
            fps = self._tally
            self._last_report_ns = now
            self._tally = 0
            self._last_fps = fps
            self._reports += 1
            logger.debug("Rate window closed: %d frames", fps)
            try:
                self._reporter(fps)
            finally:
                self._state = RateState.ACCUMULATING
            return fps

        self._tally += 1
        return None

    @property
    def state(self) -> RateState:
        return self._state

    @property
    def tally(self) -> int:
        """Frames counted in the current window so far."""
        return self._tally

    @property
    def last_fps(self) -> Optional[int]:
        """Value of the most recent report, ``None`` before the first."""
        return self._last_fps

    @property
    def reports(self) -> int:
        return self._reports

    @property
    def window_ns(self) -> int:
        return self._window_ns
