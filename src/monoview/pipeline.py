"""Capture/display loop wiring a frame source, a display sink and a rate monitor."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from monoview.core import StopReason
from monoview.display import DisplaySink, FrameView, HeadlessDisplaySink, OpenCVDisplaySink
from monoview.errors import ConfigurationError, MonoviewError
from monoview.monitors import RateMonitor
from monoview.monitors.rate_monitor import Clock, Reporter
from monoview.sources import FrameSource, NoiseFrameSource
from monoview.utils.config import MonoviewConfig


logger = logging.getLogger(__name__)


class StopSignal:
    """Cooperative stop request checked once per loop iteration.

    Safe to set from a signal handler or another thread; the loop
    notices on its next iteration boundary.
    """

    def __init__(self):
        self._event = threading.Event()

    def set(self) -> None:
        self._event.set()

    def clear(self) -> None:
        self._event.clear()

    def is_set(self) -> bool:
        return self._event.is_set()


@dataclass
class LoopStats:
    """Summary of one :meth:`StreamLoop.run`."""
    frames: int
    reports: int
    last_fps: Optional[int]
    elapsed_seconds: float
    stop_reason: StopReason

    @property
    def average_fps(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.frames / self.elapsed_seconds


class StreamLoop:
    """Source -> sink -> monitor, one frame per iteration, single thread.

    The view over the source's buffer is built once: the source refills
    the same buffer every read, so the view always shows the latest
    frame without any per-frame allocation.

    Args:
        source: Frame producer; opened and closed by :meth:`run`.
        sink: Where frames are presented; closed by :meth:`run`.
        monitor: Frames-per-second counter, restarted when the loop starts.
        window_title: Name of the display surface.
        stop: Stop signal owned by the caller (a fresh one by default).
        max_frames: Return after this many frames (``None`` = unbounded).
        quit_keys: Characters that end the loop when pressed in the window.
    """

    def __init__(
        self,
        source: FrameSource,
        sink: DisplaySink,
        monitor: RateMonitor,
        window_title: str = "PtGrey Live Feed",
        stop: Optional[StopSignal] = None,
        max_frames: Optional[int] = None,
        quit_keys: Iterable[str] = (),
    ):
        if max_frames is not None and max_frames < 1:
            raise ConfigurationError(f"max_frames must be >= 1, got {max_frames}")
        self.source = source
        self.sink = sink
        self.monitor = monitor
        self.window_title = window_title
        self.stop = stop or StopSignal()
        self.max_frames = max_frames
        self._quit_codes = {ord(k) for k in quit_keys}

        width, height = source.resolution
        self.view = FrameView(source.buffer, width, height)

    @classmethod
    def from_config(
        cls,
        config: MonoviewConfig,
        stop: Optional[StopSignal] = None,
        clock: Optional[Clock] = None,
        reporter: Optional[Reporter] = None,
    ) -> "StreamLoop":
        """Build the source, sink and monitor described by ``config``."""
        source = NoiseFrameSource(
            config.frame.width, config.frame.height, seed=config.source.seed
        )

        if config.display.backend == "headless":
            sink: DisplaySink = HeadlessDisplaySink()
        else:
            sink = OpenCVDisplaySink(wait_ms=config.display.wait_ms)

        monitor = RateMonitor(
            window_seconds=config.rate.window_seconds,
            clock=clock,
            reporter=reporter,
        )

        return cls(
            source=source,
            sink=sink,
            monitor=monitor,
            window_title=config.display.window_title,
            stop=stop,
            max_frames=config.loop.max_frames,
            quit_keys=config.display.quit_keys,
        )

    def run(self) -> LoopStats:
        """Stream until stopped; always releases the source and the sink.

        Raises:
            MonoviewError: On a fatal source or display failure.
        """
        frames = 0
        reason = StopReason.STOP_SIGNAL
        start = time.monotonic()

        self.source.open()
        self.monitor.start()
        logger.info(
            "Streaming %s to '%s' (max_frames=%s)",
            self.source.source_name, self.window_title, self.max_frames,
        )

        try:
            while not self.stop.is_set():
                frame = self.source.read()
                if frame is None:
                    reason = StopReason.SOURCE_EXHAUSTED
                    break

                key = self.sink.present(self.view, self.window_title)
                self.monitor.tick()
                frames += 1

                if key in self._quit_codes:
                    reason = StopReason.QUIT_KEY
                    break
                if self.max_frames is not None and frames >= self.max_frames:
                    reason = StopReason.MAX_FRAMES
                    break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            reason = StopReason.INTERRUPTED
        except MonoviewError as e:
            logger.error("Stream stopped after %d frames: %s", frames, e, exc_info=True)
            raise
        finally:
            self.sink.close()
            self.source.close()

        stats = LoopStats(
            frames=frames,
            reports=self.monitor.reports,
            last_fps=self.monitor.last_fps,
            elapsed_seconds=time.monotonic() - start,
            stop_reason=reason,
        )
        logger.info(
            "Stream finished (%s): %d frames in %.1fs, avg %.1f FPS",
            reason.name, stats.frames, stats.elapsed_seconds, stats.average_fps,
        )
        return stats
