"""Display sinks that present frame views in named windows."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import cv2
import numpy as np

from monoview.display.view import FrameView
from monoview.errors import DisplayError

logger = logging.getLogger(__name__)

NO_KEY = -1


class DisplaySink(ABC):
    """Presents frame views on named surfaces.

    Surfaces are created on first use and reused afterwards.  A sink
    never writes to the buffer behind a view.
    """

    @abstractmethod
    def present(self, view: FrameView, window_title: str) -> int:
        """Render ``view`` on the surface named ``window_title``.

        Returns:
            The key pressed while pumping UI events (low byte), or
            :data:`NO_KEY`.

        Raises:
            DisplayError: If the surface cannot be created or drawn on.
        """

    @abstractmethod
    def close(self) -> None:
        """Release every surface this sink created."""

    def __enter__(self) -> "DisplaySink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class OpenCVDisplaySink(DisplaySink):
    """HighGUI windows via ``cv2.imshow``.

    Args:
        wait_ms: How long each :meth:`present` pumps UI events
            (``cv2.waitKey``).  Must be at least 1; ``0`` would block until
            a key is pressed.
        window_flags: Flags passed to ``cv2.namedWindow``.
    """

    def __init__(self, wait_ms: int = 1, window_flags: int = cv2.WINDOW_AUTOSIZE):
        if wait_ms < 1:
            raise ValueError(f"wait_ms must be >= 1, got {wait_ms}")
        self._wait_ms = wait_ms
        self._window_flags = window_flags
        self._windows: List[str] = []

    def present(self, view: FrameView, window_title: str) -> int:
        if window_title not in self._windows:
            self._create_window(window_title)
        try:
            cv2.imshow(window_title, view.as_array())
            key = cv2.waitKey(self._wait_ms)
        except cv2.error as e:
            raise DisplayError(f"Could not render to window '{window_title}': {e}") from e
        return key & 0xFF if key >= 0 else NO_KEY

    def _create_window(self, window_title: str) -> None:
        try:
            cv2.namedWindow(window_title, self._window_flags)
        except cv2.error as e:
            raise DisplayError(f"Could not create window '{window_title}': {e}") from e
        self._windows.append(window_title)
        logger.info("Display window created: %s", window_title)

    def close(self) -> None:
        if not self._windows:
            return
        while self._windows:
            title = self._windows.pop()
            try:
                cv2.destroyWindow(title)
            except cv2.error as e:
                logger.warning("Could not destroy window '%s': %s", title, e)
        # Give HighGUI a chance to actually tear the windows down.
        try:
            cv2.waitKey(1)
        except cv2.error as e:
            logger.warning("Could not pump events while closing windows: %s", e)

    @property
    def windows(self) -> List[str]:
        return list(self._windows)


class HeadlessDisplaySink(DisplaySink):
    """Off-screen sink that keeps the last image presented per title.

    Each surface holds its own copy of the pixels, the way a window's
    backing store does, so later refills of the frame buffer do not
    change what a surface shows until the next :meth:`present`.
    """

    def __init__(self):
        self._surfaces: Dict[str, np.ndarray] = {}
        self._present_count = 0

    def present(self, view: FrameView, window_title: str) -> int:
        image = view.as_array()
        surface = self._surfaces.get(window_title)
        if surface is None or surface.shape != image.shape:
            surface = np.empty(image.shape, dtype=np.uint8)
            self._surfaces[window_title] = surface
            logger.info("Headless surface created: %s %s", window_title, image.shape)
        np.copyto(surface, image)
        self._present_count += 1
        return NO_KEY

    def surface(self, window_title: str) -> Optional[np.ndarray]:
        """Pixels currently shown on ``window_title``, or ``None``."""
        return self._surfaces.get(window_title)

    def close(self) -> None:
        self._surfaces.clear()

    @property
    def window_titles(self) -> List[str]:
        return list(self._surfaces)

    @property
    def present_count(self) -> int:
        return self._present_count
