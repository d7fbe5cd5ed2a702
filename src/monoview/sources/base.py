"""Abstract base class for all monoview frame sources."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Iterator, Optional

import numpy as np

from monoview.errors import ConfigurationError, SourceUnderflowError
from monoview.sources.frame import Frame

logger = logging.getLogger(__name__)


def validate_dimensions(width: int, height: int) -> None:
    """Raise :class:`ConfigurationError` unless both dimensions are positive ints."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ConfigurationError(f"Frame {name} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigurationError(f"Frame {name} must be > 0, got {value}")


def as_sample_array(buffer, width: int, height: int) -> np.ndarray:
    """Return a flat writable uint8 view of the first ``width * height`` samples.

    Accepts a numpy uint8 array or any writable object exposing the
    buffer protocol (``bytearray``, ``memoryview``...).  Never copies.

    Raises:
        ConfigurationError: If the dimensions are not positive.
        SourceUnderflowError: If the buffer is shorter than ``width * height``.
    """
    validate_dimensions(width, height)
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise TypeError(f"Frame buffer must be uint8, got {buffer.dtype}")
        if not buffer.flags.c_contiguous:
            raise ValueError("Frame buffer must be C-contiguous")
        samples = buffer.reshape(-1)
    else:
        samples = np.frombuffer(memoryview(buffer), dtype=np.uint8)

    needed = width * height
    if samples.size < needed:
        raise SourceUnderflowError(
            f"Buffer holds {samples.size} bytes, {width}x{height} frame needs {needed}"
        )
    return samples[:needed]


class FrameSource(ABC):
    """Uniform interface for producing monochrome frames.

    A source owns one flat uint8 buffer sized ``width * height`` at
    construction.  Every :meth:`read` refills that buffer in place through
    :meth:`fill` and hands it out wrapped in a :class:`Frame`, so the
    display side can keep a single zero-copy view over it.

    Usage::

        with NoiseFrameSource(1000, 400) as src:
            for frame in src:
                ...
    """

    def __init__(self, width: int, height: int):
        validate_dimensions(width, height)
        self._width = int(width)
        self._height = int(height)
        self._buffer = np.zeros(self._width * self._height, dtype=np.uint8)

        self._is_open = False
        self._frame_count = 0
        self._start_time = 0.0

    # ------------------------------------------------------------------
    # Frame production
    # ------------------------------------------------------------------

    @abstractmethod
    def fill(self, buffer, width: int, height: int) -> None:
        """Write exactly ``width * height`` samples into ``buffer`` in place.

        Raises:
            ConfigurationError: If the dimensions are not positive.
            SourceUnderflowError: If ``buffer`` (or the underlying provider)
                holds fewer than ``width * height`` bytes.
        """

    @property
    def source_name(self) -> str:
        return f"{type(self).__name__}:{self._width}x{self._height}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        if self._is_open:
            return
        self._is_open = True
        self._frame_count = 0
        self._start_time = time.monotonic()
        logger.info(
            "%s opened: %dx%d (%d bytes per frame)",
            self.source_name, self._width, self._height, self._buffer.size,
        )

    def close(self) -> None:
        if self._is_open:
            self._is_open = False
            logger.info(
                "%s closed after %d frames", self.source_name, self._frame_count
            )

    def read(self) -> Optional[Frame]:
        """Refill the owned buffer and return it as the next frame.

        Returns:
            A :class:`Frame` sharing memory with :attr:`buffer`, or ``None``
            when the source is not open or is exhausted.
        """
        if not self._is_open:
            return None
        self.fill(self._buffer, self._width, self._height)
        return self._emit()

    def _emit(self) -> Frame:
        frame = Frame(
            buffer=self._buffer,
            timestamp=time.monotonic() - self._start_time,
            frame_number=self._frame_count,
            source_name=self.source_name,
            width=self._width,
            height=self._height,
        )
        self._frame_count += 1
        return frame

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def buffer(self) -> np.ndarray:
        """The flat uint8 buffer every frame is written into."""
        return self._buffer

    @property
    def resolution(self) -> tuple[int, int]:
        """``(width, height)`` of the frames produced by this source."""
        return (self._width, self._height)

    @property
    def frames_read(self) -> int:
        return self._frame_count

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    @abstractmethod
    def is_live(self) -> bool:
        """``True`` for sources paced by a device rather than by the caller."""

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "FrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Frame]:
        return self

    def __next__(self) -> Frame:
        frame = self.read()
        if frame is None:
            raise StopIteration
        return frame
