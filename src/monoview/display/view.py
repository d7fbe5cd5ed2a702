"""Zero-copy 2D views over flat frame buffers."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from monoview.sources.frame import Frame


@dataclass(frozen=True)
class FrameView:
    """Non-owning description of a flat uint8 buffer as a 2D image.

    Nothing is copied: :meth:`as_array` returns a read-only numpy array
    whose memory is the buffer itself, so the buffer must outlive the
    view and every refill of the buffer shows up through the view.

    Attributes:
        buffer: Flat uint8 array holding the samples.  Other buffer-protocol
            objects (``bytearray``, ``memoryview``...) are wrapped, not copied.
        width: Image width in pixels.
        height: Image height in pixels.
        channels: Samples per pixel.  Only ``1`` is supported.
        stride: Bytes from the start of one row to the next.  Defaults to
            ``width * channels`` (tightly packed rows).
    """

    buffer: np.ndarray
    width: int
    height: int
    channels: int = 1
    stride: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.buffer, np.ndarray):
            object.__setattr__(
                self, "buffer", np.frombuffer(memoryview(self.buffer), dtype=np.uint8)
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"View dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.channels != 1:
            raise ValueError(
                f"Only single-channel views are supported, got {self.channels}"
            )
        if (
            self.buffer.dtype != np.uint8
            or self.buffer.ndim != 1
            or not self.buffer.flags.c_contiguous
        ):
            raise ValueError("View buffer must be a flat contiguous uint8 array")

        row_bytes = self.width * self.channels
        stride = row_bytes if self.stride is None else self.stride
        if stride < row_bytes:
            raise ValueError(f"Stride {stride} is shorter than a row ({row_bytes} bytes)")
        object.__setattr__(self, "stride", stride)

        if self.span > self.buffer.size:
            raise ValueError(
                f"A {self.width}x{self.height} view with stride {stride} reads "
                f"{self.span} bytes but the buffer holds {self.buffer.size}"
            )

    @classmethod
    def from_frame(cls, frame: Frame, stride: Optional[int] = None) -> "FrameView":
        """Wrap a frame's buffer without copying it."""
        return cls(
            buffer=frame.buffer.reshape(-1),
            width=frame.width,
            height=frame.height,
            stride=stride,
        )

    @property
    def span(self) -> int:
        """Number of bytes from the first sample to one past the last."""
        return self.stride * (self.height - 1) + self.width * self.channels

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    def as_array(self) -> np.ndarray:
        """Return a read-only ``(height, width)`` array sharing the buffer."""
        image = np.ndarray(
            shape=self.shape,
            dtype=np.uint8,
            buffer=self.buffer,
            offset=0,
            strides=(self.stride, self.channels),
        )
        image.flags.writeable = False
        return image
