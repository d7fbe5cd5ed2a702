"""Frame dataclass for the monoview FrameSource abstraction."""

from dataclasses import dataclass

import numpy as np


@dataclass
class Frame:
    """A single monochrome frame with metadata.

    The buffer is owned by the source that produced the frame and is
    overwritten in place by the next :meth:`FrameSource.read`.  Copy it
    if you need to keep the pixels.

    Attributes:
        buffer: Flat uint8 numpy array of length ``width * height``,
            row-major, one sample per pixel.
        timestamp: Seconds since the source was opened (monotonic).
        frame_number: Sequential counter starting from 0.
        source_name: Human-readable identifier, e.g. ``"noise:1000x400"``.
        width: Frame width in pixels.
        height: Frame height in pixels.
    """

    buffer: np.ndarray
    timestamp: float
    frame_number: int
    source_name: str
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.buffer.size != self.width * self.height:
            raise ValueError(
                f"Frame buffer holds {self.buffer.size} samples, "
                f"expected {self.width}x{self.height}"
            )

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixels."""
        return (
            f"Frame(frame_number={self.frame_number}, "
            f"timestamp={self.timestamp:.3f}, "
            f"source_name={self.source_name!r}, "
            f"size={self.width}x{self.height})"
        )
