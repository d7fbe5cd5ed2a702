"""Synthetic frame source that fills each frame with uniform noise.

Stands in for a camera SDK that hands back a contiguous array of
monochrome pixels: the display and rate monitor cannot tell the
difference.
"""

import logging
from typing import Optional

import numpy as np

from monoview.sources.base import FrameSource, as_sample_array

logger = logging.getLogger(__name__)


class NoiseFrameSource(FrameSource):
    """Frames whose samples are independently uniform over ``[0, 255]``.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.
        seed: Seed for the random generator.  ``None`` seeds from OS
            entropy; pass an int for reproducible frames.
    """

    def __init__(self, width: int, height: int, seed: Optional[int] = None):
        super().__init__(width, height)
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    def fill(self, buffer, width: int, height: int) -> None:
        samples = as_sample_array(buffer, width, height)
        # Generator has no out= for raw bytes; one transient block per frame.
        samples[:] = np.frombuffer(self._rng.bytes(samples.size), dtype=np.uint8)

    def open(self) -> None:
        if not self.is_open:
            # Reopening replays the same sequence for a fixed seed.
            self._rng = np.random.default_rng(self._seed)
        super().open()

    @property
    def source_name(self) -> str:
        return f"noise:{self._width}x{self._height}"

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def is_live(self) -> bool:
        return False
