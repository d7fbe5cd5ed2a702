"""Frame sources for the monoview preview loop.

Every source owns one flat uint8 buffer of ``width * height`` samples and
refills it in place on each read, so the display side can wrap it once
and never copy.

Quick start::

    from monoview.sources import NoiseFrameSource

    with NoiseFrameSource(1000, 400, seed=7) as src:
        frame = src.read()
        print(frame.buffer.size)  # 400000
"""

from monoview.sources.frame import Frame
from monoview.sources.base import FrameSource, as_sample_array, validate_dimensions
from monoview.sources.noise import NoiseFrameSource
from monoview.sources.callback import CallbackFrameSource, FrameProvider

__all__ = [
    "Frame",
    "FrameSource",
    "NoiseFrameSource",
    "CallbackFrameSource",
    "FrameProvider",
    "as_sample_array",
    "validate_dimensions",
]
