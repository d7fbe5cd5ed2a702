"""Display side of the preview loop: zero-copy views and window sinks."""

from .view import FrameView
from .sink import DisplaySink, OpenCVDisplaySink, HeadlessDisplaySink, NO_KEY

__all__ = [
    "FrameView",
    "DisplaySink",
    "OpenCVDisplaySink",
    "HeadlessDisplaySink",
    "NO_KEY",
]
