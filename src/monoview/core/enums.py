"""Core enumerations for monoview."""

from enum import Enum, auto


class RateState(Enum):
    """States of the frames-per-second monitor."""
    ACCUMULATING = auto()
    REPORTING = auto()


class StopReason(Enum):
    """Why a stream loop returned."""
    STOP_SIGNAL = auto()
    MAX_FRAMES = auto()
    SOURCE_EXHAUSTED = auto()
    QUIT_KEY = auto()
    INTERRUPTED = auto()
