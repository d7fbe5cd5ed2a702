"""Monitors for the monoview preview loop."""

from .rate_monitor import RateMonitor, print_fps, NS_PER_SECOND

__all__ = [
    "RateMonitor",
    "print_fps",
    "NS_PER_SECOND",
]
