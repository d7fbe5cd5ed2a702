"""Core enums for monoview."""

from .enums import RateState, StopReason

__all__ = [
    "RateState",
    "StopReason",
]
