"""Utilities for monoview."""
