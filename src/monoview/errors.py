"""Exception hierarchy for monoview.

Every failure in the capture/display loop is fatal: nothing here is retried.
"""


class MonoviewError(RuntimeError):
    """Base class for all monoview errors."""


class ConfigurationError(MonoviewError, ValueError):
    """Invalid configuration detected at startup (e.g. non-positive width)."""


class DisplayError(MonoviewError):
    """The display surface could not be created or rendered to."""


class SourceUnderflowError(MonoviewError):
    """A frame source supplied fewer than ``width * height`` bytes."""
