from __future__ import annotations


class PlotError(RuntimeError):
    pass


class FontError(PlotError):
    """A font could not be resolved or loaded."""


class UnsupportedFormatError(PlotError, ValueError):
    """The output file extension has no registered backend."""


class BackendError(PlotError):
    """A rendering surface could not be created or encoded."""
