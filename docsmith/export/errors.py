"""Export failures surfaced to callers."""


class RenderError(RuntimeError):
    """Raised when the off-screen render produced nothing measurable."""


class DisplaySurfaceBlocked(RuntimeError):
    """Raised when no viewer could be opened for inline display."""
