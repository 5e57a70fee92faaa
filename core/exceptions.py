"""
Error types raised by the drawing board and the solver client.
"""


class SketchSolverError(Exception):
    """Base class for recoverable board errors."""


class EmptyBoundsError(SketchSolverError):
    """The raster has no marked pixels, so there is nothing to place results around."""


class SolverUnavailableError(SketchSolverError):
    """The solving service could not be reached or answered with an error."""


class MalformedResponseError(SketchSolverError):
    """The solving service answered with a body that does not match the result schema."""
