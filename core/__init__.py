"""Core package - Domain models, constants and errors."""

from .models import Point, BoundingBox, ResultAnnotation, GeneratedResult, SubmissionOutcome
from .constants import (
    DEFAULT_COLOR,
    SWATCHES,
    DEFAULT_LINE_WIDTH,
    DEFAULT_DISPLAY_DELAY,
    RESULT_TEXT_TEMPLATE
)
from .exceptions import (
    SketchSolverError,
    EmptyBoundsError,
    SolverUnavailableError,
    MalformedResponseError
)

__all__ = [
    'Point',
    'BoundingBox',
    'ResultAnnotation',
    'GeneratedResult',
    'SubmissionOutcome',
    'DEFAULT_COLOR',
    'SWATCHES',
    'DEFAULT_LINE_WIDTH',
    'DEFAULT_DISPLAY_DELAY',
    'RESULT_TEXT_TEMPLATE',
    'SketchSolverError',
    'EmptyBoundsError',
    'SolverUnavailableError',
    'MalformedResponseError'
]
