"""
Core domain models for the drawing board.

These are pure data structures without business logic.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A position on the drawing surface, in pixels."""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        """Return a new point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel bounds of the marked area of a raster."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        """Number of pixel columns covered."""
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        """Number of pixel rows covered."""
        return self.max_y - self.min_y + 1

    @property
    def center(self) -> Point:
        """Midpoint used to place result overlays."""
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'min_x': self.min_x,
            'min_y': self.min_y,
            'max_x': self.max_x,
            'max_y': self.max_y
        }


@dataclass
class ResultAnnotation:
    """A solved expression shown on top of the drawing."""
    id: str
    text: str
    position: Point

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'text': self.text,
            'position': self.position.to_dict()
        }


@dataclass(frozen=True)
class GeneratedResult:
    """The last expression/answer pair that appeared on the board."""
    expression: str
    answer: str

    def to_dict(self) -> dict:
        return {'expression': self.expression, 'answer': self.answer}


@dataclass
class SubmissionOutcome:
    """What a single submission produced."""
    generation: int
    results: tuple = ()
    position: Optional[Point] = None
    bounds: Optional[BoundingBox] = None
    discarded: bool = False
    scheduled: bool = False
