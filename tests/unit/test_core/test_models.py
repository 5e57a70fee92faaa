"""
Unit tests for core.models module.
"""
import pytest
from core.models import BoundingBox, GeneratedResult, Point, ResultAnnotation, SubmissionOutcome


class TestPoint:
    """Tests for Point dataclass."""

    def test_offset_returns_new_point(self):
        """Test offset leaves the original untouched."""
        p = Point(1, 2)

        moved = p.offset(3, -1)

        assert moved == Point(4, 1)
        assert p == Point(1, 2)

    def test_to_dict(self):
        """Test converting to dictionary."""
        assert Point(1.5, 2).to_dict() == {'x': 1.5, 'y': 2}


class TestBoundingBox:
    """Tests for BoundingBox dataclass."""

    def test_center(self):
        """Test center is the midpoint of min and max."""
        bbox = BoundingBox(min_x=10, min_y=10, max_x=50, max_y=40)

        assert bbox.center == Point(30, 25)

    def test_inclusive_size(self):
        """Test width and height count pixels inclusively."""
        bbox = BoundingBox(min_x=5, min_y=5, max_x=5, max_y=9)

        assert bbox.width == 1
        assert bbox.height == 5

    def test_to_dict(self):
        """Test converting to dictionary."""
        bbox = BoundingBox(1, 2, 3, 4)

        assert bbox.to_dict() == {'min_x': 1, 'min_y': 2, 'max_x': 3, 'max_y': 4}


class TestResultAnnotation:
    """Tests for ResultAnnotation dataclass."""

    def test_to_dict(self):
        """Test converting to dictionary."""
        annotation = ResultAnnotation(id="abc", text="2+2 = 4", position=Point(30, 25))

        assert annotation.to_dict() == {
            'id': 'abc',
            'text': '2+2 = 4',
            'position': {'x': 30, 'y': 25}
        }

    def test_position_is_mutable(self):
        """Test dragging can replace the position."""
        annotation = ResultAnnotation(id="abc", text="x", position=Point(0, 0))

        annotation.position = Point(5, 5)

        assert annotation.position == Point(5, 5)


class TestOutcomeAndResult:
    """Tests for GeneratedResult and SubmissionOutcome."""

    def test_generated_result_to_dict(self):
        """Test converting to dictionary."""
        assert GeneratedResult("x", "3").to_dict() == {'expression': 'x', 'answer': '3'}

    def test_outcome_defaults(self):
        """Test default values for optional fields."""
        outcome = SubmissionOutcome(generation=2)

        assert outcome.results == ()
        assert outcome.position is None
        assert outcome.bounds is None
        assert outcome.discarded is False
        assert outcome.scheduled is False
