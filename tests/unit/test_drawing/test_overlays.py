"""
Unit tests for drawing.overlays module.
"""
import pytest

from core.models import Point
from drawing.overlays import DragController, OverlayStore


class TestOverlayStore:
    """Tests for OverlayStore class."""

    def test_add_returns_distinct_ids(self):
        """Test N adds give N entries with N distinct ids, in order."""
        store = OverlayStore()

        ids = [store.add(f"{i} = {i}", Point(i, i)) for i in range(25)]

        assert len(store) == 25
        assert len(set(ids)) == 25
        assert store.ids() == ids
        assert [a.text for a in store] == [f"{i} = {i}" for i in range(25)]

    def test_add_leaves_existing_entries(self):
        """Test adding does not modify earlier annotations."""
        store = OverlayStore()
        first = store.add("1+1 = 2", Point(5, 5))

        store.add("2+2 = 4", Point(9, 9))

        assert store.get(first).text == "1+1 = 2"
        assert store.get(first).position == Point(5, 5)

    def test_update_position(self):
        """Test an annotation can be moved."""
        store = OverlayStore()
        annotation_id = store.add("x = 3", Point(0, 0))

        store.update_position(annotation_id, Point(12, 34))

        assert store.get(annotation_id).position == Point(12, 34)

    def test_update_unknown_is_noop(self):
        """Test updating a missing id changes nothing."""
        store = OverlayStore()
        annotation_id = store.add("x = 3", Point(0, 0))

        store.update_position("missing", Point(1, 1))

        assert len(store) == 1
        assert store.get(annotation_id).position == Point(0, 0)

    def test_clear(self):
        """Test clear empties the store."""
        store = OverlayStore()
        store.add("a = 1", Point(0, 0))
        store.add("b = 2", Point(0, 0))

        store.clear()

        assert len(store) == 0
        assert store.annotations() == []

    def test_annotations_is_copy(self):
        """Test the returned list does not alias the store."""
        store = OverlayStore()
        store.add("a = 1", Point(0, 0))

        store.annotations().clear()

        assert len(store) == 1


class TestDragController:
    """Tests for DragController class."""

    @pytest.fixture
    def store(self):
        store = OverlayStore()
        store.add("2+2 = 4", Point(30, 25))
        return store

    def test_move_follows_pointer_offset(self, store):
        """Test the live position is the origin plus pointer delta."""
        drag = DragController(store)
        annotation_id = store.ids()[0]

        drag.begin(annotation_id, Point(100, 100))
        live = drag.move(Point(110, 95))

        assert live == Point(40, 20)
        assert drag.target == annotation_id
        # Not committed until release
        assert store.get(annotation_id).position == Point(30, 25)

    def test_end_persists_position(self, store):
        """Test releasing keeps the annotation where it was dropped."""
        drag = DragController(store)
        annotation_id = store.ids()[0]

        drag.begin(annotation_id, Point(0, 0))
        drag.move(Point(5, 5))
        drag.move(Point(20, -5))
        dropped = drag.end()

        assert dropped == Point(50, 20)
        assert store.get(annotation_id).position == Point(50, 20)
        assert drag.target is None

    def test_cancel_reverts(self, store):
        """Test cancelling leaves the stored position unchanged."""
        drag = DragController(store)
        annotation_id = store.ids()[0]

        drag.begin(annotation_id, Point(0, 0))
        drag.move(Point(50, 50))
        drag.cancel()

        assert store.get(annotation_id).position == Point(30, 25)
        assert drag.live_position is None

    def test_drags_are_independent(self, store):
        """Test dragging one annotation does not move another."""
        other = store.add("3+3 = 6", Point(30, 25))
        first = store.ids()[0]
        drag = DragController(store)

        drag.begin(first, Point(0, 0))
        drag.move(Point(10, 0))
        drag.end()

        assert store.get(first).position == Point(40, 25)
        assert store.get(other).position == Point(30, 25)

    def test_begin_unknown_raises(self, store):
        """Test grabbing a missing annotation raises KeyError."""
        with pytest.raises(KeyError):
            DragController(store).begin("missing", Point(0, 0))

    def test_move_without_drag(self, store):
        """Test moving with nothing grabbed returns None."""
        drag = DragController(store)

        assert drag.move(Point(1, 1)) is None
        assert drag.end() is None

    def test_begin_while_dragging_drops_previous(self, store):
        """Test grabbing a second annotation drops the first in place."""
        other = store.add("3+3 = 6", Point(0, 0))
        first = store.ids()[0]
        drag = DragController(store)

        drag.begin(first, Point(0, 0))
        drag.move(Point(5, 5))
        drag.begin(other, Point(0, 0))

        assert store.get(first).position == Point(35, 30)
        assert drag.target == other
