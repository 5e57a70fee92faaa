"""
Overlay store - solved results shown on top of the drawing.

Annotations are kept in insertion order, which is also render order. They
are only ever removed all at once by clear(); dragging is the only thing that
changes an annotation after creation.
"""
import logging
import uuid
from typing import Dict, Iterator, List, Optional

from core.models import Point, ResultAnnotation

logger = logging.getLogger(__name__)


class OverlayStore:
    """Ordered collection of result annotations."""

    def __init__(self):
        self._items: Dict[str, ResultAnnotation] = {}

    def add(self, text: str, position: Point) -> str:
        """
        Append a new annotation.

        Args:
            text: "expression = answer" composite
            position: Where the annotation is drawn

        Returns:
            The new annotation's unique id
        """
        annotation_id = str(uuid.uuid4())
        self._items[annotation_id] = ResultAnnotation(
            id=annotation_id,
            text=text,
            position=position
        )
        logger.debug("Added overlay %s %r at %s", annotation_id, text, position)
        return annotation_id

    def update_position(self, annotation_id: str, position: Point) -> None:
        """Move an annotation; unknown ids are ignored."""
        annotation = self._items.get(annotation_id)
        if annotation is None:
            logger.debug("Ignoring position update for unknown overlay %s", annotation_id)
            return
        annotation.position = position

    def get(self, annotation_id: str) -> Optional[ResultAnnotation]:
        return self._items.get(annotation_id)

    def annotations(self) -> List[ResultAnnotation]:
        """Annotations in insertion order."""
        return list(self._items.values())

    def ids(self) -> List[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ResultAnnotation]:
        return iter(self.annotations())

    def __contains__(self, annotation_id: object) -> bool:
        return annotation_id in self._items


class DragController:
    """
    Direct manipulation of a single annotation at a time.

    While a drag is in progress the annotation's rendered position is the
    live position (its position when the drag began plus the pointer's
    offset). Releasing commits the live position to the store, so dragged
    annotations stay where they were dropped.
    """

    def __init__(self, store: OverlayStore):
        self.store = store
        self._target: Optional[str] = None
        self._origin: Optional[Point] = None
        self._pointer_start: Optional[Point] = None
        self._live: Optional[Point] = None

    @property
    def target(self) -> Optional[str]:
        """Id of the annotation being dragged, if any."""
        return self._target

    @property
    def live_position(self) -> Optional[Point]:
        return self._live

    def begin(self, annotation_id: str, pointer: Point) -> None:
        """
        Start dragging an annotation.

        Raises:
            KeyError: If the annotation does not exist
        """
        annotation = self.store.get(annotation_id)
        if annotation is None:
            raise KeyError(annotation_id)

        if self._target is not None:
            self.end()

        self._target = annotation_id
        self._origin = annotation.position
        self._pointer_start = pointer
        self._live = annotation.position

    def move(self, pointer: Point) -> Optional[Point]:
        """
        Follow the pointer.

        Returns:
            The live position to render, or None when nothing is being dragged
        """
        if self._target is None:
            return None

        self._live = self._origin.offset(
            pointer.x - self._pointer_start.x,
            pointer.y - self._pointer_start.y
        )
        return self._live

    def end(self) -> Optional[Point]:
        """Drop the annotation at its live position and return it."""
        if self._target is None:
            return None

        target, position = self._target, self._live
        self.store.update_position(target, position)
        self._reset()
        logger.debug("Overlay %s dropped at %s", target, position)
        return position

    def cancel(self) -> None:
        """Abandon the drag, leaving the stored position untouched."""
        self._reset()

    def _reset(self) -> None:
        self._target = None
        self._origin = None
        self._pointer_start = None
        self._live = None
