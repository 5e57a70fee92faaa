"""
Submission Service - Sends the drawing to the solver and places the results.

This service orchestrates one submission: raster snapshot, solver call,
variable binding updates, bounds-based placement and delayed overlay
creation.
"""
import asyncio
import logging
from typing import Callable, List, Optional, Set, Tuple

from api.schemas import SolveResultItem
from core.constants import DEFAULT_DISPLAY_DELAY, RESULT_TEXT_TEMPLATE
from core.exceptions import EmptyBoundsError
from core.models import BoundingBox, Point, SubmissionOutcome
from drawing.canvas import RasterSurface
from drawing.overlays import OverlayStore
from drawing.variables import VariableBindings
from utils.bbox_utils import bounds_center, compute_bounds
from utils.image_utils import image_to_data_url

logger = logging.getLogger(__name__)


def format_result_text(expression: str, answer: str) -> str:
    """Composite text handed to the math renderer."""
    return RESULT_TEXT_TEMPLATE.format(expression=expression, answer=answer)


class SubmissionService:
    """Runs submissions against the solving service."""

    def __init__(
        self,
        solver,
        overlays: OverlayStore,
        display_delay: float = DEFAULT_DISPLAY_DELAY,
        on_display: Optional[Callable[[SolveResultItem], None]] = None
    ):
        """
        Initialize submission service.

        Args:
            solver: SolverClient (anything with an async solve(image, variables))
            overlays: Store that receives the result annotations
            display_delay: Seconds between the response and the overlays appearing
            on_display: Called for each result when its overlay is created
        """
        self.solver = solver
        self.overlays = overlays
        self.display_delay = display_delay
        self.on_display = on_display
        self.generation = 0
        self._pending: Set[asyncio.Future] = set()

    @property
    def pending_count(self) -> int:
        """Number of overlay batches scheduled but not yet shown."""
        return len(self._pending)

    def invalidate(self) -> int:
        """
        Start a new generation.

        Responses and scheduled overlays from earlier generations are dropped
        when they arrive. Nothing in flight is cancelled.

        Returns:
            The new generation number
        """
        self.generation += 1
        logger.debug("Submission generation is now %d", self.generation)
        return self.generation

    async def submit(self, raster: RasterSurface, bindings: VariableBindings) -> SubmissionOutcome:
        """
        Submit the current drawing.

        Args:
            raster: Drawing surface; a snapshot is taken before the request
            bindings: Variables sent along and updated from assignments

        Returns:
            SubmissionOutcome describing what was applied

        Raises:
            SolverUnavailableError: The service could not be reached
            MalformedResponseError: The service answered with an invalid body
        """
        generation = self.generation

        # Later strokes must not affect placement of this submission's results
        snapshot = raster.snapshot()
        image_url = image_to_data_url(snapshot)

        logger.info(
            "Submitting %dx%d drawing with %d variable(s)",
            snapshot.width, snapshot.height, len(bindings)
        )
        results = await self.solver.solve(image_url, bindings.as_dict())

        if generation != self.generation:
            logger.info(
                "Discarding %d result(s) from generation %d (board was reset)",
                len(results), generation
            )
            return SubmissionOutcome(generation=generation, results=tuple(results), discarded=True)

        for item in results:
            if item.assign:
                bindings.assign(item.expr, item.result)

        bounds, position = self._placement(snapshot)

        outcome = SubmissionOutcome(
            generation=generation,
            results=tuple(results),
            position=position,
            bounds=bounds
        )

        if results:
            self._schedule(results, position, generation)
            outcome.scheduled = True

        return outcome

    async def wait_for_overlays(self) -> None:
        """Wait until every overlay batch scheduled so far has fired."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _placement(self, snapshot) -> Tuple[Optional[BoundingBox], Point]:
        """Bounds of the snapshot and the point results are placed at."""
        bounds = compute_bounds(snapshot)
        try:
            position = bounds_center(bounds)
        except EmptyBoundsError:
            position = Point(snapshot.width / 2, snapshot.height / 2)
            logger.warning("Submitted drawing is blank; placing results at canvas center %s", position)

        return bounds, position

    def _schedule(self, results: List[SolveResultItem], position: Point, generation: int) -> None:
        """Create all overlays of one response together after the display delay."""
        loop = asyncio.get_running_loop()
        done = loop.create_future()

        def show():
            try:
                if generation != self.generation:
                    logger.info("Dropping %d scheduled overlay(s) from generation %d", len(results), generation)
                    return
                for item in results:
                    self.overlays.add(format_result_text(item.expr, item.result), position)
                    if self.on_display is not None:
                        self.on_display(item)
            finally:
                self._pending.discard(done)
                if not done.done():
                    done.set_result(None)

        self._pending.add(done)
        loop.call_later(self.display_delay, show)
