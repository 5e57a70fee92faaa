"""
Board session - owns every piece of state for one drawing session.

The canvas, overlays, drag controller, variable bindings and submission
service are created together and handed to the API layer as one object.
"""
import asyncio
import logging
from typing import Optional, Set

from api.schemas import SolveResultItem
from config.settings import Settings
from core.constants import STATUS_FAILED, STATUS_IDLE, STATUS_SUBMITTING
from core.exceptions import SketchSolverError
from core.models import GeneratedResult, Point, SubmissionOutcome
from drawing.canvas import StrokeCanvas
from drawing.overlays import DragController, OverlayStore
from drawing.variables import VariableBindings
from services.solver_client import SolverClient
from services.submission_service import SubmissionService

logger = logging.getLogger(__name__)


class BoardSession:
    """A single-user drawing board."""

    def __init__(
        self,
        canvas: StrokeCanvas,
        solver,
        display_delay: float
    ):
        """
        Initialize the session.

        Args:
            canvas: Drawing surface
            solver: SolverClient used for submissions
            display_delay: Seconds before solved results appear
        """
        self.canvas = canvas
        self.solver = solver
        self.overlays = OverlayStore()
        self.drag = DragController(self.overlays)
        self.variables = VariableBindings()
        self.submissions = SubmissionService(
            solver,
            self.overlays,
            display_delay=display_delay,
            on_display=self._remember_result
        )

        self.latest_result: Optional[GeneratedResult] = None
        self.last_error: Optional[str] = None
        self._failed = False
        self._in_flight: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings: Settings, solver=None) -> "BoardSession":
        """Build a session sized and configured from settings."""
        width, height = settings.get_canvas_size()
        canvas = StrokeCanvas(
            width,
            height,
            color=settings.default_color,
            line_width=settings.stroke_width
        )
        if solver is None:
            solver = SolverClient(base_url=settings.solver_url, timeout=settings.solver_timeout)
        return cls(canvas, solver, display_delay=settings.result_display_delay)

    # ==================== Drawing ====================

    def start_stroke(self, point: Point) -> None:
        self.canvas.start_stroke(point)

    def extend_stroke(self, point: Point) -> None:
        self.canvas.extend_stroke(point)

    def end_stroke(self) -> None:
        self.canvas.end_stroke()

    def set_color(self, color: str) -> None:
        self.canvas.set_color(color)

    # ==================== Submission ====================

    @property
    def status(self) -> str:
        if self._in_flight:
            return STATUS_SUBMITTING
        if self._failed:
            return STATUS_FAILED
        return STATUS_IDLE

    def submit(self) -> asyncio.Task:
        """
        Submit the drawing without waiting for the answer.

        Failures are logged and reported through status/last_error; they are
        never raised to the event loop.

        Returns:
            The task running the submission
        """
        self._failed = False
        self.last_error = None

        task = asyncio.get_running_loop().create_task(self._run_submission())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run_submission(self) -> Optional[SubmissionOutcome]:
        generation = self.submissions.generation
        try:
            return await self.submissions.submit(self.canvas.raster, self.variables)
        except SketchSolverError as e:
            if generation != self.submissions.generation:
                logger.info("Dropping failure from superseded submission: %s", e)
                return None
            logger.error("Submission failed: %s", e)
            self._failed = True
            self.last_error = str(e)
            return None

    async def wait_idle(self) -> None:
        """Wait for in-flight submissions and their scheduled overlays."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))
        await self.submissions.wait_for_overlays()

    def _remember_result(self, item: SolveResultItem) -> None:
        self.latest_result = GeneratedResult(expression=item.expr, answer=item.result)

    # ==================== Reset ====================

    def reset(self) -> None:
        """
        Clear the drawing, overlays and variables in one step.

        Submissions still in flight are not cancelled; their results are
        dropped when they arrive.
        """
        self.canvas.clear()
        self.drag.cancel()
        self.overlays.clear()
        self.variables.clear()
        self.latest_result = None
        self.last_error = None
        self._failed = False
        generation = self.submissions.invalidate()
        logger.info("Board reset (generation %d)", generation)

    # ==================== State ====================

    def state(self) -> dict:
        """Serializable view of the session."""
        return {
            'status': self.status,
            'color': self.canvas.color,
            'is_drawing': self.canvas.is_drawing,
            'canvas': {
                'width': self.canvas.raster.width,
                'height': self.canvas.raster.height
            },
            'overlays': [annotation.to_dict() for annotation in self.overlays],
            'variables': self.variables.as_dict(),
            'latest_result': self.latest_result.to_dict() if self.latest_result else None,
            'last_error': self.last_error,
            'dragging': self.drag.target
        }

    async def close(self) -> None:
        """Release the solver connection."""
        await self.solver.close()
