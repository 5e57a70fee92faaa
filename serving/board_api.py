"""
Board API for the sketch solver.

Provides endpoints for:
- Stroke input and pen color
- Submitting the drawing to the solving service
- Listing and dragging result overlays
- Resetting the board
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import Response

from api.dependencies import create_board_session, get_session
from api.schemas import (
    AnnotationResponse,
    BoardStateResponse,
    ColorRequest,
    PointRequest,
    PointResponse,
    SubmitResponse
)
from core.constants import SWATCHES
from core.models import Point
from serving.board_session import BoardSession
from utils.image_utils import image_to_png_bytes

logger = logging.getLogger(__name__)


def _point(body: PointRequest) -> Point:
    return Point(body.x, body.y)


def create_board_app(session: Optional[BoardSession] = None) -> FastAPI:
    """
    Create the board API.

    Args:
        session: Session to serve (default: one built from settings at startup)

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = session is None
        app.state.session = session if session is not None else create_board_session()
        logger.info("Board API initialized")
        try:
            yield
        finally:
            if owned:
                await app.state.session.close()
            app.state.session = None

    app = FastAPI(
        title="Sketch Solver Board API",
        description="Draw expressions, send them to the solving service and drag the results",
        version="1.0.0",
        lifespan=lifespan
    )

    @app.get("/")
    async def root():
        """API root endpoint."""
        return {
            "name": "Sketch Solver Board API",
            "version": "1.0.0",
            "endpoints": {
                "state": "GET /state",
                "start_stroke": "POST /strokes/start",
                "extend_stroke": "POST /strokes/extend",
                "end_stroke": "POST /strokes/end",
                "set_color": "PUT /color",
                "swatches": "GET /swatches",
                "submit": "POST /submit",
                "reset": "POST /reset",
                "overlays": "GET /overlays",
                "drag_start": "POST /overlays/{overlay_id}/drag/start",
                "drag_move": "POST /overlays/drag/move",
                "drag_end": "POST /overlays/drag/end",
                "canvas": "GET /canvas.png"
            }
        }

    @app.get("/state", response_model=BoardStateResponse)
    async def get_state(session: BoardSession = Depends(get_session)):
        """Current board state."""
        return session.state()

    @app.post("/strokes/start", status_code=204)
    async def start_stroke(body: PointRequest, session: BoardSession = Depends(get_session)):
        """Pointer down on the canvas."""
        session.start_stroke(_point(body))

    @app.post("/strokes/extend", status_code=204)
    async def extend_stroke(body: PointRequest, session: BoardSession = Depends(get_session)):
        """Pointer moved on the canvas."""
        session.extend_stroke(_point(body))

    @app.post("/strokes/end", status_code=204)
    async def end_stroke(session: BoardSession = Depends(get_session)):
        """Pointer released or left the canvas."""
        session.end_stroke()

    @app.put("/color")
    async def set_color(body: ColorRequest, session: BoardSession = Depends(get_session)):
        """Change the pen color for later strokes."""
        try:
            session.set_color(body.color)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"color": session.canvas.color}

    @app.get("/swatches")
    async def get_swatches():
        """Palette offered by the color picker."""
        return SWATCHES

    @app.post("/submit", status_code=202, response_model=SubmitResponse)
    async def submit(session: BoardSession = Depends(get_session)):
        """
        Send the drawing to the solving service.

        Returns immediately; results show up in GET /overlays once solved.
        """
        session.submit()
        return {"status": session.status, "generation": session.submissions.generation}

    @app.post("/reset", response_model=BoardStateResponse)
    async def reset(session: BoardSession = Depends(get_session)):
        """Clear drawing, overlays and variables."""
        session.reset()
        return session.state()

    @app.get("/overlays", response_model=List[AnnotationResponse])
    async def list_overlays(session: BoardSession = Depends(get_session)):
        """Result annotations in render order."""
        return [annotation.to_dict() for annotation in session.overlays]

    @app.post("/overlays/{overlay_id}/drag/start", response_model=PointResponse)
    async def drag_start(
        overlay_id: str,
        body: PointRequest,
        session: BoardSession = Depends(get_session)
    ):
        """Grab an overlay."""
        try:
            session.drag.begin(overlay_id, _point(body))
        except KeyError:
            raise HTTPException(status_code=404, detail="Overlay not found")
        return session.drag.live_position.to_dict()

    @app.post("/overlays/drag/move", response_model=PointResponse)
    async def drag_move(body: PointRequest, session: BoardSession = Depends(get_session)):
        """Move the grabbed overlay; returns the position to render."""
        position = session.drag.move(_point(body))
        if position is None:
            raise HTTPException(status_code=409, detail="No overlay is being dragged")
        return position.to_dict()

    @app.post("/overlays/drag/end", response_model=PointResponse)
    async def drag_end(session: BoardSession = Depends(get_session)):
        """Drop the grabbed overlay where it is."""
        position = session.drag.end()
        if position is None:
            raise HTTPException(status_code=409, detail="No overlay is being dragged")
        return position.to_dict()

    @app.get("/canvas.png")
    async def get_canvas(session: BoardSession = Depends(get_session)):
        """PNG snapshot of the raster."""
        return Response(
            content=image_to_png_bytes(session.canvas.raster.snapshot()),
            media_type="image/png"
        )

    return app


# Export app for uvicorn
app = create_board_app()
