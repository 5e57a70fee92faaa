"""
API Dependencies - Dependency injection for FastAPI.

Provides the board session and solver client to route handlers.
"""
from fastapi import HTTPException, Request

from config.settings import settings
from serving.board_session import BoardSession
from services.solver_client import SolverClient


def get_solver_client() -> SolverClient:
    """
    Build a solver client from settings.

    Returns:
        SolverClient configured for the solving service
    """
    return SolverClient(
        base_url=settings.solver_url,
        timeout=settings.solver_timeout
    )


def create_board_session(solver: SolverClient = None) -> BoardSession:
    """
    Build a board session from settings.

    Args:
        solver: Solver client (optional, will create if not provided)

    Returns:
        BoardSession instance
    """
    if solver is None:
        solver = get_solver_client()

    return BoardSession.from_settings(settings, solver=solver)


def get_session(request: Request) -> BoardSession:
    """
    Dependency for the app's board session.

    Raises:
        HTTPException: 503 if the app has not finished starting up
    """
    session = getattr(request.app.state, 'session', None)
    if session is None:
        raise HTTPException(status_code=503, detail="Board session not initialized")
    return session
