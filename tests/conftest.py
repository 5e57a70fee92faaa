"""
Pytest configuration and global fixtures.
"""
import asyncio
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.schemas import SolveResultItem
from core.exceptions import SolverUnavailableError
from drawing.canvas import StrokeCanvas


class FakeSolver:
    """In-memory stand-in for SolverClient."""

    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.calls = []
        self.closed = False
        self.release = None

    def hold(self):
        """Make solve() wait until release.set() is called."""
        self.release = asyncio.Event()
        return self.release

    async def solve(self, image_data_url, variables):
        self.calls.append((image_data_url, dict(variables)))
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return [SolveResultItem.model_validate(item) for item in self.results]

    async def close(self):
        self.closed = True


@pytest.fixture
def solver_factory():
    """Build a FakeSolver with custom results or error."""
    return FakeSolver


@pytest.fixture
def fake_solver():
    """Solver answering 2+2 = 4."""
    return FakeSolver(results=[{"expr": "2+2", "result": "4", "assign": False}])


@pytest.fixture
def failing_solver():
    """Solver whose service is down."""
    return FakeSolver(error=SolverUnavailableError("Could not connect to solving service"))


@pytest.fixture
def canvas():
    """Small canvas with the default pen."""
    return StrokeCanvas(100, 80)


@pytest.fixture
def blank_pixels():
    """Fully transparent 100x80 RGBA buffer."""
    return np.zeros((80, 100, 4), dtype=np.uint8)


@pytest.fixture
def rectangle_canvas(canvas):
    """Canvas with single-pixel marks bounding (10,10)-(50,40)."""
    canvas.raster.paste(_marks_image(canvas.raster.size, [(10, 10), (50, 40)]))
    return canvas


def _marks_image(size, points):
    from PIL import Image

    image = Image.new('RGBA', size, (0, 0, 0, 0))
    for point in points:
        image.putpixel(point, (255, 255, 255, 255))
    return image


@pytest.fixture
def marks_image():
    """Factory for RGBA images with single-pixel marks."""
    return _marks_image
