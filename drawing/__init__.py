"""Drawing package - Board state: raster, overlays and variable bindings."""

from .canvas import RasterSurface, StrokeCanvas, parse_color
from .overlays import OverlayStore, DragController
from .variables import VariableBindings

__all__ = [
    'RasterSurface',
    'StrokeCanvas',
    'parse_color',
    'OverlayStore',
    'DragController',
    'VariableBindings',
]
