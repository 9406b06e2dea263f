"""
Floorplan Measure

Interactive measurement engine: calibrate a scale on an image from two
points of known distance, then trace a polygon to get its area in m².
"""

from .constants import Phase
from .errors import (
    MeasurementError,
    InvalidInput,
    InsufficientVertices,
    ScaleNotSet,
    InvalidTransition,
)
from .geometry import Point
from .view import ViewState, ViewTransform
from .session import (
    MeasurementSession,
    MeasurementResult,
    SessionConfig,
    SessionEvent,
    SessionChange,
)
from .render import DrawableImage, RenderFrame, build_render_frame, render_overlay

__version__ = "0.1.0"

__all__ = [
    "Phase",
    "MeasurementError",
    "InvalidInput",
    "InsufficientVertices",
    "ScaleNotSet",
    "InvalidTransition",
    "Point",
    "ViewState",
    "ViewTransform",
    "MeasurementSession",
    "MeasurementResult",
    "SessionConfig",
    "SessionEvent",
    "SessionChange",
    "DrawableImage",
    "RenderFrame",
    "build_render_frame",
    "render_overlay",
]
