"""
Overlay Renderer Module

Draws a RenderFrame onto an OpenCV canvas: the image under the current
zoom/pan, the calibration segment in red and the measured region in blue.
Line widths and vertex sizes are in screen pixels, independent of zoom.
"""

import logging
from typing import Sequence, Tuple

import cv2
import numpy as np

from ..constants import (
    BACKGROUND_COLOR,
    CALIBRATION_COLOR,
    CALIBRATION_POINT_COUNT,
    FILL_ALPHA,
    LINE_THICKNESS,
    MEASUREMENT_COLOR,
    VERTEX_OUTLINE_COLOR,
    VERTEX_OUTLINE_THICKNESS,
    VERTEX_RADIUS,
    Phase,
)
from ..geometry.point import Point
from ..view.transform import ViewState
from .frame import RenderFrame

logger = logging.getLogger(__name__)


def to_bgr(pixels: np.ndarray) -> np.ndarray:
    """
    Convert image pixels to a 3-channel uint8 BGR array.

    Args:
        pixels: Grayscale, BGR or BGRA array

    Returns:
        BGR uint8 array
    """
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)

    if pixels.ndim == 2:
        return cv2.cvtColor(pixels, cv2.COLOR_GRAY2BGR)
    if pixels.shape[2] == 4:
        return cv2.cvtColor(pixels, cv2.COLOR_BGRA2BGR)
    return pixels


def to_surface_coords(points: Sequence[Point], view_state: ViewState) -> np.ndarray:
    """
    Map image-space points to integer surface pixel coordinates.

    Returns:
        Nx2 int32 array
    """
    coords = np.array([[p.x, p.y] for p in points], dtype=np.float64).reshape(-1, 2)
    coords = coords * view_state.scale + np.array([view_state.offset_x, view_state.offset_y])
    return np.round(coords).astype(np.int32)


def draw_image(
    canvas_size: Tuple[int, int],
    pixels: np.ndarray,
    view_state: ViewState
) -> np.ndarray:
    """
    Draw the image scaled and translated by the view state.

    Args:
        canvas_size: (width, height) of the surface
        pixels: Image pixels
        view_state: Current zoom/pan

    Returns:
        BGR canvas
    """
    width, height = canvas_size
    matrix = np.float32([
        [view_state.scale, 0, view_state.offset_x],
        [0, view_state.scale, view_state.offset_y],
    ])
    return cv2.warpAffine(
        to_bgr(pixels),
        matrix,
        (width, height),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=BACKGROUND_COLOR,
    )


def draw_vertices(canvas: np.ndarray, coords: np.ndarray, color: Tuple[int, int, int]) -> None:
    """Draw filled vertex dots with a white ring."""
    for x, y in coords:
        center = (int(x), int(y))
        cv2.circle(canvas, center, VERTEX_RADIUS, color, -1)
        cv2.circle(canvas, center, VERTEX_RADIUS, VERTEX_OUTLINE_COLOR, VERTEX_OUTLINE_THICKNESS)


def draw_segment(
    canvas: np.ndarray,
    segment: Tuple[Point, Point],
    view_state: ViewState,
    color: Tuple[int, int, int]
) -> None:
    start, end = to_surface_coords(segment, view_state)
    cv2.line(canvas, (int(start[0]), int(start[1])), (int(end[0]), int(end[1])), color, LINE_THICKNESS)


def render_overlay(frame: RenderFrame, canvas_size: Tuple[int, int]) -> np.ndarray:
    """
    Render a frame to a new BGR canvas.

    Args:
        frame: RenderFrame built from a session
        canvas_size: (width, height) of the drawing surface

    Returns:
        HxWx3 uint8 array
    """
    width, height = canvas_size
    view_state = frame.view_state

    if frame.image is not None:
        canvas = draw_image(canvas_size, frame.image.pixels, view_state)
    else:
        canvas = np.full((height, width, 3), BACKGROUND_COLOR, dtype=np.uint8)

    # Measured region
    if frame.fill_polygon:
        fill_coords = to_surface_coords(frame.fill_polygon, view_state)
        overlay = canvas.copy()
        cv2.fillPoly(overlay, [fill_coords], MEASUREMENT_COLOR)
        canvas = cv2.addWeighted(overlay, FILL_ALPHA, canvas, 1 - FILL_ALPHA, 0)

    if frame.measurement_points:
        coords = to_surface_coords(frame.measurement_points, view_state)
        if len(coords) > 1:
            cv2.polylines(
                canvas, [coords],
                isClosed=frame.phase == Phase.RESULT,
                color=MEASUREMENT_COLOR,
                thickness=LINE_THICKNESS,
            )
        if frame.measurement_preview is not None:
            draw_segment(canvas, frame.measurement_preview, view_state, MEASUREMENT_COLOR)

    # Calibration segment
    if frame.calibration_points:
        if len(frame.calibration_points) == CALIBRATION_POINT_COUNT:
            draw_segment(canvas, tuple(frame.calibration_points), view_state, CALIBRATION_COLOR)
        elif frame.calibration_preview is not None:
            draw_segment(canvas, frame.calibration_preview, view_state, CALIBRATION_COLOR)

    # Vertices on top of the lines
    if frame.measurement_points:
        draw_vertices(canvas, to_surface_coords(frame.measurement_points, view_state), MEASUREMENT_COLOR)
    if frame.calibration_points:
        draw_vertices(canvas, to_surface_coords(frame.calibration_points, view_state), CALIBRATION_COLOR)

    return canvas
