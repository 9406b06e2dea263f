"""
Area Calculator Module

Polygon area and perimeter from ordered vertices, and conversion of pixel
measurements to meters using a pixels-per-meter scale.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..constants import MIN_POLYGON_VERTICES
from ..errors import InsufficientVertices, ScaleNotSet
from .point import Point

logger = logging.getLogger(__name__)


def _vertex_arrays(points: Sequence[Point]):
    xs = np.array([p.x for p in points], dtype=np.float64)
    ys = np.array([p.y for p in points], dtype=np.float64)
    return xs, ys


def _require_polygon(points: Sequence[Point]) -> None:
    if len(points) < MIN_POLYGON_VERTICES:
        raise InsufficientVertices(
            f"At least {MIN_POLYGON_VERTICES} points are needed to close a region "
            f"(got {len(points)})"
        )


def polygon_area_pixels(points: Sequence[Point]) -> float:
    """
    Calculate polygon area with the shoelace formula.

    The polygon is implicitly closed: the last vertex connects back to the
    first, so the first point must not be repeated at the end. Orientation
    does not matter. Self-intersecting polygons are not rejected; the result
    is then the shoelace sum, not the area of a simple polygon.

    Args:
        points: Ordered vertices in image space

    Returns:
        Area in square image pixels

    Raises:
        InsufficientVertices: If fewer than 3 points
    """
    _require_polygon(points)

    xs, ys = _vertex_arrays(points)
    # Pair every vertex with its successor, wrapping last -> first
    cross = xs * np.roll(ys, -1) - np.roll(xs, -1) * ys
    signed_area = 0.5 * float(np.sum(cross))

    return abs(signed_area)


def polygon_perimeter_pixels(points: Sequence[Point]) -> float:
    """
    Calculate the closed-ring perimeter of a polygon.

    Args:
        points: Ordered vertices in image space

    Returns:
        Perimeter in image pixels

    Raises:
        InsufficientVertices: If fewer than 3 points
    """
    _require_polygon(points)

    xs, ys = _vertex_arrays(points)
    edges = np.hypot(np.roll(xs, -1) - xs, np.roll(ys, -1) - ys)

    return float(np.sum(edges))


def _require_scale(pixels_per_meter: Optional[float]) -> float:
    if pixels_per_meter is None:
        raise ScaleNotSet("Scale has not been set, calibrate first")

    if not math.isfinite(pixels_per_meter) or pixels_per_meter <= 0:
        logger.warning(f"Unusable scale factor: {pixels_per_meter}")
        raise ScaleNotSet(
            f"Scale {pixels_per_meter} px/m is not usable, calibrate again"
        )

    return float(pixels_per_meter)


def to_real_area(
    area_pixels: float,
    pixels_per_meter: Optional[float]
) -> float:
    """
    Convert an area from square pixels to square meters.

    Note: Area conversion uses the scale factor squared.

    Args:
        area_pixels: Area in square image pixels
        pixels_per_meter: Scale factor

    Returns:
        Area in square meters

    Raises:
        ScaleNotSet: If the scale is missing, zero, negative or non-finite
    """
    scale = _require_scale(pixels_per_meter)
    return area_pixels / (scale ** 2)


def to_real_length(
    length_pixels: float,
    pixels_per_meter: Optional[float]
) -> float:
    """
    Convert a length from image pixels to meters.

    Raises:
        ScaleNotSet: If the scale is missing, zero, negative or non-finite
    """
    scale = _require_scale(pixels_per_meter)
    return length_pixels / scale
