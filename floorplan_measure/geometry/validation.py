"""
Polygon Validation Module

Checks a traced polygon for shapes whose area is not meaningful. The
checks only produce warnings; they never block the area computation.
"""

import logging
from typing import List, Sequence

import numpy as np
from shapely.geometry import LinearRing

from ..constants import (
    DUPLICATE_VERTEX_TOLERANCE_PX,
    MIN_AREA_WARNING_SQM,
    MIN_POLYGON_VERTICES,
)
from .point import Point, as_coordinates, distance

logger = logging.getLogger(__name__)


def has_repeated_vertices(points: Sequence[Point]) -> bool:
    """Check if any two consecutive vertices (ring closed) coincide."""
    n = len(points)
    for i in range(n):
        if distance(points[i], points[(i + 1) % n]) <= DUPLICATE_VERTEX_TOLERANCE_PX:
            return True
    return False


def is_collinear(points: Sequence[Point]) -> bool:
    """Check if all vertices lie on a single line (or coincide)."""
    if len(points) < MIN_POLYGON_VERTICES:
        return True

    coords = np.array(as_coordinates(points), dtype=np.float64)
    return bool(np.linalg.matrix_rank(coords - coords[0]) <= 1)


def is_self_intersecting(points: Sequence[Point]) -> bool:
    """
    Check if the closed ring through the points crosses itself.

    Args:
        points: Ordered vertices (at least 3)

    Returns:
        True if the ring is not simple
    """
    coords = as_coordinates(points)
    # Fewer than 3 distinct vertices cannot form a ring
    if len(set(coords)) < MIN_POLYGON_VERTICES:
        return False

    ring = LinearRing(coords)
    return not ring.is_simple


def validate_polygon(
    points: Sequence[Point],
    area_square_meters: float
) -> List[str]:
    """
    Validate a measured polygon and return warnings.

    Args:
        points: Ordered vertices in image space
        area_square_meters: Area computed for these vertices

    Returns:
        List of warning messages
    """
    warnings = []

    if has_repeated_vertices(points):
        warnings.append("Polygon has repeated consecutive vertices")

    self_intersecting = is_self_intersecting(points)
    if self_intersecting:
        warnings.append(
            "Polygon edges cross each other; area is not that of a simple region"
        )

    if area_square_meters == 0:
        if is_collinear(points):
            warnings.append("Polygon has zero area (all vertices are collinear)")
        else:
            warnings.append("Polygon has zero area")
    elif area_square_meters < MIN_AREA_WARNING_SQM:
        warnings.append(
            f"Area {area_square_meters:.4f} m² is below {MIN_AREA_WARNING_SQM} m²"
        )

    for warning in warnings:
        logger.warning(warning)

    return warnings
