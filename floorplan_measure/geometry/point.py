"""
Point Module

Image-space point type shared by calibration and measurement.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """
    A point in image space (original image pixels, not screen pixels).

    Coordinates are stored as floats regardless of the input type.
    """
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def as_tuple(self) -> Tuple[float, float]:
        """Return (x, y)."""
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert point to dictionary for JSON serialization."""
        return {"x": self.x, "y": self.y}


def distance(p0: Point, p1: Point) -> float:
    """
    Euclidean distance between two points.

    Args:
        p0: First point
        p1: Second point

    Returns:
        Distance in image pixels
    """
    return math.hypot(p1.x - p0.x, p1.y - p0.y)


def as_coordinates(points: Sequence[Point]) -> list:
    """Convert points to a list of (x, y) tuples."""
    return [p.as_tuple() for p in points]
