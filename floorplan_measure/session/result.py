"""
Measurement Result Module

Defines the MeasurementResult class produced by an area computation.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..calibration.unit_converter import format_area, format_length
from ..constants import RESULT_DECIMALS
from ..geometry.area import (
    polygon_area_pixels,
    polygon_perimeter_pixels,
    to_real_area,
    to_real_length,
)
from ..geometry.point import Point
from ..geometry.validation import validate_polygon

logger = logging.getLogger(__name__)


@dataclass
class MeasurementResult:
    """
    Area of a traced polygon in real-world units.

    Vertices are kept in image space so the polygon can be redrawn.
    """
    area_square_meters: float
    area_pixels: float
    perimeter_meters: float
    pixels_per_meter: float
    vertices: List[Point] = field(default_factory=list)

    # Validation warnings
    warnings: List[str] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def summary(self) -> str:
        """Human readable one-line result."""
        return (
            f"{format_area(self.area_square_meters)} "
            f"(perimeter {format_length(self.perimeter_meters)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "area_square_meters": round(self.area_square_meters, RESULT_DECIMALS),
            "area_pixels": round(self.area_pixels, RESULT_DECIMALS),
            "perimeter_meters": round(self.perimeter_meters, RESULT_DECIMALS),
            "pixels_per_meter": round(self.pixels_per_meter, RESULT_DECIMALS),
            "vertex_count": self.vertex_count,
            "vertices": [p.to_dict() for p in self.vertices],
            "warnings": self.warnings,
        }


def measure_polygon(
    points: Sequence[Point],
    pixels_per_meter: float
) -> MeasurementResult:
    """
    Calculate all measurements for a traced polygon.

    Args:
        points: Ordered vertices in image space
        pixels_per_meter: Scale factor from calibration

    Returns:
        MeasurementResult

    Raises:
        InsufficientVertices: If fewer than 3 points
        ScaleNotSet: If the scale is not usable
    """
    area_pixels = polygon_area_pixels(points)
    area_sqm = to_real_area(area_pixels, pixels_per_meter)
    perimeter_m = to_real_length(polygon_perimeter_pixels(points), pixels_per_meter)

    result = MeasurementResult(
        area_square_meters=area_sqm,
        area_pixels=area_pixels,
        perimeter_meters=perimeter_m,
        pixels_per_meter=pixels_per_meter,
        vertices=list(points),
    )
    result.warnings = validate_polygon(points, area_sqm)

    logger.debug(
        f"Polygon: {len(points)} vertices, {area_pixels:.1f} px², {area_sqm:.2f} m²"
    )

    return result
