# Geometry calculations module

from .point import (
    Point,
    distance,
    as_coordinates,
)

from .area import (
    polygon_area_pixels,
    polygon_perimeter_pixels,
    to_real_area,
    to_real_length,
)

from .validation import (
    has_repeated_vertices,
    is_collinear,
    is_self_intersecting,
    validate_polygon,
)

__all__ = [
    # Point
    "Point",
    "distance",
    "as_coordinates",
    # Area
    "polygon_area_pixels",
    "polygon_perimeter_pixels",
    "to_real_area",
    "to_real_length",
    # Validation
    "has_repeated_vertices",
    "is_collinear",
    "is_self_intersecting",
    "validate_polygon",
]
