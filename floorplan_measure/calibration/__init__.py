# Scale calibration module

from .calibrator import (
    CalibrationResult,
    parse_real_length,
    is_usable_scale,
    compute_scale,
    calibrate,
)

from .unit_converter import (
    pixels_to_meters,
    meters_to_pixels,
    area_pixels_to_square_meters,
    square_meters_to_area_pixels,
    format_area,
    format_length,
)

__all__ = [
    # Calibrator
    "CalibrationResult",
    "parse_real_length",
    "is_usable_scale",
    "compute_scale",
    "calibrate",
    # Unit Converter
    "pixels_to_meters",
    "meters_to_pixels",
    "area_pixels_to_square_meters",
    "square_meters_to_area_pixels",
    "format_area",
    "format_length",
]
