"""
Unit Converter Module

Functions for converting between image pixels and meters, and for
formatting results.
"""

import logging

from ..constants import RESULT_DECIMALS
from ..geometry.area import to_real_area, to_real_length

logger = logging.getLogger(__name__)


def pixels_to_meters(length_pixels: float, pixels_per_meter: float) -> float:
    """
    Convert a length from image pixels to meters.

    Args:
        length_pixels: Length in image pixels
        pixels_per_meter: Scale factor

    Returns:
        Length in meters
    """
    return to_real_length(length_pixels, pixels_per_meter)


def meters_to_pixels(length_meters: float, pixels_per_meter: float) -> float:
    """
    Convert a length from meters to image pixels.

    Args:
        length_meters: Length in meters
        pixels_per_meter: Scale factor

    Returns:
        Length in image pixels
    """
    return length_meters * pixels_per_meter


def area_pixels_to_square_meters(area_pixels: float, pixels_per_meter: float) -> float:
    """
    Convert an area from square pixels to square meters.

    Note: Area conversion uses pixels_per_meter squared.
    """
    return to_real_area(area_pixels, pixels_per_meter)


def square_meters_to_area_pixels(area_sqm: float, pixels_per_meter: float) -> float:
    """Convert an area from square meters to square pixels."""
    return area_sqm * (pixels_per_meter ** 2)


def format_area(area_sqm: float, decimals: int = RESULT_DECIMALS) -> str:
    """
    Format an area in square meters.

    Trailing zeros are dropped, thousands are grouped.

    Examples:
        100.0 -> "100 m²"
        1234.567 -> "1,234.57 m²"

    Args:
        area_sqm: Area value
        decimals: Maximum fraction digits

    Returns:
        Formatted string
    """
    text = f"{area_sqm:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} m²"


def format_length(length_m: float, decimals: int = RESULT_DECIMALS) -> str:
    """Format a length in meters, e.g. "4.5 m"."""
    text = f"{length_m:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} m"
