"""
Two-Point Calibrator Module

Turns a marked image segment and its real-world length into a
pixels-per-meter scale factor.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

from ..errors import InvalidInput
from ..geometry.point import Point, distance

logger = logging.getLogger(__name__)


@dataclass
class CalibrationResult:
    """Result of a two-point calibration."""
    point1: Point
    point2: Point
    pixel_distance: float
    real_length_meters: float
    pixels_per_meter: float

    def to_dict(self) -> dict:
        """Convert result to dictionary for JSON serialization."""
        return {
            "point1": self.point1.to_dict(),
            "point2": self.point2.to_dict(),
            "pixel_distance": round(self.pixel_distance, 2),
            "real_length_meters": self.real_length_meters,
            "pixels_per_meter": round(self.pixels_per_meter, 2),
        }


def parse_real_length(value: Union[str, float, int]) -> float:
    """
    Parse a user-entered real-world length in meters.

    Examples:
        "10" -> 10.0
        " 0.9 " -> 0.9
        "abc" -> InvalidInput
        "-5" -> InvalidInput

    Args:
        value: Number or numeric string

    Returns:
        Length in meters (finite, > 0)

    Raises:
        InvalidInput: If the value is not a finite positive number
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"Enter a positive distance in meters (got {value!r})")

    if isinstance(value, str):
        text = value.strip()
        try:
            length = float(text)
        except ValueError:
            raise InvalidInput(f"Enter a positive distance in meters (got {value!r})")
    else:
        try:
            length = float(value)
        except (TypeError, ValueError):
            raise InvalidInput(f"Enter a positive distance in meters (got {value!r})")

    if not math.isfinite(length) or length <= 0:
        raise InvalidInput(f"Enter a positive distance in meters (got {value!r})")

    return length


def is_usable_scale(pixels_per_meter) -> bool:
    """Check if a scale factor is finite and positive."""
    if pixels_per_meter is None:
        return False
    return math.isfinite(pixels_per_meter) and pixels_per_meter > 0


def compute_scale(
    p0: Point,
    p1: Point,
    real_length_meters: float
) -> float:
    """
    Calculate the scale factor from a two-point calibration.

    Args:
        p0: First point in image space
        p1: Second point in image space
        real_length_meters: Real-world length between the points

    Returns:
        Scale factor (image pixels per meter). 0.0 when the points coincide.

    Raises:
        InvalidInput: If real_length_meters is not a finite positive number
    """
    message = f"Real length must be a positive number of meters (got {real_length_meters!r})"

    # Text goes through parse_real_length; bool is not a length
    if real_length_meters is None or isinstance(real_length_meters, (bool, str, bytes)):
        raise InvalidInput(message)

    try:
        real_length = float(real_length_meters)
    except (TypeError, ValueError):
        raise InvalidInput(message)

    if not math.isfinite(real_length) or real_length <= 0:
        raise InvalidInput(message)

    pixel_distance = distance(p0, p1)
    if pixel_distance == 0:
        logger.warning("Calibration points coincide, scale is 0")

    scale = pixel_distance / real_length
    logger.debug(
        f"Calibration: {pixel_distance:.1f} px / {real_length:.2f} m = {scale:.2f} px/m"
    )

    return scale


def calibrate(
    p0: Point,
    p1: Point,
    raw_length: Union[str, float, int]
) -> CalibrationResult:
    """
    Parse the entered length and calibrate.

    Args:
        p0: First point in image space
        p1: Second point in image space
        raw_length: Length as entered by the user

    Returns:
        CalibrationResult with a usable scale

    Raises:
        InvalidInput: If the length is invalid or the points coincide
    """
    real_length = parse_real_length(raw_length)
    scale = compute_scale(p0, p1, real_length)

    if not is_usable_scale(scale):
        raise InvalidInput(
            "Calibration points are at the same position, mark two distinct points"
        )

    logger.info(f"Calibration: {scale:.2f} px/m from {real_length:g} m reference")

    return CalibrationResult(
        point1=p0,
        point2=p1,
        pixel_distance=distance(p0, p1),
        real_length_meters=real_length,
        pixels_per_meter=scale,
    )
