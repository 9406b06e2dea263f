"""
Point Capture Module

Ordered image-space points for the calibration segment and the
measurement polygon. Points are only appended or removed from the end.
"""

import logging
from typing import List, Optional, Tuple

from ..constants import CALIBRATION_POINT_COUNT, Phase
from ..geometry.point import Point

logger = logging.getLogger(__name__)


class PointCapture:
    """Two point lists, routed by phase."""

    def __init__(self):
        self._calibration: List[Point] = []
        self._measurement: List[Point] = []

    @property
    def calibration_points(self) -> Tuple[Point, ...]:
        return tuple(self._calibration)

    @property
    def measurement_points(self) -> Tuple[Point, ...]:
        return tuple(self._measurement)

    @property
    def calibration_complete(self) -> bool:
        return len(self._calibration) == CALIBRATION_POINT_COUNT

    def _target(self, phase: Phase) -> Optional[List[Point]]:
        if not phase.accepts_points():
            return None
        if phase == Phase.CALIBRATE:
            return self._calibration
        if phase == Phase.MEASURE:
            return self._measurement
        return None

    def add_point(self, phase: Phase, point: Point) -> bool:
        """
        Append a point to the list of the given phase.

        Calibration stops at two points; further points are ignored.

        Args:
            phase: Current session phase
            point: Point in image space

        Returns:
            True if the point was appended
        """
        target = self._target(phase)
        if target is None:
            return False

        if phase == Phase.CALIBRATE and len(target) >= CALIBRATION_POINT_COUNT:
            return False

        target.append(point)
        logger.debug(f"{phase.value}: point {len(target)} at ({point.x:.1f}, {point.y:.1f})")
        return True

    def undo_last(self, phase: Phase) -> Optional[Point]:
        """
        Remove the last point of the given phase's list.

        Returns:
            The removed point, or None if there was nothing to remove
        """
        target = self._target(phase)
        if not target:
            return None
        return target.pop()

    def reset(self, phase: Phase) -> None:
        """Clear the list of the given phase."""
        target = self._target(phase)
        if target is not None:
            target.clear()

    def clear(self) -> None:
        """Clear both lists."""
        self._calibration.clear()
        self._measurement.clear()
