"""
Render Frame Module

Snapshot of everything a renderer needs to draw the current session.
Building a frame only reads session state.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import CALIBRATION_POINT_COUNT, MIN_POLYGON_VERTICES, Phase
from ..geometry.point import Point
from ..view.transform import ViewState
from .image_source import DrawableImage


@dataclass(frozen=True)
class RenderFrame:
    """
    Drawable state of a session.

    All points are in image space; the renderer applies view_state.
    """
    phase: Phase
    image: Optional[DrawableImage]
    view_state: ViewState
    calibration_points: Tuple[Point, ...] = ()
    measurement_points: Tuple[Point, ...] = ()

    # Live edge from the last placed point to the cursor
    calibration_preview: Optional[Tuple[Point, Point]] = None
    measurement_preview: Optional[Tuple[Point, Point]] = None

    # Closed region to fill (3+ measurement points)
    fill_polygon: Tuple[Point, ...] = ()

    area_label: str = ""
    warnings: Tuple[str, ...] = ()

    @property
    def has_image(self) -> bool:
        return self.image is not None


def build_render_frame(session) -> RenderFrame:
    """
    Build a RenderFrame from a MeasurementSession.

    Args:
        session: MeasurementSession to read

    Returns:
        RenderFrame
    """
    phase = session.phase
    calibration = session.calibration_points
    measurement = session.measurement_points
    cursor = session.cursor_image_position()

    calibration_preview = None
    if phase == Phase.CALIBRATE and 0 < len(calibration) < CALIBRATION_POINT_COUNT:
        calibration_preview = (calibration[-1], cursor)

    measurement_preview = None
    if phase == Phase.MEASURE and measurement:
        measurement_preview = (measurement[-1], cursor)

    fill_polygon = measurement if len(measurement) >= MIN_POLYGON_VERTICES else ()

    result = session.result
    area_label = result.summary() if result is not None else ""
    warnings = tuple(result.warnings) if result is not None else ()

    return RenderFrame(
        phase=phase,
        image=session.image,
        view_state=session.view_state,
        calibration_points=calibration,
        measurement_points=measurement,
        calibration_preview=calibration_preview,
        measurement_preview=measurement_preview,
        fill_polygon=fill_polygon,
        area_label=area_label,
        warnings=warnings,
    )
