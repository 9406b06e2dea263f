"""
View Transform Module

Maps between screen coordinates and image coordinates under zoom and pan.

A screen point s and an image point p are related by
    s = origin + offset + p * scale
where origin is the top-left corner of the drawing surface on screen.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..constants import (
    DEFAULT_VIEW_OFFSET,
    DEFAULT_VIEW_SCALE,
    MAX_VIEW_SCALE,
    MIN_VIEW_SCALE,
    ZOOM_INTENSITY,
)
from ..errors import InvalidInput, InvalidTransition
from ..geometry.point import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """Zoom factor and translation of the image on the drawing surface."""
    scale: float = DEFAULT_VIEW_SCALE
    offset_x: float = DEFAULT_VIEW_OFFSET[0]
    offset_y: float = DEFAULT_VIEW_OFFSET[1]


def clamp_scale(
    scale: float,
    min_scale: float = MIN_VIEW_SCALE,
    max_scale: float = MAX_VIEW_SCALE
) -> float:
    """Clamp a zoom factor to [min_scale, max_scale]."""
    return min(max(min_scale, scale), max_scale)


class ViewTransform:
    """
    Owns the view state and the zoom/pan behavior.

    Panning is absolute: every move sets the offset from the drag-start
    anchor, so repeated move events cannot drift.
    """

    def __init__(
        self,
        zoom_intensity: float = ZOOM_INTENSITY,
        min_scale: float = MIN_VIEW_SCALE,
        max_scale: float = MAX_VIEW_SCALE
    ):
        self.zoom_intensity = zoom_intensity
        self.min_scale = min_scale
        self.max_scale = max_scale

        self._state = ViewState()
        self._origin: Tuple[float, float] = (0.0, 0.0)
        self._drag_start_screen: Optional[Tuple[float, float]] = None
        self._drag_start_offset: Optional[Tuple[float, float]] = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def origin(self) -> Tuple[float, float]:
        return self._origin

    @property
    def is_panning(self) -> bool:
        return self._drag_start_screen is not None

    def set_surface_origin(self, origin_x: float, origin_y: float) -> None:
        """Set the drawing surface's top-left corner in screen coordinates."""
        self._origin = (float(origin_x), float(origin_y))

    def reset(self) -> ViewState:
        """Restore scale 1 and zero offset, ending any drag."""
        self._state = ViewState()
        self.end_pan()
        return self._state

    # -------------------------------------------------------------------------
    # Coordinate mapping
    # -------------------------------------------------------------------------

    def screen_to_image(self, screen_x: float, screen_y: float) -> Point:
        """
        Convert a screen position to image space.

        Args:
            screen_x: Pointer x in screen coordinates
            screen_y: Pointer y in screen coordinates

        Returns:
            Point in image space
        """
        state = self._state
        return Point(
            (screen_x - self._origin[0] - state.offset_x) / state.scale,
            (screen_y - self._origin[1] - state.offset_y) / state.scale,
        )

    def image_to_screen(self, point: Point) -> Tuple[float, float]:
        """Convert an image-space point to screen coordinates."""
        state = self._state
        return (
            point.x * state.scale + state.offset_x + self._origin[0],
            point.y * state.scale + state.offset_y + self._origin[1],
        )

    # -------------------------------------------------------------------------
    # Zoom
    # -------------------------------------------------------------------------

    def _rescale(self, new_scale: float, anchor_x: float, anchor_y: float) -> ViewState:
        # Anchor is surface-local; the image point under it stays put
        state = self._state
        ratio = new_scale / state.scale

        self._state = ViewState(
            scale=new_scale,
            offset_x=anchor_x - (anchor_x - state.offset_x) * ratio,
            offset_y=anchor_y - (anchor_y - state.offset_y) * ratio,
        )
        logger.debug(
            f"Zoom {state.scale:.3f} -> {new_scale:.3f} at ({anchor_x:.1f}, {anchor_y:.1f})"
        )
        return self._state

    def zoom(self, screen_x: float, screen_y: float, direction: int) -> ViewState:
        """
        Zoom one step in or out, keeping the point under the cursor fixed.

        Args:
            screen_x: Cursor x in screen coordinates
            screen_y: Cursor y in screen coordinates
            direction: +1 to zoom in, -1 to zoom out

        Returns:
            New view state

        Raises:
            InvalidInput: If direction is not +1 or -1
        """
        if direction not in (1, -1):
            raise InvalidInput(f"Zoom direction must be +1 or -1 (got {direction!r})")

        factor = 1 + direction * self.zoom_intensity
        new_scale = clamp_scale(self._state.scale * factor, self.min_scale, self.max_scale)

        return self._rescale(
            new_scale,
            screen_x - self._origin[0],
            screen_y - self._origin[1],
        )

    def zoom_by(
        self,
        factor: float,
        screen_x: Optional[float] = None,
        screen_y: Optional[float] = None
    ) -> ViewState:
        """
        Multiply the zoom factor, clamped to the scale limits.

        Without an anchor the image origin keeps its screen position.

        Args:
            factor: Scale multiplier (> 0)
            screen_x: Optional anchor x in screen coordinates
            screen_y: Optional anchor y in screen coordinates

        Returns:
            New view state
        """
        if factor <= 0:
            raise InvalidInput(f"Zoom factor must be positive (got {factor!r})")

        new_scale = clamp_scale(self._state.scale * factor, self.min_scale, self.max_scale)

        if screen_x is None or screen_y is None:
            anchor_x, anchor_y = self._state.offset_x, self._state.offset_y
        else:
            anchor_x = screen_x - self._origin[0]
            anchor_y = screen_y - self._origin[1]

        return self._rescale(new_scale, anchor_x, anchor_y)

    # -------------------------------------------------------------------------
    # Pan
    # -------------------------------------------------------------------------

    def begin_pan(self, screen_x: float, screen_y: float) -> None:
        """Record the drag-start anchor."""
        self._drag_start_screen = (float(screen_x), float(screen_y))
        self._drag_start_offset = (self._state.offset_x, self._state.offset_y)

    def pan(self, delta_x: float, delta_y: float) -> ViewState:
        """
        Set the offset to drag-start offset plus the total drag displacement.

        Args:
            delta_x: Screen x displacement since begin_pan
            delta_y: Screen y displacement since begin_pan

        Returns:
            New view state

        Raises:
            InvalidTransition: If no drag is active
        """
        if self._drag_start_offset is None:
            raise InvalidTransition("No pan in progress")

        self._state = ViewState(
            scale=self._state.scale,
            offset_x=self._drag_start_offset[0] + delta_x,
            offset_y=self._drag_start_offset[1] + delta_y,
        )
        return self._state

    def drag_to(self, screen_x: float, screen_y: float) -> ViewState:
        """Pan so the drag-start point follows the pointer at (screen_x, screen_y)."""
        if self._drag_start_screen is None:
            raise InvalidTransition("No pan in progress")

        return self.pan(
            screen_x - self._drag_start_screen[0],
            screen_y - self._drag_start_screen[1],
        )

    def end_pan(self) -> None:
        """Forget the drag-start anchor."""
        self._drag_start_screen = None
        self._drag_start_offset = None
