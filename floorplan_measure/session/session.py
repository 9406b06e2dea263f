"""
Measurement Session Module

State machine coordinating the view transform, point capture,
calibration and area computation.

Phases:
    UPLOAD -> CALIBRATE -> MEASURE -> RESULT
    RESULT -> MEASURE      ("measure again", scale kept)
    any    -> UPLOAD       (reset)

Every accepted action notifies subscribers once the state is complete.
Rejected actions notify a WARNING with the user-facing message, then raise;
the state is left untouched.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from ..calibration.calibrator import calibrate, is_usable_scale
from ..constants import (
    BUTTON_ZOOM_FACTOR,
    MAX_VIEW_SCALE,
    MIN_POLYGON_VERTICES,
    MIN_VIEW_SCALE,
    PAN_BUTTON,
    PRIMARY_BUTTON,
    ZOOM_INTENSITY,
    Phase,
)
from ..errors import (
    InsufficientVertices,
    InvalidInput,
    InvalidTransition,
    MeasurementError,
    ScaleNotSet,
)
from ..geometry.point import Point
from ..render.image_source import DrawableImage
from ..view.transform import ViewState, ViewTransform
from .points import PointCapture
from .result import MeasurementResult, measure_polygon

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a measurement session."""
    zoom_intensity: float = ZOOM_INTENSITY
    button_zoom_factor: float = BUTTON_ZOOM_FACTOR
    min_scale: float = MIN_VIEW_SCALE
    max_scale: float = MAX_VIEW_SCALE
    pan_button: int = PAN_BUTTON


class SessionEvent(Enum):
    """Kinds of state change reported to subscribers."""
    IMAGE_LOADED = "image_loaded"
    POINT_ADDED = "point_added"
    POINT_REMOVED = "point_removed"
    LENGTH_REQUESTED = "length_requested"
    CALIBRATED = "calibrated"
    CALIBRATION_CANCELLED = "calibration_cancelled"
    CALIBRATION_STARTED = "calibration_started"
    MEASURE_STARTED = "measure_started"
    AREA_COMPUTED = "area_computed"
    VIEW_CHANGED = "view_changed"
    CURSOR_MOVED = "cursor_moved"
    RESET = "reset"
    WARNING = "warning"


@dataclass(frozen=True)
class SessionChange:
    """Notification sent after a state change (or a rejected action)."""
    event: SessionEvent
    message: str = ""


Listener = Callable[[SessionChange], None]

# Returns the entered length, or None when the user cancels
LengthPrompt = Callable[[], Optional[Union[str, float]]]


class MeasurementSession:
    """
    Single owned measurement session.

    The host feeds pointer events and actions in, and reads state back
    (or builds a render frame) after each notification.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        length_prompt: Optional[LengthPrompt] = None
    ):
        self.config = config or SessionConfig()
        self.length_prompt = length_prompt

        self.view = ViewTransform(
            zoom_intensity=self.config.zoom_intensity,
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale,
        )
        self.points = PointCapture()

        self._phase = Phase.UPLOAD
        self._image: Optional[DrawableImage] = None
        self._pixels_per_meter: Optional[float] = None
        self._result: Optional[MeasurementResult] = None
        self._awaiting_length = False
        self._cursor: Tuple[float, float] = (0.0, 0.0)
        self._listeners: List[Listener] = []

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def image(self) -> Optional[DrawableImage]:
        return self._image

    @property
    def view_state(self) -> ViewState:
        return self.view.state

    @property
    def pixels_per_meter(self) -> Optional[float]:
        return self._pixels_per_meter

    @property
    def result(self) -> Optional[MeasurementResult]:
        return self._result

    @property
    def area_square_meters(self) -> Optional[float]:
        if self._result is None:
            return None
        return self._result.area_square_meters

    @property
    def calibration_points(self) -> Tuple[Point, ...]:
        return self.points.calibration_points

    @property
    def measurement_points(self) -> Tuple[Point, ...]:
        return self.points.measurement_points

    @property
    def awaiting_length(self) -> bool:
        """True while the real length of the calibration segment is requested."""
        return self._awaiting_length

    @property
    def cursor(self) -> Tuple[float, float]:
        """Last pointer position in screen coordinates."""
        return self._cursor

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Register a callable invoked with a SessionChange after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: SessionEvent, message: str = "") -> None:
        change = SessionChange(event, message)
        for listener in list(self._listeners):
            listener(change)

    def _reject(self, error: MeasurementError) -> MeasurementError:
        logger.warning(f"Rejected in {self._phase.value}: {error}")
        self._notify(SessionEvent.WARNING, str(error))
        return error

    def _require_image(self) -> None:
        if self._image is None:
            raise self._reject(InvalidTransition("Load an image first"))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load_image(self, image) -> None:
        """
        Load a decoded image and start calibration.

        Resets the view, clears both point lists, the scale and the result.

        Args:
            image: numpy array, PIL image or DrawableImage

        Raises:
            InvalidInput: If the image is not a supported raster
        """
        try:
            drawable = DrawableImage.from_source(image)
        except ValueError as e:
            raise self._reject(InvalidInput(f"Unsupported image: {e}"))

        self._image = drawable
        self.view.reset()
        self.points.clear()
        self._pixels_per_meter = None
        self._result = None
        self._awaiting_length = False
        self._phase = Phase.CALIBRATE

        logger.info(f"Image loaded: {drawable.width}x{drawable.height}")
        self._notify(SessionEvent.IMAGE_LOADED)

    def reset(self) -> None:
        """Discard the image and everything measured on it."""
        self._image = None
        self.view.reset()
        self.points.clear()
        self._pixels_per_meter = None
        self._result = None
        self._awaiting_length = False
        self._phase = Phase.UPLOAD

        logger.info("Session reset")
        self._notify(SessionEvent.RESET)

    # -------------------------------------------------------------------------
    # Point capture
    # -------------------------------------------------------------------------

    def add_point(self, point: Point) -> bool:
        """
        Add an image-space point to the list of the current phase.

        The second calibration point requests the real length once.

        Returns:
            True if the point was added
        """
        if not self.points.add_point(self._phase, point):
            return False

        self._notify(SessionEvent.POINT_ADDED)

        if self._phase == Phase.CALIBRATE and self.points.calibration_complete:
            self._request_length()

        return True

    def undo_last(self) -> Optional[Point]:
        """
        Remove the last point of the current phase's list.

        Returns:
            The removed point, or None if nothing was removed
        """
        removed = self.points.undo_last(self._phase)
        if removed is None:
            return None

        if self._phase == Phase.CALIBRATE:
            self._awaiting_length = False

        self._notify(SessionEvent.POINT_REMOVED)
        return removed

    # -------------------------------------------------------------------------
    # Calibration
    # -------------------------------------------------------------------------

    def _request_length(self) -> None:
        self._awaiting_length = True
        self._notify(SessionEvent.LENGTH_REQUESTED)

        if self.length_prompt is None:
            return

        value = self.length_prompt()
        if value is None:
            self.cancel_real_length()
            return

        try:
            self.confirm_real_length(value)
        except MeasurementError:
            # Already reported as WARNING; request stays open for correction
            logger.debug("Length prompt value rejected, awaiting correction")

    def confirm_real_length(self, value: Union[str, float]) -> float:
        """
        Calibrate from the two marked points and the entered length.

        On success the session moves to MEASURE with an empty polygon.

        Args:
            value: Real length in meters, as a number or the entered text

        Returns:
            Scale factor in pixels per meter

        Raises:
            InvalidTransition: If the calibration segment is not complete
            InvalidInput: If the length is invalid or the points coincide
        """
        if self._phase != Phase.CALIBRATE or not self.points.calibration_complete:
            raise self._reject(
                InvalidTransition("Mark two calibration points before entering a length")
            )

        p0, p1 = self.points.calibration_points
        try:
            calibration = calibrate(p0, p1, value)
        except MeasurementError as e:
            raise self._reject(e)

        self._pixels_per_meter = calibration.pixels_per_meter
        self.points.reset(Phase.MEASURE)
        self._result = None
        self._awaiting_length = False
        self._phase = Phase.MEASURE

        self._notify(SessionEvent.CALIBRATED)
        return calibration.pixels_per_meter

    def cancel_real_length(self) -> None:
        """Drop the calibration segment and stay in CALIBRATE."""
        if self._phase != Phase.CALIBRATE:
            return

        self.points.reset(Phase.CALIBRATE)
        self._awaiting_length = False

        logger.info("Calibration cancelled")
        self._notify(SessionEvent.CALIBRATION_CANCELLED)

    def start_calibration(self) -> None:
        """
        Redo calibration: clear the segment, the scale and any result.

        Raises:
            InvalidTransition: If no image is loaded
        """
        self._require_image()

        self.points.reset(Phase.CALIBRATE)
        self._pixels_per_meter = None
        self._result = None
        self._awaiting_length = False
        self._phase = Phase.CALIBRATE

        self._notify(SessionEvent.CALIBRATION_STARTED)

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def start_measurement(self) -> None:
        """
        Switch to MEASURE with an empty polygon and no result.

        Raises:
            InvalidTransition: If no image is loaded
            ScaleNotSet: If calibration has not been done
        """
        self._require_image()

        if not is_usable_scale(self._pixels_per_meter):
            raise self._reject(ScaleNotSet("Set the scale before measuring"))

        self.points.reset(Phase.MEASURE)
        self._result = None
        self._awaiting_length = False
        self._phase = Phase.MEASURE

        self._notify(SessionEvent.MEASURE_STARTED)

    def measure_again(self) -> None:
        """
        Start a new polygon after a result, keeping the scale.

        Raises:
            InvalidTransition: If there is no result to leave
        """
        if self._phase != Phase.RESULT:
            raise self._reject(InvalidTransition("No result to measure again from"))

        self.points.reset(Phase.MEASURE)
        self._result = None
        self._phase = Phase.MEASURE

        self._notify(SessionEvent.MEASURE_STARTED)

    def compute_area(self) -> MeasurementResult:
        """
        Compute the area of the traced polygon and show the result.

        Returns:
            MeasurementResult

        Raises:
            InvalidTransition: If not in MEASURE
            InsufficientVertices: If fewer than 3 points
            ScaleNotSet: If the scale is not usable
        """
        if self._phase != Phase.MEASURE:
            raise self._reject(InvalidTransition("Trace a region before computing its area"))

        vertices = self.points.measurement_points
        if len(vertices) < MIN_POLYGON_VERTICES:
            raise self._reject(InsufficientVertices(
                f"At least {MIN_POLYGON_VERTICES} points are needed to close a region"
            ))

        try:
            result = measure_polygon(vertices, self._pixels_per_meter)
        except MeasurementError as e:
            raise self._reject(e)

        self._result = result
        self._phase = Phase.RESULT

        logger.info(f"Area: {result.summary()} from {result.vertex_count} vertices")
        self._notify(SessionEvent.AREA_COMPUTED, result.summary())
        return result

    # -------------------------------------------------------------------------
    # Pointer and view input
    # -------------------------------------------------------------------------

    def set_surface_origin(self, origin_x: float, origin_y: float) -> None:
        """Set the drawing surface's top-left corner in screen coordinates."""
        self.view.set_surface_origin(origin_x, origin_y)

    def pointer_down(
        self,
        screen_x: float,
        screen_y: float,
        button: int = PRIMARY_BUTTON,
        shift: bool = False
    ) -> Optional[Point]:
        """
        Handle a pointer press.

        The pan button or shift+primary starts a pan. A plain primary
        press places a point in CALIBRATE and MEASURE.

        Returns:
            The placed point, or None if no point was placed
        """
        self._cursor = (float(screen_x), float(screen_y))

        if button == self.config.pan_button or (shift and button == PRIMARY_BUTTON):
            self.view.begin_pan(screen_x, screen_y)
            return None

        if button != PRIMARY_BUTTON or self._image is None:
            return None

        point = self.view.screen_to_image(screen_x, screen_y)
        if self.add_point(point):
            return point
        return None

    def pointer_move(self, screen_x: float, screen_y: float) -> None:
        """Track the cursor and follow an active pan."""
        self._cursor = (float(screen_x), float(screen_y))

        if self.view.is_panning:
            self.view.drag_to(screen_x, screen_y)
            self._notify(SessionEvent.VIEW_CHANGED)
        else:
            self._notify(SessionEvent.CURSOR_MOVED)

    def pointer_up(self, screen_x: Optional[float] = None, screen_y: Optional[float] = None) -> None:
        """End an active pan."""
        if self.view.is_panning:
            self.view.end_pan()

    def wheel(self, screen_x: float, screen_y: float, delta_y: float) -> ViewState:
        """
        Zoom one step at the cursor. Positive delta_y (scroll down) zooms out.
        """
        if delta_y == 0:
            return self.view.state

        direction = -1 if delta_y > 0 else 1
        state = self.view.zoom(screen_x, screen_y, direction)
        self._notify(SessionEvent.VIEW_CHANGED)
        return state

    def zoom_in(self) -> ViewState:
        """Toolbar zoom in."""
        state = self.view.zoom_by(self.config.button_zoom_factor)
        self._notify(SessionEvent.VIEW_CHANGED)
        return state

    def zoom_out(self) -> ViewState:
        """Toolbar zoom out."""
        state = self.view.zoom_by(1 / self.config.button_zoom_factor)
        self._notify(SessionEvent.VIEW_CHANGED)
        return state

    def cursor_image_position(self) -> Point:
        """Image-space position of the last pointer event."""
        return self.view.screen_to_image(*self._cursor)
