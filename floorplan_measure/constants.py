"""
Floorplan Measure - Master Constants Reference

Default values for the view transform, point capture and rendering.
Per-session overrides go through SessionConfig.
"""

from enum import Enum

# =============================================================================
# VIEW TRANSFORM CONSTANTS
# =============================================================================

# Smallest allowed zoom factor
MIN_VIEW_SCALE = 0.1

# Largest allowed zoom factor
MAX_VIEW_SCALE = 20.0

# Relative scale change per wheel notch (1 +/- intensity)
ZOOM_INTENSITY = 0.1

# Scale multiplier for the zoom in / zoom out buttons
BUTTON_ZOOM_FACTOR = 1.2

# View state after an image load
DEFAULT_VIEW_SCALE = 1.0
DEFAULT_VIEW_OFFSET = (0.0, 0.0)

# =============================================================================
# POINTER CONSTANTS
# =============================================================================

# Mouse button ids (DOM MouseEvent.button numbering)
PRIMARY_BUTTON = 0
MIDDLE_BUTTON = 1
SECONDARY_BUTTON = 2

# Button that starts a pan without a modifier
PAN_BUTTON = MIDDLE_BUTTON

# =============================================================================
# POINT CAPTURE CONSTANTS
# =============================================================================

# Calibration segment is exactly two points
CALIBRATION_POINT_COUNT = 2

# Minimum polygon vertices for an area
MIN_POLYGON_VERTICES = 3

# =============================================================================
# RESULT CONSTANTS
# =============================================================================

# Decimal places shown for areas and lengths
RESULT_DECIMALS = 2

# Areas smaller than this (m2) get a warning
MIN_AREA_WARNING_SQM = 0.01

# Two vertices closer than this (image pixels) are treated as repeated
DUPLICATE_VERTEX_TOLERANCE_PX = 1e-9

# =============================================================================
# RENDERING CONSTANTS
# Colors are BGR for OpenCV
# =============================================================================

CALIBRATION_COLOR = (68, 68, 239)      # #ef4444
MEASUREMENT_COLOR = (246, 130, 59)     # #3b82f6
VERTEX_OUTLINE_COLOR = (255, 255, 255)
BACKGROUND_COLOR = (0, 0, 0)

# Screen pixels, independent of zoom
LINE_THICKNESS = 3
VERTEX_RADIUS = 6
VERTEX_OUTLINE_THICKNESS = 2

# Opacity of the measured region fill
FILL_ALPHA = 0.2


# =============================================================================
# PHASES
# =============================================================================

class Phase(Enum):
    """
    Current step of a measurement session.

    Values:
        UPLOAD: No image loaded yet
        CALIBRATE: Marking the two-point reference segment
        MEASURE: Tracing the polygon to measure
        RESULT: Area computed and shown
    """
    UPLOAD = "upload"
    CALIBRATE = "calibrate"
    MEASURE = "measure"
    RESULT = "result"

    def accepts_points(self) -> bool:
        """Check if clicks in this phase place points."""
        return self in (Phase.CALIBRATE, Phase.MEASURE)
