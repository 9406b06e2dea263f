# Measurement session module

from .points import PointCapture

from .result import (
    MeasurementResult,
    measure_polygon,
)

from .session import (
    MeasurementSession,
    SessionConfig,
    SessionEvent,
    SessionChange,
)

__all__ = [
    # Points
    "PointCapture",
    # Result
    "MeasurementResult",
    "measure_polygon",
    # Session
    "MeasurementSession",
    "SessionConfig",
    "SessionEvent",
    "SessionChange",
]
