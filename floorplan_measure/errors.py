"""
Measurement Errors

Exceptions raised when an action is rejected. None of them are fatal:
the session state is left exactly as it was before the attempt.
"""


class MeasurementError(Exception):
    """Base class for rejected measurement actions."""
    pass


class InvalidInput(MeasurementError):
    """Raised when a user-supplied value is not usable (e.g. real length)."""
    pass


class InsufficientVertices(MeasurementError):
    """Raised when a polygon has fewer than three vertices."""
    pass


class ScaleNotSet(MeasurementError):
    """Raised when a real-world value is requested without a usable scale."""
    pass


class InvalidTransition(MeasurementError):
    """Raised when an action is not allowed in the current phase."""
    pass
