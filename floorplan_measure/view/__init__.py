# Zoom and pan module

from .transform import (
    ViewState,
    ViewTransform,
    clamp_scale,
)

__all__ = [
    "ViewState",
    "ViewTransform",
    "clamp_scale",
]
