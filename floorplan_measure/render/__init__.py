# Rendering module

from .image_source import DrawableImage

from .frame import (
    RenderFrame,
    build_render_frame,
)

from .overlay import (
    to_bgr,
    to_surface_coords,
    draw_image,
    render_overlay,
)

__all__ = [
    # Image source
    "DrawableImage",
    # Frame
    "RenderFrame",
    "build_render_frame",
    # Overlay
    "to_bgr",
    "to_surface_coords",
    "draw_image",
    "render_overlay",
]
