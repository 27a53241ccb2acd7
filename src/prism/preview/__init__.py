"""Preview module for the render target, output and visualization.

Components:
    canvas: Float color buffer the camera renders into
    export: Taichi quantization kernel, PPM and PNG writers
    display: Tone mapping, gamma and a Matplotlib preview window

The canvas stores unclamped linear colors. Clamping and rounding to
bytes happen once, on export.

Example:
    >>> from prism.preview import save_canvas, show_preview
    >>> canvas = camera.render(world)
    >>> save_canvas(canvas, "scene.ppm")
    >>> show_preview(canvas)
"""

from prism.preview.canvas import Canvas
from prism.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from prism.preview.export import (
    PPM_LINE_LIMIT,
    canvas_to_ppm,
    canvas_to_uint8,
    image_to_uint8,
    save_canvas,
    save_png,
    save_ppm,
)

__all__ = [
    # Canvas
    "Canvas",
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "canvas_to_ppm",
    "canvas_to_uint8",
    "image_to_uint8",
    "save_ppm",
    "save_png",
    "save_canvas",
    "PPM_LINE_LIMIT",
]
