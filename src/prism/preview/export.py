"""Image export utilities for rendered canvases.

This module converts the linear float canvas to 8-bit pixels and writes
them out.

Supported formats:
    - PPM (plain "P3" text)
    - PNG (8-bit via Pillow)

Quantization is the one place clamping happens: every component is
optionally tone mapped and gamma encoded, then clamped to [0, 1], scaled by
255 and rounded half up. All of it runs as one Taichi kernel over the
whole buffer, so Taichi must be initialized first:

    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from prism.core import Color
    >>> from prism.preview.canvas import Canvas
    >>> from prism.preview.export import canvas_to_ppm
    >>> canvas = Canvas(1, 1)
    >>> canvas.write_pixel(0, 0, Color(1.5, 0.5, -0.5))
    >>> canvas_to_ppm(canvas).splitlines()[-1]
    '255 128 0'
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
import taichi as ti
from PIL import Image as PILImage

from prism.preview.canvas import Canvas
from prism.preview.display import ToneMapMethod

# Plain PPM readers are only required to handle lines this long
PPM_LINE_LIMIT = 70

_TONE_MAP_CODES = {"none": 0, "reinhard": 1, "exposure": 2}


@ti.kernel
def _quantize(
    src: ti.types.ndarray(dtype=ti.f32, ndim=3),
    dst: ti.types.ndarray(dtype=ti.i32, ndim=3),
    tone_map: ti.i32,
    gamma: ti.f32,
    exposure: ti.f32,
):
    """Tone map, gamma encode, clamp to [0, 1], scale to [0, 255] and round half up."""
    for i, j, k in ti.ndrange(src.shape[0], src.shape[1], src.shape[2]):
        v = src[i, j, k]
        if tone_map == 1:
            v = ti.max(v, 0.0)
            v = v / (v + 1.0)
        elif tone_map == 2:
            v = 1.0 - ti.exp(-ti.max(v, 0.0) * exposure)
        v = ti.min(ti.max(v, 0.0), 1.0)
        if gamma != 1.0:
            v = v ** (1.0 / gamma)
        dst[i, j, k] = ti.cast(ti.floor(v * 255.0 + 0.5), ti.i32)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Quantize a (H, W, 3) linear image to bytes.

    The curves match prism.preview.display, so a PNG written with a tone
    map looks like the preview window.

    Args:
        image: Float image; values outside [0, 1] are clamped.
        tone_map: Tone curve applied before clamping.
        gamma: Gamma applied after the tone curve (1.0 disables it).
        exposure: Exposure for the "exposure" curve.

    Returns:
        Array of the same shape with dtype uint8.

    Raises:
        ValueError: If ``tone_map`` is unknown or ``gamma`` is not positive.
    """
    if tone_map not in _TONE_MAP_CODES:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    src = np.ascontiguousarray(image, dtype=np.float32)
    dst = np.zeros(src.shape, dtype=np.int32)
    _quantize(src, dst, _TONE_MAP_CODES[tone_map], gamma, exposure)
    return dst.astype(np.uint8)


def canvas_to_uint8(canvas: Canvas) -> npt.NDArray[np.uint8]:
    """Quantize a canvas to a (height, width, 3) uint8 array."""
    return image_to_uint8(canvas.to_array())


def canvas_to_ppm(canvas: Canvas) -> str:
    """Serialize a canvas as plain PPM text.

    Each pixel row starts on a new line and no line exceeds 70
    characters; long rows wrap at a value boundary.

    Returns:
        The PPM file contents, ending with a newline.
    """
    pixels = canvas_to_uint8(canvas)
    lines = ["P3", f"{canvas.width} {canvas.height}", "255"]
    for row in pixels:
        line = ""
        for value in row.reshape(-1):
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_LINE_LIMIT:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    """Write a canvas to a plain PPM file."""
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Save a canvas as a PNG file.

    The canvas holds display-ready colors, so by default no tone mapping
    or gamma is applied and the PNG matches the PPM output byte for byte.

    Args:
        canvas: The rendered canvas.
        filepath: Output file path (should end in .png).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (1.0 leaves colors untouched).
        exposure: Exposure value for exposure tone mapping.
    """
    pixels = image_to_uint8(canvas.to_array(), tone_map=tone_map, gamma=gamma, exposure=exposure)
    pil_image = PILImage.fromarray(pixels)
    pil_image.save(filepath)


def save_canvas(canvas: Canvas, filepath: str | Path) -> None:
    """Save a canvas, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(canvas, filepath)
    elif suffix == ".png":
        save_png(canvas, filepath)
    else:
        raise ValueError(f"Unsupported output format: {suffix or filepath}")
