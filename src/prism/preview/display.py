"""Display-side processing and a Matplotlib preview window.

Whitted renders are mostly in display range already, so by default the
canvas is shown exactly as it will be exported: clamped to [0, 1] and
nothing else. Stacked reflections and specular highlights can push
values well above 1.0, though; for those scenes a tone curve can squeeze
the highlights back in before display or PNG export.

Tone curves:
    none      clamp only
    reinhard  c / (1 + c)
    exposure  1 - exp(-c * exposure)

Example:
    >>> from prism.preview.display import show_preview
    >>> canvas = camera.render(world)
    >>> show_preview(canvas, tone_map="reinhard")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from prism.preview.canvas import Canvas


ToneMapMethod = Literal["none", "reinhard", "exposure"]


def tone_map_reinhard(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Compress [0, inf) into [0, 1) with c / (1 + c); negatives become 0."""
    positive = np.clip(image, 0.0, None)
    return (positive / (positive + 1.0)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.floating],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Film-like curve 1 - exp(-c * exposure); larger exposure is brighter."""
    positive = np.clip(image, 0.0, None)
    return -np.expm1(-positive * exposure).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 2.2,
) -> npt.NDArray[np.floating]:
    """Raise clamped values to 1/gamma.

    A gamma of exactly 1.0 returns ``image`` itself, unclamped.
    """
    if gamma == 1.0:
        return image
    encoded = np.power(np.clip(image, 0.0, 1.0), 1.0 / gamma)
    return encoded.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Tone map, gamma encode and clamp a linear (H, W, 3) image.

    Raises:
        ValueError: If ``tone_map`` is not one of the curves above.
    """
    linear = np.asarray(image, dtype=np.float32)
    if tone_map == "none":
        mapped = linear
    elif tone_map == "reinhard":
        mapped = tone_map_reinhard(linear)
    elif tone_map == "exposure":
        mapped = tone_map_exposure(linear, exposure)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    return np.clip(apply_gamma(mapped, gamma), 0.0, 1.0).astype(np.float32)


def show_preview(
    canvas: Canvas,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    block: bool = True,
) -> None:
    """Open a window showing the canvas.

    The figure is sized so one canvas pixel maps to roughly one screen
    pixel at 100 dpi, with a minimum of four inches on the long side.

    Args:
        canvas: The rendered canvas.
        tone_map: Tone curve applied before display.
        gamma: Gamma applied after the tone curve.
        exposure: Exposure for the "exposure" curve.
        title: Window title; defaults to the canvas size.
        block: Whether to wait until the window is closed.
    """
    import matplotlib.pyplot as plt

    pixels = process_image_for_display(canvas.to_array(), tone_map, gamma, exposure)

    scale = max(4.0 / max(canvas.width, canvas.height), 0.01)
    fig, ax = plt.subplots(figsize=(canvas.width * scale, canvas.height * scale))
    ax.imshow(pixels, interpolation="nearest")
    ax.set_axis_off()
    ax.set_title(title or f"{canvas.width}x{canvas.height}")

    fig.tight_layout()
    plt.show(block=block)
