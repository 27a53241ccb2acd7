"""Unit tests for the canvas, image export and display helpers.

Tests cover:
- Canvas creation, pixel access and bounds checks
- Quantization (tone curves, gamma, clamping and rounding) via the Taichi kernel
- PPM header, pixel data, line wrapping and trailing newline
- PNG export through Pillow and extension-based dispatch
- Tone mapping and gamma helpers
"""

import numpy as np
import pytest
from PIL import Image

from prism.core.color import BLACK, Color
from prism.preview.canvas import Canvas
from prism.preview.display import (
    apply_gamma,
    process_image_for_display,
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


def _filled(width, height, color):
    canvas = Canvas(width, height)
    for y in range(height):
        canvas.write_row(y, [color] * width)
    return canvas


class TestCanvas:
    """Tests for the Canvas buffer."""

    def test_new_canvas_is_black(self):
        c = Canvas(10, 20)
        assert c.width == 10
        assert c.height == 20
        assert all(c.pixel_at(x, y) == BLACK for x in range(10) for y in range(20))

    def test_write_and_read_pixel(self):
        c = Canvas(10, 20)
        red = Color(1, 0, 0)
        c.write_pixel(2, 3, red)
        assert c.pixel_at(2, 3) == red

    def test_buffer_is_row_major(self):
        """to_array is indexed [y, x]."""
        c = Canvas(4, 2)
        c.write_pixel(3, 1, Color(0.25, 0.5, 0.75))
        arr = c.to_array()
        assert arr.shape == (2, 4, 3)
        assert arr[1, 3].tolist() == [0.25, 0.5, 0.75]

    def test_to_array_is_a_copy(self):
        c = Canvas(2, 2)
        arr = c.to_array()
        arr[0, 0] = 1.0
        assert c.pixel_at(0, 0) == BLACK

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (10, 0), (0, 20)])
    def test_out_of_bounds(self, x, y):
        c = Canvas(10, 20)
        with pytest.raises(ValueError):
            c.write_pixel(x, y, BLACK)
        with pytest.raises(ValueError):
            c.pixel_at(x, y)

    def test_write_row_length_mismatch(self):
        with pytest.raises(ValueError):
            Canvas(3, 1).write_row(0, [BLACK, BLACK])

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0)])
    def test_invalid_size(self, width, height):
        with pytest.raises(ValueError):
            Canvas(width, height)


class TestQuantize:
    """Tests for conversion to 8-bit values."""

    def test_clamp_and_round(self):
        """Out-of-range values clamp; 0.5 rounds up to 128."""
        c = Canvas(1, 1)
        c.write_pixel(0, 0, Color(1.5, 0.5, -0.5))
        pixels = canvas_to_uint8(c)
        assert pixels.dtype == np.uint8
        assert pixels[0, 0].tolist() == [255, 128, 0]

    @pytest.mark.parametrize(
        "tone_map, gamma, exposure",
        [
            ("none", 1.0, 1.0),
            ("none", 2.2, 1.0),
            ("reinhard", 1.0, 1.0),
            ("reinhard", 2.2, 1.0),
            ("exposure", 1.0, 0.5),
            ("exposure", 2.2, 2.0),
        ],
    )
    def test_kernel_matches_display_curves(self, tone_map, gamma, exposure):
        """The export kernel agrees with the numpy preview curves to one step."""
        image = np.linspace(-0.5, 4.0, 4 * 5 * 3, dtype=np.float32).reshape(4, 5, 3)
        expected = np.floor(
            process_image_for_display(image, tone_map, gamma, exposure) * 255.0 + 0.5
        )
        actual = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
        assert actual.shape == image.shape
        assert np.abs(actual.astype(np.int32) - expected.astype(np.int32)).max() <= 1

    def test_gamma_brightens_midtones(self):
        image = np.full((1, 1, 3), 0.25, dtype=np.float32)
        assert image_to_uint8(image)[0, 0, 0] == 64
        assert image_to_uint8(image, gamma=2.0)[0, 0, 0] == 128

    def test_exposure_saturates_bright_values(self):
        image = np.array([[[0.0, 100.0, -3.0]]], dtype=np.float32)
        assert image_to_uint8(image, tone_map="exposure").tolist() == [[[0, 255, 0]]]

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"tone_map": "filmic"}, "Unknown tone mapping"),
            ({"gamma": 0.0}, "gamma must be positive"),
        ],
    )
    def test_invalid_options(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            image_to_uint8(np.zeros((1, 1, 3)), **kwargs)


class TestPPM:
    """Tests for plain PPM output."""

    def test_header(self):
        lines = canvas_to_ppm(Canvas(5, 3)).splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        c = Canvas(5, 3)
        c.write_pixel(0, 0, Color(1.5, 0, 0))
        c.write_pixel(2, 1, Color(0, 0.5, 0))
        c.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = canvas_to_ppm(c).splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_wrap(self):
        """Rows wrap at a value boundary before 70 characters."""
        lines = canvas_to_ppm(_filled(10, 2, Color(1, 0.8, 0.6))).splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= PPM_LINE_LIMIT for line in lines)

    def test_ends_with_newline(self):
        assert canvas_to_ppm(Canvas(5, 3)).endswith("\n")

    def test_save_ppm(self, tmp_path):
        c = Canvas(2, 1)
        path = tmp_path / "out.ppm"
        save_ppm(c, path)
        assert path.read_text(encoding="ascii") == canvas_to_ppm(c)


class TestPNG:
    """Tests for PNG output."""

    def test_save_png(self, tmp_path):
        c = Canvas(3, 2)
        c.write_pixel(1, 1, Color(1, 0.5, 0))
        path = tmp_path / "out.png"
        save_png(c, path)
        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert img.mode == "RGB"
            assert img.getpixel((1, 1)) == (255, 128, 0)
            assert img.getpixel((0, 0)) == (0, 0, 0)

    def test_save_png_with_tone_map(self, tmp_path):
        """Reinhard maps 1.0 to 0.5."""
        c = _filled(1, 1, Color(1, 1, 1))
        path = tmp_path / "mapped.png"
        save_png(c, path, tone_map="reinhard")
        with Image.open(path) as img:
            assert img.getpixel((0, 0)) == (128, 128, 128)

    @pytest.mark.parametrize("name", ["out.ppm", "out.png", "OUT.PNG"])
    def test_save_canvas_dispatch(self, tmp_path, name):
        path = tmp_path / name
        save_canvas(Canvas(2, 2), path)
        assert path.exists()

    def test_save_canvas_unknown_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            save_canvas(Canvas(2, 2), tmp_path / "out.jpg")


class TestDisplayHelpers:
    """Tests for tone mapping and gamma."""

    def test_reinhard(self):
        out = tone_map_reinhard(np.array([[[0.0, 1.0, 3.0]]]))
        assert out[0, 0].tolist() == pytest.approx([0.0, 0.5, 0.75])

    def test_exposure(self):
        out = tone_map_exposure(np.array([[[0.0, 1.0, -1.0]]]), exposure=2.0)
        assert out[0, 0].tolist() == pytest.approx([0.0, 1.0 - np.exp(-2.0), 0.0], abs=1e-6)

    def test_gamma_identity(self):
        image = np.array([[[0.25, 0.5, 2.0]]])
        assert apply_gamma(image, 1.0) is image

    def test_gamma_clamps_before_power(self):
        out = apply_gamma(np.array([[[-1.0, 0.25, 4.0]]]), 2.0)
        assert out[0, 0].tolist() == pytest.approx([0.0, 0.5, 1.0])

    def test_pipeline_clamps(self):
        out = process_image_for_display(np.array([[[2.0, -1.0, 0.5]]]))
        assert out[0, 0].tolist() == pytest.approx([1.0, 0.0, 0.5])

    def test_unknown_tone_map(self):
        with pytest.raises(ValueError, match="Unknown tone mapping"):
            process_image_for_display(np.zeros((1, 1, 3)), tone_map="filmic")
