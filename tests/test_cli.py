"""Tests for the command-line renderer.

Tests cover:
- Argument parsing and defaults
- Rendering a scene file to PPM and PNG
- Error reporting and exit codes
"""

import json

import pytest
from PIL import Image

from prism.cli import main, parse_args
from prism.scene.world import DEFAULT_REMAINING


@pytest.fixture
def scene_file(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text(
        json.dumps(
            {
                "camera": {"width": 6, "height": 4, "from": [0, 0, -5]},
                "light": {"position": [-10, 10, -10]},
                "objects": [{"type": "sphere", "material": {"color": [1, 0.2, 0.2]}}],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self):
        args = parse_args(["scene.json"])
        assert args.scene == "scene.json"
        assert args.width is None
        assert args.height is None
        assert args.output == "render.ppm"
        assert args.workers == 1
        assert args.bounces == DEFAULT_REMAINING
        assert not args.cpu
        assert not args.show
        assert not args.quiet

    def test_overrides(self):
        args = parse_args(
            ["s.json", "--width", "40", "--height", "20", "--output", "x.png", "--workers", "3", "--bounces", "2"]
        )
        assert (args.width, args.height) == (40, 20)
        assert args.output == "x.png"
        assert args.workers == 3
        assert args.bounces == 2

    def test_scene_is_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Tests for main."""

    def test_render_ppm(self, scene_file, tmp_path):
        out = tmp_path / "out.ppm"
        assert main([str(scene_file), "--output", str(out), "--cpu", "--quiet"]) == 0
        lines = out.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "6 4", "255"]

    def test_render_png_with_size_override(self, scene_file, tmp_path):
        out = tmp_path / "out.png"
        code = main(
            [str(scene_file), "--output", str(out), "--width", "5", "--height", "3", "--cpu", "--quiet"]
        )
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (5, 3)

    def test_progress_output(self, scene_file, tmp_path, capsys):
        out = tmp_path / "out.ppm"
        assert main([str(scene_file), "--output", str(out), "--cpu"]) == 0
        captured = capsys.readouterr().out
        assert "4/4 rows" in captured
        assert "Saved to:" in captured

    def test_missing_scene(self, tmp_path, capsys):
        code = main([str(tmp_path / "missing.json"), "--cpu", "--quiet"])
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unsupported_output(self, scene_file, tmp_path, capsys):
        code = main([str(scene_file), "--output", str(tmp_path / "out.gif"), "--cpu", "--quiet"])
        assert code == 1
        assert "Unsupported" in capsys.readouterr().err
