"""Declarative scene description.

Scenes can be built in code, or described as a dict (usually loaded from
JSON) and turned into a World and a Camera here. A description has three
sections:

    {
        "camera": {"width": 320, "height": 160, "field_of_view": 1.047,
                   "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0]},
        "light": {"position": [-10, 10, -10], "intensity": [1, 1, 1]},
        "objects": [
            {"type": "plane",
             "material": {"pattern": {"type": "checkers",
                                      "colors": [[1, 1, 1], [0, 0, 0]]}}},
            {"type": "sphere",
             "transform": [["scale", 0.5, 0.5, 0.5], ["translate", 0, 1, 0]],
             "material": {"color": [1, 0.2, 1], "reflective": 0.3}}
        ]
    }

A transform is a list of operations applied in the order listed, so the
example sphere is scaled and then moved. Operations are ``translate``,
``scale``, ``rotate_x``, ``rotate_y``, ``rotate_z`` (radians) and
``shear`` (six proportions). Object types are ``sphere``,
``glass_sphere``, ``plane``, ``cube``, ``cylinder``, ``cone`` and
``group`` (with ``children``); cylinders and cones also take
``minimum``, ``maximum`` and ``closed``.

Example:
    >>> from prism.scene.config import load_scene
    >>> world, camera = load_scene("examples/scenes/three_spheres.json")
    >>> canvas = camera.render(world)
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from prism.camera.camera import Camera
from prism.core.color import WHITE, Color
from prism.core.transform import Transformation, view_transform
from prism.core.tuples import Point, Vector
from prism.geometry.cone import Cone
from prism.geometry.cube import Cube
from prism.geometry.cylinder import Cylinder
from prism.geometry.group import Group
from prism.geometry.plane import Plane
from prism.geometry.shape import Shape
from prism.geometry.sphere import Sphere, glass_sphere
from prism.materials.light import PointLight
from prism.materials.material import GLASS, Material
from prism.materials.patterns import Blend, Checkers, Gradient, Pattern, Rings, Stripes
from prism.scene.world import World

DEFAULT_FIELD_OF_VIEW = math.pi / 3

_PRIMITIVES: dict[str, type[Shape]] = {
    "sphere": Sphere,
    "plane": Plane,
    "cube": Cube,
}

_TRUNCATED: dict[str, type[Cylinder] | type[Cone]] = {
    "cylinder": Cylinder,
    "cone": Cone,
}

_PATTERNS: dict[str, type[Pattern]] = {
    "stripes": Stripes,
    "rings": Rings,
    "checkers": Checkers,
    "gradient": Gradient,
}

_MATERIAL_FIELDS = {f.name for f in fields(Material)} - {"pattern"}


@dataclass
class SceneConfig:
    """Configuration for a scene description.

    Attributes:
        camera: Camera settings (width, height, field_of_view, from, to, up).
        light: Light settings (position, intensity), or None for no light.
        objects: Object descriptions, in the order they are added.
    """

    camera: dict[str, Any] = field(default_factory=dict)
    light: dict[str, Any] | None = None
    objects: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build a config from a parsed description.

        Raises:
            ValueError: If the description has unknown top-level sections.
        """
        unknown = set(data) - {"camera", "light", "objects"}
        if unknown:
            raise ValueError(f"Unknown scene sections: {sorted(unknown)}")
        return cls(
            camera=dict(data.get("camera", {})),
            light=data.get("light"),
            objects=list(data.get("objects", [])),
        )

    @classmethod
    def from_file(cls, filepath: str | Path) -> SceneConfig:
        """Load a config from a JSON file."""
        with open(filepath, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


# =============================================================================
# Value parsing
# =============================================================================


def _triple(values: Any, what: str) -> tuple[float, float, float]:
    if not isinstance(values, (list, tuple)) or len(values) != 3:
        raise ValueError(f"{what} must be a list of three numbers, got {values!r}")
    return float(values[0]), float(values[1]), float(values[2])


def parse_color(values: Any) -> Color:
    return Color(*_triple(values, "color"))


def parse_transform(operations: list[Any] | None) -> Transformation:
    """Build a Transformation from a list of operations.

    Args:
        operations: Items like ``["translate", 1, 2, 3]``, applied in order.

    Returns:
        The combined transformation (identity for an empty list).

    Raises:
        ValueError: If an operation is unknown or has the wrong arity.
    """
    transform = Transformation()
    for op in operations or []:
        if not op:
            raise ValueError("Empty transform operation")
        name, args = op[0], [float(a) for a in op[1:]]
        if name in ("translate", "scale"):
            if len(args) != 3:
                raise ValueError(f"{name} takes 3 arguments, got {len(args)}")
            if name == "translate":
                transform = transform.translation(*args)
            else:
                transform = transform.scaling(*args)
        elif name in ("rotate_x", "rotate_y", "rotate_z"):
            if len(args) != 1:
                raise ValueError(f"{name} takes 1 argument, got {len(args)}")
            transform = getattr(transform, name)(args[0])
        elif name == "shear":
            if len(args) != 6:
                raise ValueError(f"shear takes 6 arguments, got {len(args)}")
            transform = transform.shearing(*args)
        else:
            raise ValueError(f"Unknown transform operation: {name}")
    return transform


def parse_pattern(config: dict[str, Any]) -> Pattern:
    """Build a Pattern from its description.

    Raises:
        ValueError: If the pattern type is unknown.
    """
    pattern_type = str(config.get("type", "")).lower()
    transform = parse_transform(config.get("transform"))

    if pattern_type == "blend":
        subpatterns = config.get("patterns", [])
        if len(subpatterns) != 2:
            raise ValueError("blend takes exactly two patterns")
        return Blend(parse_pattern(subpatterns[0]), parse_pattern(subpatterns[1]), transform)

    if pattern_type not in _PATTERNS:
        raise ValueError(f"Unknown pattern type: {pattern_type}")
    colors = config.get("colors", [[1, 1, 1], [0, 0, 0]])
    if len(colors) != 2:
        raise ValueError(f"{pattern_type} takes exactly two colors")
    return _PATTERNS[pattern_type](parse_color(colors[0]), parse_color(colors[1]), transform)


def parse_material(config: dict[str, Any] | None) -> Material:
    """Build a Material; missing fields keep their defaults.

    Raises:
        ValueError: If the description has unknown fields.
    """
    if not config:
        return Material()

    unknown = set(config) - _MATERIAL_FIELDS - {"pattern"}
    if unknown:
        raise ValueError(f"Unknown material fields: {sorted(unknown)}")

    kwargs: dict[str, Any] = {}
    for name, value in config.items():
        if name == "color":
            kwargs[name] = parse_color(value)
        elif name == "pattern":
            kwargs[name] = parse_pattern(value)
        else:
            kwargs[name] = float(value)
    return Material(**kwargs)


def build_shape(config: dict[str, Any]) -> Shape:
    """Build a shape (and, for groups, its children) from its description.

    Raises:
        ValueError: If the object type is unknown.
    """
    shape_type = str(config.get("type", "")).lower()
    transform = parse_transform(config.get("transform"))

    if shape_type == "group":
        group = Group(transform)
        for child in config.get("children", []):
            group.add_child(build_shape(child))
        return group

    if shape_type == "glass_sphere":
        shape: Shape = glass_sphere()
        shape.transform = transform
        if "material" in config:
            # Overrides are layered on top of the glass defaults
            overrides = {"transparency": 1.0, "refractive_index": GLASS, **config["material"]}
            shape.material = parse_material(overrides)
        return shape

    material = parse_material(config.get("material"))
    if shape_type in _PRIMITIVES:
        return _PRIMITIVES[shape_type](transform, material)
    if shape_type in _TRUNCATED:
        return _TRUNCATED[shape_type](
            minimum=float(config.get("minimum", -math.inf)),
            maximum=float(config.get("maximum", math.inf)),
            closed=bool(config.get("closed", False)),
            transform=transform,
            material=material,
        )
    raise ValueError(f"Unknown object type: {shape_type}")


def build_light(config: dict[str, Any]) -> PointLight:
    intensity = parse_color(config["intensity"]) if "intensity" in config else WHITE
    return PointLight(Point(*_triple(config.get("position"), "light position")), intensity)


def build_world(config: SceneConfig) -> World:
    """Build the World described by a config."""
    world = World(light=build_light(config.light) if config.light is not None else None)
    for obj in config.objects:
        world.add_object(build_shape(obj))
    return world


def build_camera(
    config: SceneConfig,
    width: int | None = None,
    height: int | None = None,
) -> Camera:
    """Build the Camera described by a config.

    Args:
        config: The scene config.
        width: Overrides the configured width.
        height: Overrides the configured height.
    """
    cam = config.camera
    hsize = width if width is not None else int(cam.get("width", 100))
    vsize = height if height is not None else int(cam.get("height", 50))
    fov = float(cam.get("field_of_view", DEFAULT_FIELD_OF_VIEW))

    from_point = Point(*_triple(cam.get("from", [0, 0, -5]), "camera from"))
    to_point = Point(*_triple(cam.get("to", [0, 0, 0]), "camera to"))
    up = Vector(*_triple(cam.get("up", [0, 1, 0]), "camera up"))
    return Camera(hsize, vsize, fov, view_transform(from_point, to_point, up))


def load_scene(
    source: str | Path | dict[str, Any],
    width: int | None = None,
    height: int | None = None,
) -> tuple[World, Camera]:
    """Load a scene description.

    Args:
        source: Path to a JSON file, or an already parsed description.
        width: Overrides the configured image width.
        height: Overrides the configured image height.

    Returns:
        Tuple of (world, camera).

    Raises:
        ValueError: If the description is invalid.
        OSError: If the file cannot be read.
    """
    if isinstance(source, dict):
        config = SceneConfig.from_dict(source)
    else:
        config = SceneConfig.from_file(source)
    return build_world(config), build_camera(config, width, height)
