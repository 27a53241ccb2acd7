"""Camera module for primary ray generation and rendering.

Components:
    camera: Pinhole camera, pixel-to-ray mapping and the render loop

The camera is positioned with a view transform:
    >>> from prism.core import Point, Vector, view_transform
    >>> camera = Camera(400, 200, math.pi / 3,
    ...                 view_transform(Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0)))
    >>> canvas = camera.render(world)
"""

from .camera import Camera, ProgressCallback

__all__ = ["Camera", "ProgressCallback"]
