"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass, field

from prism.core.color import WHITE, Color
from prism.core.tuples import Point


@dataclass(frozen=True)
class PointLight:
    """A light with no size, radiating from a single point.

    Produces hard shadows only.

    Attributes:
        position: Light position in world space.
        intensity: Light color and brightness.
    """

    position: Point
    intensity: Color = field(default_factory=lambda: WHITE)
