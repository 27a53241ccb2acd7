"""Prism: a recursive Whitted-style ray tracer.

This package renders scenes of analytic shapes lit by a point light, with
support for:
- Phong shading with hard shadows
- Mirror reflection and Snell refraction, blended by Schlick's approximation
- Primitives (spheres, planes, cubes, cylinders, cones) and transform groups
- Procedural patterns (stripes, rings, checkers, gradient, blend)
- Multi-process rendering and PPM/PNG export

Subpackages:
    core: Points, vectors, colors, matrices, transformations and rays
    geometry: Shape primitives, groups and intersection algorithms
    materials: Phong materials, point lights and patterns
    scene: Intersections, the World and declarative scene descriptions
    camera: Pinhole camera and the render loop
    preview: Canvas, image export and preview utilities
"""

__version__ = "0.1.0"
