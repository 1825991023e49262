"""Scene description and binding for a Taichi-based mirror-cabinet raytracer.

This package lets a heterogeneous set of geometric primitives ("shapes") and
material behaviours ("surfaces") be registered, bound together into visible
scene objects, and uploaded as flat, fixed-capacity, type-tagged Taichi fields
that a per-pixel raytracing kernel can consume.

Subpackages:
    core: Type tags, capacities, colour constants, vector math and errors
    shapes: Rectangle, sphere and cylinder-mantle shape records
    surfaces: Colour, mirror, thin-focussing and checkerboard surface records
    scene: Scene registry, snapshots, kernel upload and the demo scene
"""

__version__ = "0.1.0"
