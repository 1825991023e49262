"""Shape records: geometric primitives with orthonormal local frames.

Components:
    rectangle: Planar rectangle with spans and outward normal
    sphere: Sphere with a (theta, phi) frame
    cylinder_mantle: Curved side of a finite cylinder

Each shape module provides two things:
    - A frozen host-side dataclass (e.g. SphereShape) that orthonormalizes
      its frame on construction and carries its ``shape_type`` tag
    - A Taichi struct (e.g. SphereStruct) with the kernel-side layout, filled
      from ``kernel_fields()`` when the scene is uploaded

Shapes form a closed, tagged union: ``SHAPE_CLASSES`` maps every ShapeType
to its record class.
"""

from src.raytracing.core.constants import ShapeType

from .cylinder_mantle import X_CYLINDER_MANTLE, CylinderMantleShape, CylinderMantleStruct
from .rectangle import Z_RECTANGLE, RectangleShape, RectangleStruct
from .sphere import UNIT_SPHERE, SphereShape, SphereStruct

Shape = RectangleShape | SphereShape | CylinderMantleShape

SHAPE_CLASSES: dict[ShapeType, type] = {
    ShapeType.RECTANGLE: RectangleShape,
    ShapeType.SPHERE: SphereShape,
    ShapeType.CYLINDER_MANTLE: CylinderMantleShape,
}

__all__ = [
    "Shape",
    "SHAPE_CLASSES",
    # Rectangle
    "RectangleShape",
    "RectangleStruct",
    "Z_RECTANGLE",
    # Sphere
    "SphereShape",
    "SphereStruct",
    "UNIT_SPHERE",
    # Cylinder mantle
    "CylinderMantleShape",
    "CylinderMantleStruct",
    "X_CYLINDER_MANTLE",
]
