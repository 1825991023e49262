"""Rectangle shape: a planar parallelogram with an outward normal.

A rectangle is defined by:
- corner: One corner of the rectangle
- span1: Edge vector from the corner to an adjacent corner
- span2: Edge vector from the corner to the other adjacent corner
- n_normal: Unit normal, pointing "outwards"

The rectangle covers corner + a*span1 + b*span2 for a, b in [0, 1]. On
construction, span2 is replaced by its part perpendicular to span1 (its
length along that direction is kept) and the normal by the unit vector along
span1 x span2 on the same side as the given normal. span1 is kept as given.

Example:
    >>> from src.raytracing.shapes.rectangle import RectangleShape
    >>> floor = RectangleShape.from_spans(
    ...     corner=(0, 0, 0), span1=(1, 0, 0), span2=(0, 1, 0)
    ... )
    >>> floor.n_normal
    (0.0, 0.0, 1.0)
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np
import taichi as ti
import taichi.math as tm

from src.raytracing.core.constants import ShapeType
from src.raytracing.core.vectors import (
    X_HAT,
    Y_HAT,
    Z_HAT,
    Vec3,
    as_vec3,
    part_perpendicular_to,
    to_tuple,
    unit_part_along_normal_of,
)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class RectangleStruct:
    """Kernel-side layout of a rectangle shape.

    Attributes:
        corner: One corner of the rectangle.
        span1: Edge vector from the corner to an adjacent corner.
        span2: Edge vector from the corner to the other adjacent corner,
            perpendicular to span1.
        n_normal: Unit outward normal, perpendicular to both spans.
    """

    corner: vec3
    span1: vec3
    span2: vec3
    n_normal: vec3


@dataclass(frozen=True)
class RectangleShape:
    """A rectangle shape with an orthogonal frame.

    Attributes:
        corner: One corner of the rectangle.
        span1: Edge vector from the corner to an adjacent corner, as given.
        span2: Edge vector perpendicular to span1 (orthogonalized on
            construction).
        n_normal: Unit outward normal (orthonormalized on construction).

    Raises:
        DegenerateBasisError: If span1 is zero, span2 is parallel to span1,
            or the normal lies in the plane of the spans.
    """

    corner: Vec3
    span1: Vec3
    span2: Vec3
    n_normal: Vec3

    shape_type: ClassVar[ShapeType] = ShapeType.RECTANGLE
    kernel_struct: ClassVar[Any] = RectangleStruct

    def __post_init__(self) -> None:
        span1 = as_vec3(self.span1)
        span2 = part_perpendicular_to(self.span2, span1)
        n_normal = unit_part_along_normal_of(self.n_normal, span1, span2)
        object.__setattr__(self, "corner", to_tuple(self.corner))
        object.__setattr__(self, "span1", to_tuple(span1))
        object.__setattr__(self, "span2", to_tuple(span2))
        object.__setattr__(self, "n_normal", to_tuple(n_normal))

    @classmethod
    def from_spans(cls, corner, span1, span2) -> "RectangleShape":
        """Create a rectangle whose normal is span1 x span2 (right-hand rule).

        Args:
            corner: One corner of the rectangle.
            span1: Edge vector from the corner to an adjacent corner.
            span2: Edge vector from the corner to the other adjacent corner.

        Returns:
            A new RectangleShape.
        """
        return cls(corner, span1, span2, np.cross(as_vec3(span1), as_vec3(span2)))

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "corner": self.corner,
            "span1": self.span1,
            "span2": self.span2,
            "n_normal": self.n_normal,
        }


# Unit square in the z=0 plane, centred on the origin, facing +z
Z_RECTANGLE = RectangleShape((-0.5, -0.5, 0.0), X_HAT, Y_HAT, Z_HAT)
