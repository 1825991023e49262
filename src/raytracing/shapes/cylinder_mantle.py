"""Cylinder mantle shape: the curved side of a finite cylinder (no caps).

The mantle is centred on ``centre`` and extends ``length / 2`` either way
along ``n_axis``. ``n_phi0`` and ``n_phi90`` complete the orthonormal frame
and define the azimuthal surface coordinate.
"""

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from src.raytracing.core.constants import ShapeType
from src.raytracing.core.vectors import (
    ORIGIN,
    X_HAT,
    Y_HAT,
    Z_HAT,
    Vec3,
    orthonormal_frame,
    to_tuple,
)

vec3 = tm.vec3


@ti.dataclass
class CylinderMantleStruct:
    """Kernel-side layout of a cylinder-mantle shape."""

    centre: vec3
    radius: ti.f32
    radius2: ti.f32
    length: ti.f32
    n_axis: vec3
    n_phi0: vec3
    n_phi90: vec3


@dataclass(frozen=True)
class CylinderMantleShape:
    """A cylinder mantle with an orthonormal (axis, phi0, phi90) frame.

    Attributes:
        centre: The centre of the cylinder axis segment.
        radius: The cylinder radius (non-negative).
        length: The length along the axis (non-negative).
        n_axis: Unit vector along the cylinder axis.
        n_phi0: Unit vector towards phi = 0, perpendicular to the axis.
        n_phi90: Unit vector towards phi = 90 degrees.
        radius2: The squared radius (derived).
    """

    centre: Vec3
    radius: float
    length: float
    n_axis: Vec3 = X_HAT
    n_phi0: Vec3 = Y_HAT
    n_phi90: Vec3 = Z_HAT
    radius2: float = field(init=False)

    shape_type: ClassVar[ShapeType] = ShapeType.CYLINDER_MANTLE
    kernel_struct: ClassVar[Any] = CylinderMantleStruct

    def __post_init__(self) -> None:
        radius = float(self.radius)
        length = float(self.length)
        if radius < 0.0:
            raise ValueError(f"Cylinder radius = {radius} must be non-negative")
        if length < 0.0:
            raise ValueError(f"Cylinder length = {length} must be non-negative")
        n_axis, n_phi0, n_phi90 = orthonormal_frame(self.n_axis, self.n_phi0, self.n_phi90)
        object.__setattr__(self, "centre", to_tuple(self.centre))
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "radius2", radius * radius)
        object.__setattr__(self, "length", length)
        object.__setattr__(self, "n_axis", to_tuple(n_axis))
        object.__setattr__(self, "n_phi0", to_tuple(n_phi0))
        object.__setattr__(self, "n_phi90", to_tuple(n_phi90))

    def with_radius(self, radius: float) -> "CylinderMantleShape":
        """Return a copy of this cylinder mantle with a new radius."""
        return replace(self, radius=radius)

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "centre": self.centre,
            "radius": self.radius,
            "radius2": self.radius2,
            "length": self.length,
            "n_axis": self.n_axis,
            "n_phi0": self.n_phi0,
            "n_phi90": self.n_phi90,
        }


X_CYLINDER_MANTLE = CylinderMantleShape(ORIGIN, 1.0, 1.0, X_HAT, Y_HAT, Z_HAT)
