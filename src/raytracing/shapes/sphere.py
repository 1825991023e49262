"""Sphere shape with a local spherical-coordinate frame.

The frame defines the sphere's own surface coordinates (theta, phi):
- n_theta0: Direction of theta = 0 (the "north pole")
- n_phi0: Direction of phi = 0 on the equator
- n_phi90: Direction of phi = 90 degrees on the equator

The frame is orthonormalized on construction. radius2 (the squared radius)
is derived from radius, so the kernel does not have to recompute it for
every ray.

Example:
    >>> from src.raytracing.shapes.sphere import SphereShape
    >>> sphere = SphereShape.from_centre_and_radius((0, 0, -1), 0.5)
    >>> sphere.radius2
    0.25
    >>> sphere.with_radius(2.0).radius2
    4.0
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

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SphereStruct:
    """Kernel-side layout of a sphere shape."""

    centre: vec3
    radius: ti.f32
    radius2: ti.f32
    n_theta0: vec3
    n_phi0: vec3
    n_phi90: vec3


@dataclass(frozen=True)
class SphereShape:
    """A sphere defined by centre, radius and an orthonormal frame.

    Attributes:
        centre: The centre of the sphere.
        radius: The radius of the sphere (non-negative).
        n_theta0: Unit vector towards theta = 0.
        n_phi0: Unit vector towards phi = 0, perpendicular to n_theta0.
        n_phi90: Unit vector towards phi = 90 degrees, perpendicular to both.
        radius2: The squared radius (derived).

    Raises:
        ValueError: If the radius is negative.
        DegenerateBasisError: If the frame directions are zero or dependent.
    """

    centre: Vec3
    radius: float
    n_theta0: Vec3 = Z_HAT
    n_phi0: Vec3 = X_HAT
    n_phi90: Vec3 = Y_HAT
    radius2: float = field(init=False)

    shape_type: ClassVar[ShapeType] = ShapeType.SPHERE
    kernel_struct: ClassVar[Any] = SphereStruct

    def __post_init__(self) -> None:
        radius = float(self.radius)
        if radius < 0.0:
            raise ValueError(f"Sphere radius = {radius} must be non-negative")
        n_theta0, n_phi0, n_phi90 = orthonormal_frame(self.n_theta0, self.n_phi0, self.n_phi90)
        object.__setattr__(self, "centre", to_tuple(self.centre))
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "radius2", radius * radius)
        object.__setattr__(self, "n_theta0", to_tuple(n_theta0))
        object.__setattr__(self, "n_phi0", to_tuple(n_phi0))
        object.__setattr__(self, "n_phi90", to_tuple(n_phi90))

    @classmethod
    def from_centre_and_radius(cls, centre, radius: float) -> "SphereShape":
        """Create a sphere with the default frame (north pole along +z)."""
        return cls(centre, radius, Z_HAT, X_HAT, Y_HAT)

    def with_radius(self, radius: float) -> "SphereShape":
        """Return a copy of this sphere with a new radius (and radius2)."""
        return replace(self, radius=radius)

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "centre": self.centre,
            "radius": self.radius,
            "radius2": self.radius2,
            "n_theta0": self.n_theta0,
            "n_phi0": self.n_phi0,
            "n_phi90": self.n_phi90,
        }


UNIT_SPHERE = SphereShape(ORIGIN, 1.0, Z_HAT, X_HAT, Y_HAT)
