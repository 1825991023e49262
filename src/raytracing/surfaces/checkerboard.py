"""Checkerboard surface: two-colour periodic tiling.

The tiling lives in the shape's own 2D surface coordinates (u, v), e.g.
the span coordinates of a rectangle or (theta, phi) on a sphere. The checker
at (u, v) has class

    (floor(u / width1) + floor(v / width2)) mod 2

Class 0 uses colour_factor1 and semitransparent1, class 1 uses
colour_factor2 and semitransparent2. The same rule is available on the host
(``CheckerboardSurface.pattern_class``) and in kernels
(``checkerboard_pattern_class``).

Example:
    >>> from src.raytracing.surfaces.checkerboard import BLACK_WHITE_CHECKERS
    >>> BLACK_WHITE_CHECKERS.pattern_class(0.5, 0.5)
    0
    >>> BLACK_WHITE_CHECKERS.pattern_class(1.5, 0.5)
    1
"""

import math
from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from src.raytracing.core.colours import BLACK, GRAY20, GRAY80, WHITE, Colour, as_colour
from src.raytracing.core.constants import SurfaceType

vec4 = tm.vec4


@ti.dataclass
class CheckerboardSurfaceStruct:
    """Kernel-side layout of a checkerboard surface."""

    width1: ti.f32
    width2: ti.f32
    colour_factor1: vec4
    colour_factor2: vec4
    semitransparent1: ti.i32
    semitransparent2: ti.i32


@dataclass(frozen=True)
class CheckerboardSurface:
    """A two-colour checkerboard.

    Attributes:
        width1: Checker width in surface coordinate 1 (positive).
        width2: Checker width in surface coordinate 2 (positive).
        colour_factor1: RGBA factor of checkers of class 0.
        colour_factor2: RGBA factor of checkers of class 1.
        semitransparent1: Whether checkers of class 0 are semi-transparent.
        semitransparent2: Whether checkers of class 1 are semi-transparent.

    Raises:
        ValueError: If a width is not positive.
    """

    width1: float
    width2: float
    colour_factor1: Colour
    colour_factor2: Colour
    semitransparent1: bool = False
    semitransparent2: bool = False

    surface_type: ClassVar[SurfaceType] = SurfaceType.CHECKERBOARD
    kernel_struct: ClassVar[Any] = CheckerboardSurfaceStruct

    def __post_init__(self) -> None:
        for name in ("width1", "width2"):
            width = float(getattr(self, name))
            if not width > 0.0:
                raise ValueError(f"Checker {name} = {width} must be positive")
            object.__setattr__(self, name, width)
        object.__setattr__(self, "colour_factor1", as_colour(self.colour_factor1))
        object.__setattr__(self, "colour_factor2", as_colour(self.colour_factor2))
        object.__setattr__(self, "semitransparent1", bool(self.semitransparent1))
        object.__setattr__(self, "semitransparent2", bool(self.semitransparent2))

    def pattern_class(self, u: float, v: float) -> int:
        """Get the checker class (0 or 1) at surface coordinates (u, v)."""
        return (math.floor(u / self.width1) + math.floor(v / self.width2)) % 2

    def colour_factor_at(self, u: float, v: float) -> Colour:
        """Get the colour factor of the checker at (u, v)."""
        return self.colour_factor1 if self.pattern_class(u, v) == 0 else self.colour_factor2

    def semitransparent_at(self, u: float, v: float) -> bool:
        """Get whether the checker at (u, v) is semi-transparent."""
        return self.semitransparent1 if self.pattern_class(u, v) == 0 else self.semitransparent2

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "width1": self.width1,
            "width2": self.width2,
            "colour_factor1": self.colour_factor1,
            "colour_factor2": self.colour_factor2,
            "semitransparent1": int(self.semitransparent1),
            "semitransparent2": int(self.semitransparent2),
        }


@ti.func
def checkerboard_pattern_class(u: ti.f32, v: ti.f32, width1: ti.f32, width2: ti.f32) -> ti.i32:
    """Get the checker class (0 or 1) at (u, v) inside a kernel.

    Taichi's integer ``%`` follows Python semantics, so negative
    coordinates give the same classes as on the host.
    """
    checker_sum = ti.cast(ti.floor(u / width1) + ti.floor(v / width2), ti.i32)
    return checker_sum % 2


@ti.func
def checkerboard_colour_factor(surface: CheckerboardSurfaceStruct, u: ti.f32, v: ti.f32) -> vec4:
    """Get the colour factor of the checker at (u, v) inside a kernel."""
    result = surface.colour_factor1
    if checkerboard_pattern_class(u, v, surface.width1, surface.width2) == 1:
        result = surface.colour_factor2
    return result


BLACK_WHITE_CHECKERS = CheckerboardSurface(1.0, 1.0, WHITE, BLACK, False, False)
BLACK_WHITE_CHECKERS_SEMITRANSPARENT = CheckerboardSurface(1.0, 1.0, WHITE, BLACK, True, True)
GRAY_CHECKERS_SEMITRANSPARENT = CheckerboardSurface(1.0, 1.0, GRAY20, GRAY80, True, True)
