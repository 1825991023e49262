"""Colour surface: multiplies the ray's colour by a fixed colour factor.

A semi-transparent colour surface lets the kernel continue the ray behind
the surface as well; what exactly that means is up to the kernel.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from src.raytracing.core.colours import BLACK, BLUE, GREEN, RED, WHITE, Colour, as_colour
from src.raytracing.core.constants import SurfaceType


@ti.dataclass
class ColourSurfaceStruct:
    """Kernel-side layout of a colour surface (semitransparent is 0 or 1)."""

    colour_factor: tm.vec4
    semitransparent: ti.i32


@dataclass(frozen=True)
class ColourSurface:
    """A surface of a flat colour.

    Attributes:
        colour_factor: RGBA factor that multiplies the ray's colour.
        semitransparent: Whether the surface is semi-transparent.
    """

    colour_factor: Colour
    semitransparent: bool = False

    surface_type: ClassVar[SurfaceType] = SurfaceType.COLOUR
    kernel_struct: ClassVar[Any] = ColourSurfaceStruct

    def __post_init__(self) -> None:
        object.__setattr__(self, "colour_factor", as_colour(self.colour_factor))
        object.__setattr__(self, "semitransparent", bool(self.semitransparent))

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "colour_factor": self.colour_factor,
            "semitransparent": int(self.semitransparent),
        }


WHITE_SURFACE = ColourSurface(WHITE)
BLACK_SURFACE = ColourSurface(BLACK)
RED_SURFACE = ColourSurface(RED)
GREEN_SURFACE = ColourSurface(GREEN)
BLUE_SURFACE = ColourSurface(BLUE)
