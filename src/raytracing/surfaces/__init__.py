"""Surface records: material behaviours interpreted by the kernel.

Components:
    colour: Flat colour multiply, optionally semi-transparent
    mirror: Specular reflection with a colour (loss) factor
    thin_focussing: Idealized thin lens or focussing mirror
    checkerboard: Two-colour tiling over the shape's surface coordinates

Surfaces are pure data. Each module provides a frozen host-side dataclass
carrying its ``surface_type`` tag and a Taichi struct with the kernel-side
layout. ``SURFACE_CLASSES`` maps every SurfaceType to its record class.
"""

from src.raytracing.core.constants import SurfaceType

from .checkerboard import (
    BLACK_WHITE_CHECKERS,
    BLACK_WHITE_CHECKERS_SEMITRANSPARENT,
    GRAY_CHECKERS_SEMITRANSPARENT,
    CheckerboardSurface,
    CheckerboardSurfaceStruct,
    checkerboard_colour_factor,
    checkerboard_pattern_class,
)
from .colour import (
    BLACK_SURFACE,
    BLUE_SURFACE,
    GREEN_SURFACE,
    RED_SURFACE,
    WHITE_SURFACE,
    ColourSurface,
    ColourSurfaceStruct,
)
from .mirror import (
    PERFECT_MIRROR,
    MirrorSurface,
    MirrorSurfaceStruct,
    reflection_coefficient_from_loss_db,
)
from .thin_focussing import IDEAL_THIN_LENS, ThinFocussingSurface, ThinFocussingSurfaceStruct

Surface = ColourSurface | MirrorSurface | ThinFocussingSurface | CheckerboardSurface

SURFACE_CLASSES: dict[SurfaceType, type] = {
    SurfaceType.COLOUR: ColourSurface,
    SurfaceType.MIRROR: MirrorSurface,
    SurfaceType.THIN_FOCUSSING: ThinFocussingSurface,
    SurfaceType.CHECKERBOARD: CheckerboardSurface,
}

__all__ = [
    "Surface",
    "SURFACE_CLASSES",
    # Colour
    "ColourSurface",
    "ColourSurfaceStruct",
    "WHITE_SURFACE",
    "BLACK_SURFACE",
    "RED_SURFACE",
    "GREEN_SURFACE",
    "BLUE_SURFACE",
    # Mirror
    "MirrorSurface",
    "MirrorSurfaceStruct",
    "PERFECT_MIRROR",
    "reflection_coefficient_from_loss_db",
    # Thin focussing
    "ThinFocussingSurface",
    "ThinFocussingSurfaceStruct",
    "IDEAL_THIN_LENS",
    # Checkerboard
    "CheckerboardSurface",
    "CheckerboardSurfaceStruct",
    "checkerboard_pattern_class",
    "checkerboard_colour_factor",
    "BLACK_WHITE_CHECKERS",
    "BLACK_WHITE_CHECKERS_SEMITRANSPARENT",
    "GRAY_CHECKERS_SEMITRANSPARENT",
]
