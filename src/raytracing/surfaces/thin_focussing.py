"""Thin focussing surface: an idealized thin lens or focussing mirror.

The surface bends rays as a thin optical element of a given optical power
(in dioptres) would. How it bends them depends on:
- focussing_type: SPHERICAL (all directions), CYLINDRICAL (only along
  n_optical_power_direction) or TORIC
- refraction_type: IDEAL (ideal thin lens law) or PHASE_HOLOGRAM
  (deflection of a phase hologram)
- reflective: True for a focussing mirror, False for a lens

The deflection laws themselves are implemented by the kernel. The colour
factor models transmission losses; the default corresponds to two typical
air-glass interfaces.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from src.raytracing.core.colours import TWO_SURFACE_COLOUR_FACTOR, Colour, as_colour
from src.raytracing.core.constants import FocussingType, RefractionType, SurfaceType
from src.raytracing.core.vectors import ORIGIN, X_HAT, Vec3, normalize, to_tuple

vec3 = tm.vec3


@ti.dataclass
class ThinFocussingSurfaceStruct:
    """Kernel-side layout of a thin focussing surface.

    Enum members are stored as their integer tags; reflective is 0 or 1.
    """

    principal_point: vec3
    optical_power: ti.f32
    focussing_type: ti.i32
    n_optical_power_direction: vec3
    reflective: ti.i32
    refraction_type: ti.i32
    colour_factor: tm.vec4


@dataclass(frozen=True)
class ThinFocussingSurface:
    """An idealized thin lens or focussing mirror.

    Attributes:
        principal_point: The principal point of the element.
        optical_power: The optical power (1 / focal length).
        focussing_type: Which axes the element focusses along.
        n_optical_power_direction: Unit vector along which the optical power
            acts (for cylindrical and toric focussing).
        reflective: True for a focussing mirror, False for a lens.
        refraction_type: Ideal or phase-hologram deflection.
        colour_factor: RGBA factor applied on every interaction.

    Raises:
        ValueError: If an enum value is not a valid tag.
        DegenerateBasisError: If the optical-power direction is zero.
    """

    principal_point: Vec3 = ORIGIN
    optical_power: float = 1.0
    focussing_type: FocussingType = FocussingType.SPHERICAL
    n_optical_power_direction: Vec3 = X_HAT
    reflective: bool = False
    refraction_type: RefractionType = RefractionType.IDEAL
    colour_factor: Colour = TWO_SURFACE_COLOUR_FACTOR

    surface_type: ClassVar[SurfaceType] = SurfaceType.THIN_FOCUSSING
    kernel_struct: ClassVar[Any] = ThinFocussingSurfaceStruct

    def __post_init__(self) -> None:
        object.__setattr__(self, "principal_point", to_tuple(self.principal_point))
        object.__setattr__(self, "optical_power", float(self.optical_power))
        object.__setattr__(self, "focussing_type", FocussingType(self.focussing_type))
        object.__setattr__(
            self,
            "n_optical_power_direction",
            to_tuple(normalize(self.n_optical_power_direction)),
        )
        object.__setattr__(self, "reflective", bool(self.reflective))
        object.__setattr__(self, "refraction_type", RefractionType(self.refraction_type))
        object.__setattr__(self, "colour_factor", as_colour(self.colour_factor))

    @property
    def focal_length(self) -> float:
        """The focal length 1 / optical_power (infinite for zero power)."""
        if self.optical_power == 0.0:
            return float("inf")
        return 1.0 / self.optical_power

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {
            "principal_point": self.principal_point,
            "optical_power": self.optical_power,
            "focussing_type": int(self.focussing_type),
            "n_optical_power_direction": self.n_optical_power_direction,
            "reflective": int(self.reflective),
            "refraction_type": int(self.refraction_type),
            "colour_factor": self.colour_factor,
        }


IDEAL_THIN_LENS = ThinFocussingSurface()
