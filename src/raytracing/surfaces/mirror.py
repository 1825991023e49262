"""Mirror surface: specular reflection weighted by a colour factor.

A reflection loss is encoded in the colour factor. For a reflection
coefficient R, the colour factor is (R, R, R, 1); a perfect mirror has
colour factor white.

Example:
    >>> from src.raytracing.surfaces.mirror import MirrorSurface
    >>> MirrorSurface.from_reflection_coefficient(0.9).colour_factor
    (0.9, 0.9, 0.9, 1.0)
"""

from dataclasses import dataclass
from typing import Any, ClassVar

import taichi as ti
import taichi.math as tm

from src.raytracing.core.colours import WHITE, Colour, as_colour, coefficient_to_colour_factor
from src.raytracing.core.constants import SurfaceType


@ti.dataclass
class MirrorSurfaceStruct:
    """Kernel-side layout of a mirror surface."""

    colour_factor: tm.vec4


def reflection_coefficient_from_loss_db(loss_db: float) -> float:
    """Convert a reflection loss in dB to a reflection coefficient.

    The loss is 10^(loss_db / 10) of the incident intensity, so the
    reflection coefficient is 1 - 10^(0.1 * loss_db). A loss of -10 dB
    gives a coefficient of 0.9.

    Args:
        loss_db: The reflection loss in decibels (typically -30 to 0).

    Returns:
        The reflection coefficient.
    """
    return 1.0 - 10.0 ** (0.1 * loss_db)


@dataclass(frozen=True)
class MirrorSurface:
    """A (planar or curved) mirror.

    Attributes:
        colour_factor: RGBA factor applied on every reflection.
    """

    colour_factor: Colour = WHITE

    surface_type: ClassVar[SurfaceType] = SurfaceType.MIRROR
    kernel_struct: ClassVar[Any] = MirrorSurfaceStruct

    def __post_init__(self) -> None:
        object.__setattr__(self, "colour_factor", as_colour(self.colour_factor))

    @classmethod
    def from_reflection_coefficient(cls, coefficient: float) -> "MirrorSurface":
        """Create a mirror that reflects the given fraction of the light.

        Raises:
            ValueError: If the coefficient is outside [0, 1].
        """
        if coefficient < 0.0 or coefficient > 1.0:
            raise ValueError(
                f"Reflection coefficient = {coefficient} is outside [0, 1]. "
                "A mirror cannot reflect more light than it receives."
            )
        return cls(coefficient_to_colour_factor(coefficient))

    @classmethod
    def from_reflection_loss_db(cls, loss_db: float) -> "MirrorSurface":
        """Create a mirror from a reflection loss in dB (see above)."""
        return cls.from_reflection_coefficient(reflection_coefficient_from_loss_db(loss_db))

    def kernel_fields(self) -> dict[str, Any]:
        """Get the member values for the kernel struct."""
        return {"colour_factor": self.colour_factor}


PERFECT_MIRROR = MirrorSurface(WHITE)
