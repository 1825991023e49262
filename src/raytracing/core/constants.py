"""Type tags, capacities and other constants shared with the kernel.

The raytracing kernel has no notion of objects or dynamic dispatch. It sees
one fixed-length array per shape kind and per surface kind, plus an array of
scene objects that refer into them by (type tag, index). The type tags and
capacities defined here therefore have to match the kernel bit for bit.

This module is the single source of truth for those values:
- The Taichi kernel fields in ``scene.kernel_scene`` are sized from a
  ``SceneCapacities`` instance, so host and kernel agree by construction.
- For an external, separately compiled kernel (e.g. a GLSL fragment shader),
  ``render_glsl_defines()`` generates the matching ``#define`` block and
  ``verify_kernel_defines()`` checks an existing one.

Example:
    >>> from src.raytracing.core.constants import ShapeType, SceneCapacities
    >>> SceneCapacities().for_shape(ShapeType.SPHERE)
    10
"""

import re
from dataclasses import dataclass
from enum import IntEnum

from src.raytracing.core.errors import KernelConstantMismatchError

# =============================================================================
# Capacities
# =============================================================================

MAX_SCENE_OBJECTS = 50
MAX_RECTANGLE_SHAPES = 50
MAX_SPHERE_SHAPES = 10
MAX_CYLINDER_MANTLE_SHAPES = 10
MAX_COLOUR_SURFACES = 10
MAX_MIRROR_SURFACES = 10
MAX_THIN_FOCUSSING_SURFACES = 10
MAX_CHECKERBOARD_SURFACES = 2


# =============================================================================
# Type Tags
# =============================================================================


class ShapeType(IntEnum):
    """Type tags of the supported shapes."""

    RECTANGLE = 0
    SPHERE = 1
    CYLINDER_MANTLE = 2


class SurfaceType(IntEnum):
    """Type tags of the supported surfaces."""

    COLOUR = 0
    MIRROR = 1
    THIN_FOCUSSING = 2
    CHECKERBOARD = 3


class RefractionType(IntEnum):
    """Deflection law used by a thin focussing surface."""

    IDEAL = 0
    PHASE_HOLOGRAM = 1


class FocussingType(IntEnum):
    """Axes along which a thin focussing surface bends rays."""

    SPHERICAL = 0
    CYLINDRICAL = 1
    TORIC = 2


# =============================================================================
# Capacity Configuration
# =============================================================================


@dataclass(frozen=True)
class SceneCapacities:
    """Fixed per-kind capacities of a scene.

    The registry refuses registrations beyond these capacities and the
    kernel upload allocates exactly this many slots per kind. Pass the same
    instance to both.

    Attributes:
        max_scene_objects: Maximum number of scene objects.
        max_rectangle_shapes: Maximum number of rectangle shapes.
        max_sphere_shapes: Maximum number of sphere shapes.
        max_cylinder_mantle_shapes: Maximum number of cylinder-mantle shapes.
        max_colour_surfaces: Maximum number of colour surfaces.
        max_mirror_surfaces: Maximum number of mirror surfaces.
        max_thin_focussing_surfaces: Maximum number of thin focussing surfaces.
        max_checkerboard_surfaces: Maximum number of checkerboard surfaces.
    """

    max_scene_objects: int = MAX_SCENE_OBJECTS
    max_rectangle_shapes: int = MAX_RECTANGLE_SHAPES
    max_sphere_shapes: int = MAX_SPHERE_SHAPES
    max_cylinder_mantle_shapes: int = MAX_CYLINDER_MANTLE_SHAPES
    max_colour_surfaces: int = MAX_COLOUR_SURFACES
    max_mirror_surfaces: int = MAX_MIRROR_SURFACES
    max_thin_focussing_surfaces: int = MAX_THIN_FOCUSSING_SURFACES
    max_checkerboard_surfaces: int = MAX_CHECKERBOARD_SURFACES

    def __post_init__(self) -> None:
        for name, value in self.__dict__.items():
            if value < 1:
                raise ValueError(f"{name} = {value} must be at least 1")

    def for_shape(self, shape_type: ShapeType) -> int:
        """Get the capacity for a shape kind."""
        return {
            ShapeType.RECTANGLE: self.max_rectangle_shapes,
            ShapeType.SPHERE: self.max_sphere_shapes,
            ShapeType.CYLINDER_MANTLE: self.max_cylinder_mantle_shapes,
        }[ShapeType(shape_type)]

    def for_surface(self, surface_type: SurfaceType) -> int:
        """Get the capacity for a surface kind."""
        return {
            SurfaceType.COLOUR: self.max_colour_surfaces,
            SurfaceType.MIRROR: self.max_mirror_surfaces,
            SurfaceType.THIN_FOCUSSING: self.max_thin_focussing_surfaces,
            SurfaceType.CHECKERBOARD: self.max_checkerboard_surfaces,
        }[SurfaceType(surface_type)]


DEFAULT_CAPACITIES = SceneCapacities()


# =============================================================================
# Kernel Constant Generation and Verification
# =============================================================================


def kernel_defines(capacities: SceneCapacities = DEFAULT_CAPACITIES) -> dict[str, int]:
    """Build the table of every constant the kernel must share with the host.

    Names follow the kernel's conventions, e.g. ``MAX_SPHERE_SHAPES``,
    ``SPHERE_SHAPE``, ``MIRROR_SURFACE``, ``TORIC_FOCUSSING_TYPE``.

    Args:
        capacities: The capacities the kernel arrays are compiled with.

    Returns:
        An insertion-ordered mapping from constant name to value.
    """
    defines = {
        "MAX_SCENE_OBJECTS": capacities.max_scene_objects,
        "MAX_RECTANGLE_SHAPES": capacities.max_rectangle_shapes,
        "MAX_SPHERE_SHAPES": capacities.max_sphere_shapes,
        "MAX_CYLINDER_MANTLE_SHAPES": capacities.max_cylinder_mantle_shapes,
        "MAX_COLOUR_SURFACES": capacities.max_colour_surfaces,
        "MAX_MIRROR_SURFACES": capacities.max_mirror_surfaces,
        "MAX_THIN_FOCUSSING_SURFACES": capacities.max_thin_focussing_surfaces,
        "MAX_CHECKERBOARD_SURFACES": capacities.max_checkerboard_surfaces,
    }
    for shape_type in ShapeType:
        defines[f"{shape_type.name}_SHAPE"] = int(shape_type)
    for surface_type in SurfaceType:
        defines[f"{surface_type.name}_SURFACE"] = int(surface_type)
    for refraction_type in RefractionType:
        defines[f"{refraction_type.name}_REFRACTION_TYPE"] = int(refraction_type)
    for focussing_type in FocussingType:
        defines[f"{focussing_type.name}_FOCUSSING_TYPE"] = int(focussing_type)
    return defines


def render_glsl_defines(capacities: SceneCapacities = DEFAULT_CAPACITIES) -> str:
    """Render the shared constants as a block of ``#define`` lines."""
    lines = ["// generated from src/raytracing/core/constants.py; do not edit"]
    lines.extend(f"#define {name} {value}" for name, value in kernel_defines(capacities).items())
    return "\n".join(lines) + "\n"


_DEFINE_PATTERN = re.compile(
    r"^\s*#define\s+([A-Z_][A-Z0-9_]*)\s+(-?\d+)\s*(?:$|//|/\*)", re.MULTILINE
)


def parse_kernel_defines(source: str) -> dict[str, int]:
    """Extract integer ``#define`` constants from kernel source code."""
    return {name: int(value) for name, value in _DEFINE_PATTERN.findall(source)}


def verify_kernel_defines(
    source: str,
    capacities: SceneCapacities = DEFAULT_CAPACITIES,
    require_all: bool = True,
) -> None:
    """Check that a kernel's ``#define`` constants agree with the host.

    Args:
        source: The kernel source code (e.g. a GLSL fragment shader).
        capacities: The capacities the host registry uses.
        require_all: If True, a shared constant missing from the source is
            also reported as a mismatch.

    Raises:
        KernelConstantMismatchError: If any shared constant differs (or is
            missing, when ``require_all`` is set).
    """
    found = parse_kernel_defines(source)
    problems = []
    for name, expected in kernel_defines(capacities).items():
        if name not in found:
            if require_all:
                problems.append(f"{name} missing (expected {expected})")
        elif found[name] != expected:
            problems.append(f"{name} = {found[name]} (expected {expected})")
    if problems:
        raise KernelConstantMismatchError(
            "Kernel constants disagree with the host: " + "; ".join(problems)
        )
