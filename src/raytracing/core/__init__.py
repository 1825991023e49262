"""Core definitions shared by shapes, surfaces and the scene registry.

Components:
    constants: Type tags, capacities and kernel-constant generation
    colours: RGBA colour factors and transmission coefficients
    vectors: Orthogonalization and normalization for shape frames
    errors: Exceptions raised by registration and frame construction

Nothing in this package touches Taichi; it is pure host-side Python and
numpy, so it can be imported before ``ti.init()``.
"""

from .colours import (
    BLACK,
    BLUE,
    GRAY20,
    GRAY40,
    GRAY60,
    GRAY80,
    GREEN,
    ONE_SURFACE_COLOUR_FACTOR,
    RED,
    TWO_SURFACE_COLOUR_FACTOR,
    WHITE,
    Colour,
    coefficient_to_colour_factor,
)
from .constants import (
    DEFAULT_CAPACITIES,
    FocussingType,
    RefractionType,
    SceneCapacities,
    ShapeType,
    SurfaceType,
    kernel_defines,
    render_glsl_defines,
    verify_kernel_defines,
)
from .errors import (
    CapacityExceededError,
    DegenerateBasisError,
    IndexOutOfRangeError,
    KernelConstantMismatchError,
    KindMismatchError,
    SceneError,
)
from .vectors import (
    X_HAT,
    Y_HAT,
    Z_HAT,
    Vec3,
    normalize,
    orthonormal_frame,
    part_perpendicular_to,
    unit_part_along_normal_of,
)

__all__ = [
    # Colours
    "Colour",
    "WHITE",
    "BLACK",
    "RED",
    "GREEN",
    "BLUE",
    "GRAY20",
    "GRAY40",
    "GRAY60",
    "GRAY80",
    "ONE_SURFACE_COLOUR_FACTOR",
    "TWO_SURFACE_COLOUR_FACTOR",
    "coefficient_to_colour_factor",
    # Constants
    "ShapeType",
    "SurfaceType",
    "FocussingType",
    "RefractionType",
    "SceneCapacities",
    "DEFAULT_CAPACITIES",
    "kernel_defines",
    "render_glsl_defines",
    "verify_kernel_defines",
    # Errors
    "SceneError",
    "CapacityExceededError",
    "DegenerateBasisError",
    "IndexOutOfRangeError",
    "KindMismatchError",
    "KernelConstantMismatchError",
    # Vectors
    "Vec3",
    "X_HAT",
    "Y_HAT",
    "Z_HAT",
    "normalize",
    "orthonormal_frame",
    "part_perpendicular_to",
    "unit_part_along_normal_of",
]
