"""Unit tests for the constants shared between host and kernel.

Tests cover:
- Type tag values
- SceneCapacities validation and per-kind lookup
- #define generation, parsing and verification
"""

import pytest

from src.raytracing.core.constants import (
    DEFAULT_CAPACITIES,
    FocussingType,
    RefractionType,
    SceneCapacities,
    ShapeType,
    SurfaceType,
    kernel_defines,
    parse_kernel_defines,
    render_glsl_defines,
    verify_kernel_defines,
)
from src.raytracing.core.errors import KernelConstantMismatchError, SceneError


class TestTypeTags:
    """Tests for the integer values of the type tags."""

    def test_shape_tags(self):
        """Test that shape tags are dense and start at 0."""
        assert [int(t) for t in ShapeType] == [0, 1, 2]
        assert ShapeType.CYLINDER_MANTLE == 2

    def test_surface_tags(self):
        """Test the surface tag values."""
        assert SurfaceType.COLOUR == 0
        assert SurfaceType.MIRROR == 1
        assert SurfaceType.THIN_FOCUSSING == 2
        assert SurfaceType.CHECKERBOARD == 3

    def test_enumerated_parameters(self):
        """Test the refraction and focussing type values."""
        assert RefractionType.PHASE_HOLOGRAM == 1
        assert FocussingType.TORIC == 2


class TestSceneCapacities:
    """Tests for SceneCapacities."""

    def test_defaults(self):
        """Test the default capacities."""
        caps = SceneCapacities()
        assert caps.max_scene_objects == 50
        assert caps.max_rectangle_shapes == 50
        assert caps.max_sphere_shapes == 10
        assert caps.max_checkerboard_surfaces == 2
        assert caps == DEFAULT_CAPACITIES

    def test_for_shape_and_surface(self):
        """Test per-kind lookup, including plain integer tags."""
        caps = SceneCapacities(max_sphere_shapes=3, max_mirror_surfaces=4)
        assert caps.for_shape(ShapeType.SPHERE) == 3
        assert caps.for_shape(1) == 3
        assert caps.for_surface(SurfaceType.MIRROR) == 4

    def test_rejects_zero_capacity(self):
        """Test that a capacity below 1 is rejected."""
        with pytest.raises(ValueError, match="max_sphere_shapes"):
            SceneCapacities(max_sphere_shapes=0)

    def test_is_immutable(self):
        """Test that capacities cannot be changed after construction."""
        caps = SceneCapacities()
        with pytest.raises(AttributeError):
            caps.max_scene_objects = 5


class TestKernelDefines:
    """Tests for generation and verification of #define constants."""

    def test_kernel_defines_names(self):
        """Test that every shared constant is present with its value."""
        defines = kernel_defines()
        assert defines["MAX_SCENE_OBJECTS"] == 50
        assert defines["MAX_CYLINDER_MANTLE_SHAPES"] == 10
        assert defines["RECTANGLE_SHAPE"] == 0
        assert defines["CYLINDER_MANTLE_SHAPE"] == 2
        assert defines["CHECKERBOARD_SURFACE"] == 3
        assert defines["PHASE_HOLOGRAM_REFRACTION_TYPE"] == 1
        assert defines["TORIC_FOCUSSING_TYPE"] == 2

    def test_render_and_parse(self):
        """Test that rendered defines parse back to the same table."""
        source = render_glsl_defines()
        assert source.startswith("// generated")
        assert "#define MAX_SPHERE_SHAPES 10" in source
        assert parse_kernel_defines(source) == kernel_defines()

    def test_parse_ignores_other_lines(self):
        """Test that non-integer defines and code are ignored."""
        source = """
        #version 300 es
        #define PI 3.14159
          #define MAX_SPHERE_SHAPES 10
        uniform int numberOfSceneObjects;
        """
        assert parse_kernel_defines(source) == {"MAX_SPHERE_SHAPES": 10}

    def test_parse_trailing_comments(self):
        """Test defines followed by line and block comments."""
        source = (
            "#define MAX_SPHERE_SHAPES 10 // spheres\n"
            "#define MIRROR_SURFACE 1 /* shared by all mirrors */\n"
            "#define RECTANGLE_SHAPE 0/**/\n"
        )
        assert parse_kernel_defines(source) == {
            "MAX_SPHERE_SHAPES": 10,
            "MIRROR_SURFACE": 1,
            "RECTANGLE_SHAPE": 0,
        }

    def test_verify_block_commented_source(self):
        """Test that block comments after every define still verify."""
        source = "".join(
            f"#define {name} {value} /* shared */\n" for name, value in kernel_defines().items()
        )
        verify_kernel_defines(source)

    def test_verify_matching_source(self):
        """Test that a matching source passes."""
        verify_kernel_defines(render_glsl_defines())

    def test_verify_custom_capacities(self):
        """Test that verification uses the given capacities."""
        caps = SceneCapacities(max_sphere_shapes=20)
        verify_kernel_defines(render_glsl_defines(caps), caps)
        with pytest.raises(KernelConstantMismatchError, match="MAX_SPHERE_SHAPES"):
            verify_kernel_defines(render_glsl_defines(), caps)

    def test_verify_mismatch(self):
        """Test that a differing value is reported."""
        source = render_glsl_defines().replace(
            "#define MIRROR_SURFACE 1", "#define MIRROR_SURFACE 5"
        )
        with pytest.raises(KernelConstantMismatchError, match="MIRROR_SURFACE = 5"):
            verify_kernel_defines(source)

    def test_verify_missing(self):
        """Test that missing constants are reported only when required."""
        source = "#define MAX_SCENE_OBJECTS 50\n"
        with pytest.raises(KernelConstantMismatchError, match="missing"):
            verify_kernel_defines(source)
        verify_kernel_defines(source, require_all=False)

    def test_mismatch_is_scene_error(self):
        """Test that the mismatch error belongs to the scene error hierarchy."""
        with pytest.raises(SceneError):
            verify_kernel_defines("")
