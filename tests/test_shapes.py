"""Unit tests for the shape records.

Tests cover:
- Rectangle frame orthogonalization and normal orientation
- Sphere and cylinder mantle frames and derived radius2
- Rejection of invalid and degenerate inputs
- Kernel field values
"""

import numpy as np
import pytest

from src.raytracing.core.constants import ShapeType
from src.raytracing.core.errors import DegenerateBasisError
from src.raytracing.shapes import (
    SHAPE_CLASSES,
    UNIT_SPHERE,
    X_CYLINDER_MANTLE,
    Z_RECTANGLE,
    CylinderMantleShape,
    RectangleShape,
    SphereShape,
)


def assert_orthonormal(*vectors):
    """Check unit length and pairwise orthogonality to within 1e-6."""
    for v in vectors:
        assert abs(np.linalg.norm(v) - 1.0) < 1e-6
    for i, a in enumerate(vectors):
        for b in vectors[i + 1 :]:
            assert abs(np.dot(a, b)) < 1e-6


class TestRectangleShape:
    """Tests for RectangleShape."""

    def test_from_spans(self):
        """Test the right-hand-rule normal and unchanged orthogonal spans."""
        rect = RectangleShape.from_spans((0, 0, 0), (1, 0, 0), (0, 1, 0))
        assert rect.shape_type == ShapeType.RECTANGLE
        assert rect.corner == (0.0, 0.0, 0.0)
        assert rect.span1 == (1.0, 0.0, 0.0)
        assert rect.span2 == (0.0, 1.0, 0.0)
        assert np.allclose(rect.n_normal, (0.0, 0.0, 1.0))

    def test_non_orthogonal_span2(self):
        """Test that span2 keeps only its part perpendicular to span1."""
        rect = RectangleShape((0, 0, 0), (2, 0, 0), (1, 3, 0), (0, 0, 5))
        assert rect.span1 == (2.0, 0.0, 0.0)
        assert np.allclose(rect.span2, (0.0, 3.0, 0.0))
        assert np.allclose(rect.n_normal, (0.0, 0.0, 1.0))

    def test_normal_orientation_kept(self):
        """Test that a normal on the negative side stays there."""
        rect = RectangleShape((0, 0, 0), (1, 0, 0), (0, 1, 0), (0.3, 0.1, -2.0))
        assert np.allclose(rect.n_normal, (0.0, 0.0, -1.0))

    @pytest.mark.parametrize("seed", range(10))
    def test_random_frame_is_orthogonal(self, seed):
        """Test orthogonality of the frame for random inputs."""
        rng = np.random.default_rng(seed)
        span1, span2, normal = rng.normal(size=(3, 3))
        rect = RectangleShape((0, 0, 0), span1, span2, normal)
        assert abs(np.dot(rect.span1, rect.span2)) < 1e-6
        assert_orthonormal(rect.n_normal)
        assert abs(np.dot(rect.n_normal, rect.span1)) < 1e-6
        assert abs(np.dot(rect.n_normal, rect.span2)) < 1e-6

    def test_parallel_spans(self):
        """Test that parallel spans are rejected."""
        with pytest.raises(DegenerateBasisError):
            RectangleShape.from_spans((0, 0, 0), (1, 0, 0), (2, 0, 0))

    def test_normal_in_plane(self):
        """Test that a normal lying in the rectangle's plane is rejected."""
        with pytest.raises(DegenerateBasisError):
            RectangleShape((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0))

    def test_is_frozen(self):
        """Test that records cannot be mutated in place."""
        with pytest.raises(AttributeError):
            Z_RECTANGLE.corner = (1.0, 1.0, 1.0)

    def test_kernel_fields(self):
        """Test the member values handed to the kernel struct."""
        fields = Z_RECTANGLE.kernel_fields()
        assert set(fields) == {"corner", "span1", "span2", "n_normal"}
        assert fields["n_normal"] == (0.0, 0.0, 1.0)


class TestSphereShape:
    """Tests for SphereShape."""

    def test_radius2_derived(self):
        """Test that radius2 is the squared radius."""
        sphere = SphereShape.from_centre_and_radius((1, 2, 3), 0.5)
        assert sphere.shape_type == ShapeType.SPHERE
        assert sphere.centre == (1.0, 2.0, 3.0)
        assert sphere.radius2 == 0.25

    def test_with_radius(self):
        """Test that changing the radius updates radius2 and nothing else."""
        sphere = UNIT_SPHERE.with_radius(3.0)
        assert sphere.radius == 3.0
        assert sphere.radius2 == 9.0
        assert sphere.centre == UNIT_SPHERE.centre
        assert sphere.n_theta0 == UNIT_SPHERE.n_theta0
        assert UNIT_SPHERE.radius == 1.0

    def test_zero_radius_allowed(self):
        """Test that a zero radius is accepted."""
        assert SphereShape.from_centre_and_radius((0, 0, 0), 0.0).radius2 == 0.0

    def test_negative_radius(self):
        """Test that a negative radius is rejected."""
        with pytest.raises(ValueError):
            SphereShape.from_centre_and_radius((0, 0, 0), -1.0)

    def test_frame_orthonormalized(self):
        """Test that a rough frame is orthonormalized with n_theta0 kept."""
        sphere = SphereShape((0, 0, 0), 1.0, (0, 0, 2), (1, 0, 1), (0.2, 3, 0))
        assert np.allclose(sphere.n_theta0, (0, 0, 1))
        assert np.allclose(sphere.n_phi0, (1, 0, 0))
        assert np.allclose(sphere.n_phi90, (0, 1, 0))
        assert_orthonormal(sphere.n_theta0, sphere.n_phi0, sphere.n_phi90)

    def test_degenerate_frame(self):
        """Test that a frame with parallel directions is rejected."""
        with pytest.raises(DegenerateBasisError):
            SphereShape((0, 0, 0), 1.0, (0, 0, 1), (0, 0, -1), (0, 1, 0))

    def test_kernel_fields(self):
        """Test that the kernel receives radius2."""
        fields = SphereShape.from_centre_and_radius((0, 0, 0), 2.0).kernel_fields()
        assert fields["radius"] == 2.0
        assert fields["radius2"] == 4.0


class TestCylinderMantleShape:
    """Tests for CylinderMantleShape."""

    def test_defaults(self):
        """Test the preset cylinder along x."""
        assert X_CYLINDER_MANTLE.shape_type == ShapeType.CYLINDER_MANTLE
        assert X_CYLINDER_MANTLE.n_axis == (1.0, 0.0, 0.0)

    def test_radius2_and_with_radius(self):
        """Test the derived squared radius."""
        cylinder = CylinderMantleShape((0, 0, 0), 2.0, 1.0)
        assert cylinder.radius2 == 4.0
        assert cylinder.with_radius(0.5).radius2 == 0.25
        assert cylinder.with_radius(0.5).length == 1.0

    def test_frame_orthonormalized(self):
        """Test that the axis is kept and the phi directions orthogonalized."""
        cylinder = CylinderMantleShape((0, 0, 0), 1.0, 2.0, (0, 3, 0), (1, 1, 0), (0, 0, -1))
        assert np.allclose(cylinder.n_axis, (0, 1, 0))
        assert np.allclose(cylinder.n_phi0, (1, 0, 0))
        assert np.allclose(cylinder.n_phi90, (0, 0, -1))

    @pytest.mark.parametrize("radius, length", [(-1.0, 1.0), (1.0, -1.0)])
    def test_negative_dimensions(self, radius, length):
        """Test that negative radius or length is rejected."""
        with pytest.raises(ValueError):
            CylinderMantleShape((0, 0, 0), radius, length)


class TestShapeClasses:
    """Tests for the closed set of shape kinds."""

    def test_every_tag_has_a_class(self):
        """Test that SHAPE_CLASSES covers every tag consistently."""
        assert set(SHAPE_CLASSES) == set(ShapeType)
        for shape_type, cls in SHAPE_CLASSES.items():
            assert cls.shape_type == shape_type
