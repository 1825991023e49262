"""Unit tests for the frame construction helpers.

Tests cover:
- Normalization and projection
- Orthonormality of constructed frames for many input directions
- Orientation of the third frame vector
- Degenerate inputs (zero, parallel, coplanar)
"""

import itertools

import numpy as np
import pytest

from src.raytracing.core.errors import DegenerateBasisError
from src.raytracing.core.vectors import (
    as_vec3,
    normalize,
    orthonormal_frame,
    part_perpendicular_to,
    project_onto,
    to_tuple,
    unit_part_along_normal_of,
)


def assert_orthonormal(*vectors):
    """Check unit length and pairwise orthogonality to within 1e-6."""
    for v in vectors:
        assert abs(np.linalg.norm(v) - 1.0) < 1e-6
    for a, b in itertools.combinations(vectors, 2):
        assert abs(np.dot(a, b)) < 1e-6


class TestBasics:
    """Tests for conversion, normalization and projection."""

    def test_as_vec3_rejects_wrong_length(self):
        """Test that a 2-vector is rejected."""
        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))

    def test_as_vec3_rejects_non_finite(self):
        """Test that NaN and infinity are rejected."""
        with pytest.raises(ValueError):
            as_vec3((1.0, float("nan"), 0.0))
        with pytest.raises(ValueError):
            as_vec3((float("inf"), 0.0, 0.0))

    def test_to_tuple(self):
        """Test conversion to a tuple of Python floats."""
        result = to_tuple(np.array([1, 2, 3]))
        assert result == (1.0, 2.0, 3.0)
        assert all(type(c) is float for c in result)

    def test_normalize(self):
        """Test normalization of a non-unit vector."""
        n = normalize((3.0, 0.0, 4.0))
        assert np.allclose(n, (0.6, 0.0, 0.8))

    def test_normalize_zero_vector(self):
        """Test that normalizing the zero vector raises."""
        with pytest.raises(DegenerateBasisError):
            normalize((0.0, 0.0, 0.0))

    def test_project_onto(self):
        """Test projection onto a non-unit vector."""
        p = project_onto((1.0, 2.0, 3.0), (0.0, 0.0, 5.0))
        assert np.allclose(p, (0.0, 0.0, 3.0))

    def test_part_perpendicular_to(self):
        """Test that the perpendicular part keeps its length."""
        p = part_perpendicular_to((1.0, 2.0, 3.0), (0.0, 0.0, 5.0))
        assert np.allclose(p, (1.0, 2.0, 0.0))

    def test_part_perpendicular_to_zero_vector(self):
        """Test that projecting onto the zero vector raises."""
        with pytest.raises(DegenerateBasisError):
            part_perpendicular_to((1.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    def test_unit_part_along_normal_keeps_orientation(self):
        """Test that the result points to the same side as the input."""
        up = unit_part_along_normal_of((0.3, 0.2, 5.0), (1, 0, 0), (0, 1, 0))
        down = unit_part_along_normal_of((0.3, 0.2, -5.0), (1, 0, 0), (0, 1, 0))
        assert np.allclose(up, (0.0, 0.0, 1.0))
        assert np.allclose(down, (0.0, 0.0, -1.0))


class TestOrthonormalFrame:
    """Tests for orthonormal_frame."""

    def test_already_orthonormal(self):
        """Test that an orthonormal input is returned unchanged."""
        e1, e2, e3 = orthonormal_frame((0, 0, 1), (1, 0, 0), (0, 1, 0))
        assert np.allclose(e1, (0, 0, 1))
        assert np.allclose(e2, (1, 0, 0))
        assert np.allclose(e3, (0, 1, 0))

    def test_two_vector_frame(self):
        """Test the frame built from only two directions."""
        frame = orthonormal_frame((2.0, 0.0, 0.0), (1.0, 1.0, 0.0))
        assert len(frame) == 2
        assert np.allclose(frame[0], (1, 0, 0))
        assert np.allclose(frame[1], (0, 1, 0))
        assert_orthonormal(*frame)

    @pytest.mark.parametrize("seed", range(20))
    def test_random_directions(self, seed):
        """Test orthonormality for random, generally non-orthogonal inputs."""
        rng = np.random.default_rng(seed)
        v1, v2, v3 = rng.normal(size=(3, 3)) * rng.uniform(0.1, 10.0, size=(3, 1))
        assert_orthonormal(*orthonormal_frame(v1, v2, v3))

    def test_first_vector_direction_kept(self):
        """Test that e1 is the normalized first input."""
        e1, _, _ = orthonormal_frame((0.0, 3.0, 4.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))
        assert np.allclose(e1, (0.0, 0.6, 0.8))

    def test_parallel_second_vector(self):
        """Test that v2 parallel to v1 raises DegenerateBasisError."""
        with pytest.raises(DegenerateBasisError):
            orthonormal_frame((1.0, 0.0, 0.0), (-2.0, 0.0, 0.0), (0.0, 0.0, 1.0))

    def test_zero_first_vector(self):
        """Test that a zero v1 raises DegenerateBasisError."""
        with pytest.raises(DegenerateBasisError):
            orthonormal_frame((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))

    def test_coplanar_third_vector(self):
        """Test that v3 in the plane of v1 and v2 raises DegenerateBasisError."""
        with pytest.raises(DegenerateBasisError):
            orthonormal_frame((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 1.0, 0.0))

    def test_degenerate_error_is_value_error(self):
        """Test that DegenerateBasisError can be caught as ValueError."""
        with pytest.raises(ValueError):
            orthonormal_frame((1.0, 0.0, 0.0), (1.0, 0.0, 0.0))
