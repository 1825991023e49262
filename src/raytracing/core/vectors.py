"""Host-side vector and basis math used by the shape constructors.

Every shape carries a local frame of 2-3 unit vectors that must be mutually
orthogonal. Callers usually supply directions that are only roughly
orthogonal, so the frame is built by Gram-Schmidt style projection:

1. ``v2' = v2 - proj(v2 onto v1)``, normalized, is orthogonal to ``v1``.
2. ``v3' = proj(v3 onto (v1 x v2'))``, normalized, is the unit vector along
   ``v1 x v2'`` with the same orientation as ``v3``.

If an input is zero or parallel to the vectors before it, the remainder has
(near) zero length and cannot be normalized. Instead of producing a
non-finite vector, the helpers raise ``DegenerateBasisError``.

Vectors are accepted as any 3-component sequence and returned as float64
numpy arrays; ``to_tuple()`` converts back to the tuples stored in records.

Example:
    >>> from src.raytracing.core.vectors import orthonormal_frame, to_tuple
    >>> e1, e2, e3 = orthonormal_frame((0, 0, 2), (1, 0, 1), (0, 1, 0))
    >>> to_tuple(e2)
    (1.0, 0.0, 0.0)
"""

import numpy as np
import numpy.typing as npt

from src.raytracing.core.errors import DegenerateBasisError

Vec3 = tuple[float, float, float]
Array3 = npt.NDArray[np.float64]

# A remainder shorter than this fraction of its input counts as zero
DEGENERACY_TOLERANCE = 1e-9

X_HAT: Vec3 = (1.0, 0.0, 0.0)
Y_HAT: Vec3 = (0.0, 1.0, 0.0)
Z_HAT: Vec3 = (0.0, 0.0, 1.0)
ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def as_vec3(v) -> Array3:
    """Convert a 3-component sequence to a float64 numpy array.

    Raises:
        ValueError: If the input does not have exactly 3 finite components.
    """
    arr = np.asarray(v, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"Vector {tuple(arr)} has non-finite components")
    return arr


def to_tuple(v) -> Vec3:
    """Convert a vector to a tuple of Python floats."""
    arr = as_vec3(v)
    return (float(arr[0]), float(arr[1]), float(arr[2]))


def _require_nonzero(v: Array3, reference_length: float, what: str) -> float:
    length = float(np.linalg.norm(v))
    if not np.isfinite(length) or length == 0.0 or length <= DEGENERACY_TOLERANCE * reference_length:
        raise DegenerateBasisError(f"Cannot construct a unit vector: {what}")
    return length


def normalize(v) -> Array3:
    """Return the unit vector in the direction of v.

    Raises:
        DegenerateBasisError: If v has zero length.
    """
    arr = as_vec3(v)
    return arr / _require_nonzero(arr, 0.0, f"{tuple(arr)} has zero length")


def project_onto(v, w) -> Array3:
    """Return the projection of v onto the direction of w.

    Raises:
        DegenerateBasisError: If w has zero length.
    """
    v_arr = as_vec3(v)
    w_arr = as_vec3(w)
    w_dot_w = float(np.dot(w_arr, w_arr))
    if w_dot_w == 0.0:
        raise DegenerateBasisError("Cannot project onto a zero-length vector")
    return (float(np.dot(v_arr, w_arr)) / w_dot_w) * w_arr


def part_perpendicular_to(v, w) -> Array3:
    """Return the part of v that is perpendicular to w (not normalized)."""
    return as_vec3(v) - project_onto(v, w)


def unit_part_along_normal_of(v, w1, w2) -> Array3:
    """Return the normalized part of v along w1 x w2.

    The result is perpendicular to both w1 and w2 and points to the same
    side of their plane as v.

    Raises:
        DegenerateBasisError: If w1 and w2 are parallel (or zero), or if v
            lies in the plane they span.
    """
    v_arr = as_vec3(v)
    w1_arr = as_vec3(w1)
    w2_arr = as_vec3(w2)
    n = np.cross(w1_arr, w2_arr)
    _require_nonzero(
        n,
        float(np.linalg.norm(w1_arr) * np.linalg.norm(w2_arr)),
        "the two spanning vectors are parallel",
    )
    along = project_onto(v_arr, n)
    length = _require_nonzero(
        along,
        float(np.linalg.norm(v_arr)),
        f"{tuple(v_arr)} lies in the plane of the other two vectors",
    )
    return along / length


def orthonormal_frame(v1, v2, v3=None) -> tuple[Array3, ...]:
    """Build an orthonormal frame from roughly orthogonal directions.

    ``v1`` fixes the first axis; ``v2`` is orthogonalized against it; ``v3``
    (if given) is replaced by the unit vector along ``v1 x v2'`` on the same
    side as ``v3``.

    Args:
        v1: The primary direction.
        v2: The secondary direction; must not be parallel to v1.
        v3: Optional tertiary direction; must not lie in the plane of v1, v2.

    Returns:
        (e1, e2) or (e1, e2, e3), each a unit vector, mutually orthogonal.

    Raises:
        DegenerateBasisError: If the inputs are zero or linearly dependent.
    """
    e1 = normalize(v1)
    v2_arr = as_vec3(v2)
    remainder = part_perpendicular_to(v2_arr, e1)
    e2 = remainder / _require_nonzero(
        remainder,
        float(np.linalg.norm(v2_arr)),
        f"{tuple(v2_arr)} is parallel to {tuple(e1)}",
    )
    if v3 is None:
        return e1, e2
    return e1, e2, unit_part_along_normal_of(v3, e1, e2)
