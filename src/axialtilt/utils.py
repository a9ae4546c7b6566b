"""
axialtilt.utils — Foundational Utilities
==========================================

Immutable 3-vector type, the handful of vector operations the physics
layer needs, angle wrapping, and the numerical tolerances shared by every
module.  All arithmetic is NumPy; results come back as ``Vector3`` so they
are hashable and cannot be mutated by a caller.
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import ZeroVector

# ── Tolerances ──────────────────────────────────────────────────────────────
EPSILON = 1e-10                    # generic float comparison
UNIT_VECTOR_TOLERANCE = 1e-10      # | |v| − 1 | allowed for a direction
CROSS_PRODUCT_TOLERANCE = 1e-10    # |A × N| below this ⇒ A ∥ N
ANGULAR_TOLERANCE = 1e-6           # [rad] angle comparisons
ZERO_OBLIQUITY_THRESHOLD = 1e-9    # [rad] ≈ 0.00006°, below any real planet
ZERO_INCLINATION_THRESHOLD = 1e-15  # [rad] orbit *is* the ecliptic
PARALLEL_DOT_TOLERANCE = 1e-15     # S·N within this of ±1 ⇒ exactly 0 / π
ZERO_MAGNITUDE = 1e-15             # cannot normalize below this

TWO_PI = 2.0 * np.pi


# ── Vector Type ─────────────────────────────────────────────────────────────

class Vector3(NamedTuple):
    """Cartesian 3-vector.  Used both as a free vector and as a direction."""
    x: float
    y: float
    z: float

    def as_array(self) -> NDArray:
        return np.array(self, dtype=np.float64)


def as_vector3(v: ArrayLike) -> Vector3:
    """Coerce any length-3 array-like into a ``Vector3`` of Python floats."""
    a = np.asarray(v, dtype=np.float64)
    if a.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {a.shape}.")
    return Vector3(float(a[0]), float(a[1]), float(a[2]))


# Ecliptic normal in ICRF/J2000 (Z-up).  Reference "up" for i = 0, ε = 0.
ECLIPTIC_NORMAL = Vector3(0.0, 0.0, 1.0)
X_AXIS = Vector3(1.0, 0.0, 0.0)
Y_AXIS = Vector3(0.0, 1.0, 0.0)
Z_AXIS = ECLIPTIC_NORMAL


# ── Vector Helpers ──────────────────────────────────────────────────────────

def magnitude(v: ArrayLike) -> float:
    return float(np.linalg.norm(np.asarray(v, dtype=np.float64)))


def normalize(v: ArrayLike) -> Vector3:
    """Return unit vector.

    Raises
    ------
    ZeroVector
        If |v| < ``ZERO_MAGNITUDE``.
    """
    a = np.asarray(v, dtype=np.float64)
    mag = np.linalg.norm(a)
    if mag < ZERO_MAGNITUDE:
        raise ZeroVector("Cannot normalize a near-zero vector.",
                         vector=tuple(a.tolist()))
    return as_vector3(a / mag)


def dot(a: ArrayLike, b: ArrayLike) -> float:
    return float(np.dot(np.asarray(a, dtype=np.float64),
                        np.asarray(b, dtype=np.float64)))


def cross(a: ArrayLike, b: ArrayLike) -> Vector3:
    return as_vector3(np.cross(np.asarray(a, dtype=np.float64),
                               np.asarray(b, dtype=np.float64)))


def is_unit_vector(v: ArrayLike, tolerance: float = UNIT_VECTOR_TOLERANCE) -> bool:
    """True if | |v| − 1 | ≤ tolerance.  Silent; see ``frames.validate_unit_vector``."""
    return abs(magnitude(v) - 1.0) <= tolerance


def wrap_two_pi(angle: float) -> float:
    """Wrap an angle into [0, 2π).  Never rejects."""
    wrapped = float(np.fmod(angle, TWO_PI))
    if wrapped < 0.0:
        wrapped += TWO_PI
    # fmod of a tiny negative can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def rotation_matrix_axis_angle(axis: ArrayLike, angle: float) -> NDArray:
    """Rotation matrix via Rodrigues' formula (right-hand, active rotation).

    Parameters
    ----------
    axis : (3,) array — rotation axis (will be normalized internally)
    angle : float — rotation angle [rad]

    Returns
    -------
    R : (3,3) ndarray — rotation matrix
    """
    k = np.asarray(normalize(axis), dtype=np.float64)
    c, s = np.cos(angle), np.sin(angle)
    K = np.array([
        [0, -k[2], k[1]],
        [k[2], 0, -k[0]],
        [-k[1], k[0], 0],
    ])
    return np.eye(3) * c + (1.0 - c) * np.outer(k, k) + s * K
