"""
axialtilt.quaternion — Unit Quaternion Algebra
================================================

Minimal rotation algebra for orienting render objects.  Kept local so the
frame boundary in ``axialtilt.frames`` stays the single place where axis
conventions are decided.

Convention: scalar-first, Hamilton product::

    q = [w, x, y, z],   q ⊗ p  applies p first, then q

Rotating a vector uses the optimised Rodrigues form::

    t  = 2 (q_v × v)
    v' = v + w t + q_v × t
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .utils import (
    Vector3, X_AXIS, Z_AXIS, EPSILON, ZERO_MAGNITUDE,
    as_vector3, cross, dot, magnitude, normalize,
)


class Quaternion(NamedTuple):
    """Scalar-first quaternion."""
    w: float
    x: float
    y: float
    z: float

    def as_array(self) -> NDArray:
        return np.array(self, dtype=np.float64)

    @property
    def vector(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


IDENTITY = Quaternion(1.0, 0.0, 0.0, 0.0)


def _as_quaternion(a: ArrayLike) -> Quaternion:
    a = np.asarray(a, dtype=np.float64)
    return Quaternion(float(a[0]), float(a[1]), float(a[2]), float(a[3]))


def normalize_quaternion(q: ArrayLike) -> Quaternion:
    """Scale to unit norm.  A zero quaternion maps to ``IDENTITY``."""
    a = np.asarray(q, dtype=np.float64)
    n = np.linalg.norm(a)
    if n < ZERO_MAGNITUDE:
        return IDENTITY
    return _as_quaternion(a / n)


def conjugate(q: ArrayLike) -> Quaternion:
    """[w, −x, −y, −z]; the inverse rotation for a unit quaternion."""
    w, x, y, z = (float(c) for c in q)
    return Quaternion(w, -x, -y, -z)


def multiply(a: ArrayLike, b: ArrayLike) -> Quaternion:
    """Hamilton product a ⊗ b (rotate by b, then by a)."""
    aw, ax, ay, az = (float(c) for c in a)
    bw, bx, by, bz = (float(c) for c in b)
    return Quaternion(
        aw * bw - ax * bx - ay * by - az * bz,
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
    )


def from_axis_angle(axis: ArrayLike, angle: float) -> Quaternion:
    """Rotation by ``angle`` [rad] about ``axis`` (normalized internally)."""
    k = normalize(axis)
    half = 0.5 * angle
    s = np.sin(half)
    return Quaternion(float(np.cos(half)),
                      float(k.x * s), float(k.y * s), float(k.z * s))


def from_unit_vectors(v_from: ArrayLike, v_to: ArrayLike) -> Quaternion:
    """Minimal rotation taking unit ``v_from`` onto unit ``v_to``.

    Uses q = normalize([1 + a·b, a × b]).  When a and b are anti-parallel
    there is no unique minimal rotation; a half-turn about a deterministic
    axis orthogonal to a is returned (a × X̂, or a × Ẑ if a ∥ X̂).
    """
    a = as_vector3(v_from)
    b = as_vector3(v_to)
    r = dot(a, b) + 1.0

    if r < EPSILON:
        axis = cross(a, X_AXIS)
        if magnitude(axis) < EPSILON:
            axis = cross(a, Z_AXIS)
        axis = normalize(axis)
        return Quaternion(0.0, axis.x, axis.y, axis.z)

    c = cross(a, b)
    return normalize_quaternion((r, c.x, c.y, c.z))


def rotate_vector(q: ArrayLike, v: ArrayLike) -> Vector3:
    """Apply unit quaternion ``q`` to vector ``v``."""
    qa = np.asarray(q, dtype=np.float64)
    w = qa[0]
    q_vec = qa[1:4]
    vv = np.asarray(v, dtype=np.float64)

    t = 2.0 * np.cross(q_vec, vv)
    return as_vector3(vv + w * t + np.cross(q_vec, t))


def angle_between(a: ArrayLike, b: ArrayLike) -> float:
    """Rotation angle [rad, 0..π] separating two unit quaternions.

    Sign-insensitive: q and −q are the same rotation.
    """
    d = abs(float(np.dot(np.asarray(a, dtype=np.float64),
                         np.asarray(b, dtype=np.float64))))
    return float(2.0 * np.arccos(np.clip(d, 0.0, 1.0)))
