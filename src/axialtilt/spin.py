"""
axialtilt.spin — Spin Axis ↔ Obliquity
========================================

Obliquity is not a rotation to be applied to a mesh; it is the angle
between two vectors::

    ε = ∠(S, N),    S = spin axis,  N = orbital normal

Going from ε to S means rotating N by ε about some axis K lying in the
orbital plane.  The ascending-node direction A fixes the choice of K
(K = A × N, normalized), and Rodrigues' formula does the rotation::

    S = N cos ε + (K × N) sin ε + K (K · N)(1 − cos ε)

Degenerate Cases
----------------
Checked in this order, each with a fixed answer so every input gives a
finite unit vector:

1. ε < 1e-9 rad            →  S = N (no rotation axis is needed).
2. |A × N| < 1e-10         →  K = N × X̂; if that is also ~0, K = N × Ŷ.
   (A ∥ N happens for ecliptic orbits with A lying along N's
   projection, or for hand-built inputs.)
3. Result drifts off unit   →  re-normalize.

Inverse: ``obliquity`` returns exactly 0 / π when S·N is within 1e-15 of
±1, rather than trusting acos where its derivative blows up.
"""

import enum
import logging

import numpy as np
from numpy.typing import ArrayLike

from .errors import InvalidObliquity
from .utils import (
    Vector3, X_AXIS, Y_AXIS,
    CROSS_PRODUCT_TOLERANCE, UNIT_VECTOR_TOLERANCE,
    ZERO_OBLIQUITY_THRESHOLD, PARALLEL_DOT_TOLERANCE,
    as_vector3, cross, dot, is_unit_vector, magnitude, normalize,
)

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


class RotationSense(str, enum.Enum):
    """Spin direction relative to orbital motion, independent of tilt."""
    PROGRADE = "prograde"
    RETROGRADE = "retrograde"


def _validate_obliquity(obliquity_rad: float) -> None:
    if not (0.0 <= obliquity_rad <= np.pi):
        raise InvalidObliquity(
            f"Obliquity must be in range [0, π], got {obliquity_rad}",
            obliquity=obliquity_rad,
        )


# ════════════════════════════════════════════════════════════════════════════
#  Obliquity → Spin Axis
# ════════════════════════════════════════════════════════════════════════════

def _rotation_axis(orbital_normal: Vector3, ascending_node: Vector3) -> Vector3:
    """Normalized rotation axis K, with the deterministic fallback chain."""
    K = cross(ascending_node, orbital_normal)
    if magnitude(K) < CROSS_PRODUCT_TOLERANCE:
        logger.debug("Ascending node ∥ orbital normal; falling back to N × X̂")
        K = cross(orbital_normal, X_AXIS)
        if magnitude(K) < CROSS_PRODUCT_TOLERANCE:
            logger.debug("Orbital normal ∥ X̂; falling back to N × Ŷ")
            K = cross(orbital_normal, Y_AXIS)
    return normalize(K)


def spin_axis(orbital_normal: ArrayLike, ascending_node: ArrayLike,
              obliquity_rad: float) -> Vector3:
    """Spin-axis unit vector from obliquity and orbital geometry.

    Parameters
    ----------
    orbital_normal : (3,) — orbital-plane normal N (unit, ICRF)
    ascending_node : (3,) — ascending-node direction A (unit, ICRF)
    obliquity_rad : float — ε [rad], valid range [0, π]

    Returns
    -------
    S : Vector3 — unit spin axis in ICRF

    Raises
    ------
    InvalidObliquity
        If ε ∉ [0, π].
    """
    _validate_obliquity(obliquity_rad)
    N = as_vector3(orbital_normal)

    if obliquity_rad < ZERO_OBLIQUITY_THRESHOLD:
        return N

    K = _rotation_axis(N, as_vector3(ascending_node))

    Nv = N.as_array()
    Kv = K.as_array()
    c, s = np.cos(obliquity_rad), np.sin(obliquity_rad)
    S = Nv * c + np.cross(Kv, Nv) * s + Kv * np.dot(Kv, Nv) * (1.0 - c)
    S = as_vector3(S)

    if not is_unit_vector(S, UNIT_VECTOR_TOLERANCE):
        logger.debug("Spin axis |S| = %.15g; re-normalizing", magnitude(S))
        return normalize(S)
    return S


# ════════════════════════════════════════════════════════════════════════════
#  Spin Axis → Obliquity
# ════════════════════════════════════════════════════════════════════════════

def obliquity(spin_axis: ArrayLike, orbital_normal: ArrayLike) -> float:
    """Angle between spin axis and orbital normal.

    Parameters
    ----------
    spin_axis : (3,) — S (unit)
    orbital_normal : (3,) — N (unit)

    Returns
    -------
    ε : float — [rad] in [0, π]
    """
    d = dot(spin_axis, orbital_normal)
    if d >= 1.0 - PARALLEL_DOT_TOLERANCE:
        return 0.0
    if d <= -1.0 + PARALLEL_DOT_TOLERANCE:
        return float(np.pi)
    return float(np.arccos(np.clip(d, -1.0, 1.0)))


def obliquity_deg(spin_axis: ArrayLike, orbital_normal: ArrayLike) -> float:
    """``obliquity`` in degrees."""
    return float(np.rad2deg(obliquity(spin_axis, orbital_normal)))


# ════════════════════════════════════════════════════════════════════════════
#  Rotation Sense
# ════════════════════════════════════════════════════════════════════════════

def infer_rotation_sense(obliquity_degrees: float) -> RotationSense:
    """Legacy heuristic: ε > 90° ⇒ retrograde.

    Lossy.  Legacy configs folded spin direction into the tilt angle, so this
    is only a migration default; an explicit sense always wins.
    """
    if obliquity_degrees > 90.0:
        return RotationSense.RETROGRADE
    return RotationSense.PROGRADE


def angular_velocity(spin_axis: ArrayLike, period_hours: float,
                     sense: RotationSense = RotationSense.PROGRADE) -> Vector3:
    """Angular-velocity vector ω = ±(2π / P) Ŝ.

    Parameters
    ----------
    spin_axis : (3,) — spin axis (normalized internally)
    period_hours : float — sidereal rotation period [h], > 0
    sense : RotationSense — retrograde flips the sign

    Returns
    -------
    ω : Vector3 — [rad/s], same frame as ``spin_axis``
    """
    if not period_hours > 0.0:
        raise ValueError(f"Rotation period must be positive, got {period_hours}")
    rate = 2.0 * np.pi / (period_hours * SECONDS_PER_HOUR)
    if RotationSense(sense) is RotationSense.RETROGRADE:
        rate = -rate
    return as_vector3(normalize(spin_axis).as_array() * rate)
