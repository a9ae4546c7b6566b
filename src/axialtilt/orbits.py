"""
axialtilt.orbits — Orbital-Plane Geometry
===========================================

Orbital-plane normal and ascending-node direction from the two elements
that fix a plane's attitude (i, Ω).  All vectors are in ICRF/J2000 with the
**ecliptic** as reference plane; bodies referenced to a planet's equator
(satellites) need their own calculator.

Formulas::

    N = ( sin i · sin Ω,  −sin i · cos Ω,  cos i )     orbital normal
    A = ( cos Ω,           sin Ω,           0     )     ascending node

N is the third column of the PQW→ICRF rotation R₃(−Ω) R₁(−i) R₃(−ω);
A is its first column with ω = 0.
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from .errors import InvalidInclination
from .utils import (
    Vector3, ECLIPTIC_NORMAL, UNIT_VECTOR_TOLERANCE,
    ZERO_INCLINATION_THRESHOLD, ZERO_MAGNITUDE,
    is_unit_vector, normalize, wrap_two_pi,
)

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Data Structures
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrbitalElements:
    """Attitude of one orbital plane at epoch.

    ``longitude_of_ascending_node`` is wrapped into [0, 2π) on construction;
    ``inclination`` is *not* validated here so that a bad record can still be
    carried to the point of use, where it raises ``InvalidInclination``.
    """
    inclination: float                   # i [rad], valid range [0, π]
    longitude_of_ascending_node: float   # Ω [rad], wrapped into [0, 2π)

    def __post_init__(self):
        object.__setattr__(self, "inclination", float(self.inclination))
        object.__setattr__(self, "longitude_of_ascending_node",
                           wrap_two_pi(self.longitude_of_ascending_node))

    @classmethod
    def from_degrees(cls, inclination_deg: float,
                     longitude_of_ascending_node_deg: float) -> "OrbitalElements":
        return cls(np.deg2rad(inclination_deg),
                   np.deg2rad(longitude_of_ascending_node_deg))


def _validate_inclination(inclination: float) -> None:
    if not (0.0 <= inclination <= np.pi):
        raise InvalidInclination(
            f"Inclination must be in range [0, π], got {inclination}",
            inclination=inclination,
        )


# ════════════════════════════════════════════════════════════════════════════
#  Orbital Normal / Ascending Node
# ════════════════════════════════════════════════════════════════════════════

def orbital_normal(elements: OrbitalElements) -> Vector3:
    """Unit normal of the orbital plane in ICRF.

    Parameters
    ----------
    elements : OrbitalElements — (i, Ω) in radians

    Returns
    -------
    N : Vector3 — unit vector; exactly ``ECLIPTIC_NORMAL`` when i == 0

    Raises
    ------
    InvalidInclination
        If i ∉ [0, π].
    """
    inc = elements.inclination
    _validate_inclination(inc)
    raan = wrap_two_pi(elements.longitude_of_ascending_node)

    # Orbit lies in the ecliptic: skip the trig so (0,0,1) comes back exact.
    if abs(inc) < ZERO_INCLINATION_THRESHOLD:
        return ECLIPTIC_NORMAL

    sin_i, cos_i = np.sin(inc), np.cos(inc)
    sin_o, cos_o = np.sin(raan), np.cos(raan)
    N = Vector3(float(sin_i * sin_o), float(-sin_i * cos_o), float(cos_i))

    if not is_unit_vector(N, UNIT_VECTOR_TOLERANCE):
        logger.warning("Orbital normal drifted off unit length; re-normalizing %s", N)
        return normalize(N)
    return N


def ascending_node_direction(longitude_of_ascending_node: float) -> Vector3:
    """Unit vector toward the ascending node, in the ecliptic plane (z = 0).

    Ω is wrapped, never rejected.
    """
    raan = wrap_two_pi(longitude_of_ascending_node)
    return Vector3(float(np.cos(raan)), float(np.sin(raan)), 0.0)


# ════════════════════════════════════════════════════════════════════════════
#  State Vector → Plane Elements
# ════════════════════════════════════════════════════════════════════════════

def elements_from_state(r: ArrayLike, v: ArrayLike) -> OrbitalElements:
    """Plane elements (i, Ω) of the orbit through an inertial state.

    Parameters
    ----------
    r : (3,) — position in ICRF (any length unit)
    v : (3,) — velocity in ICRF (matching unit / time)

    Returns
    -------
    OrbitalElements — Ω = 0 for orbits in the ecliptic (node undefined)

    Raises
    ------
    ZeroVector
        If r ∥ v (no orbital plane).
    """
    r = np.asarray(r, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)

    h = np.asarray(normalize(np.cross(r, v)))       # angular momentum direction
    inc = float(np.arccos(np.clip(h[2], -1.0, 1.0)))

    # Node vector K × h
    n = np.cross([0.0, 0.0, 1.0], h)
    n_mag = np.linalg.norm(n)
    if n_mag < ZERO_MAGNITUDE:
        raan = 0.0
    else:
        raan = float(np.arctan2(n[1], n[0]))

    return OrbitalElements(inc, raan)
