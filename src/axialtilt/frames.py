"""
axialtilt.frames — ICRF ↔ Render Frame Boundary
==================================================

This is the **only** module that knows how the renderer lays out its axes.
Everything upstream (orbits, spin axes, migration) works in ICRF/J2000;
everything downstream (orientation of render objects) works in the render
frame.  Nothing else may hard-code the mapping.

Frame Definitions
-----------------

**ICRF (ICRF/J2000 ecliptic, Z-up)**
  - X: Vernal equinox direction at J2000.0
  - Z: Ecliptic normal
  - Y: Completes right-hand system

**RENDER (scene graph, Y-up)**
  - X: Right
  - Y: Up
  - Z: Toward the camera

Mapping
-------
::

    render = ( x_icrf,  z_icrf, −y_icrf )
    icrf   = ( x_rnd,  −z_rnd,   y_rnd )

Both directions are a signed axis permutation, so they are applied by
component shuffling rather than a matrix product; the result is exact
(no rounding), and the two functions are exact inverses of one another.
The equivalent DCMs are provided for composing with other rotations.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .utils import Vector3, UNIT_VECTOR_TOLERANCE, as_vector3, magnitude

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Internal Helpers
# ════════════════════════════════════════════════════════════════════════════

def _shuffle(vec: ArrayLike, order: tuple[int, int, int],
             signs: tuple[float, float, float]):
    """Signed axis permutation of a single (3,) or batch (N,3) of vectors.

    A single vector comes back as ``Vector3``; a batch as an (N,3) ndarray.
    """
    a = np.asarray(vec, dtype=np.float64)
    if a.ndim == 1:
        if a.shape != (3,):
            raise ValueError(f"Expected a 3-vector, got shape {a.shape}.")
        return Vector3(*(float(signs[k] * a[order[k]]) for k in range(3)))
    if a.ndim != 2 or a.shape[1] != 3:
        raise ValueError(f"Expected (3,) or (N,3) array, got {a.shape}.")
    return np.stack([signs[k] * a[:, order[k]] for k in range(3)], axis=1)


# ════════════════════════════════════════════════════════════════════════════
#  ICRF ↔ RENDER
# ════════════════════════════════════════════════════════════════════════════

def icrf_to_render(vec: ArrayLike):
    """Transform vector(s) from ICRF (Z-up) to the render frame (Y-up).

    Maps ICRF +X → render +X, ICRF +Z ("up") → render +Y,
    ICRF +Y → render −Z (keeps the system right-handed).

    Parameters
    ----------
    vec : (3,) or (N,3) — vector(s) in ICRF

    Returns
    -------
    Vector3 for a single vector, (N,3) ndarray for a batch
    """
    return _shuffle(vec, (0, 2, 1), (1.0, 1.0, -1.0))


def render_to_icrf(vec: ArrayLike):
    """Transform vector(s) from the render frame (Y-up) back to ICRF (Z-up).

    Exact inverse of :func:`icrf_to_render`.
    """
    return _shuffle(vec, (0, 2, 1), (1.0, -1.0, 1.0))


def icrf_to_render_matrix() -> NDArray:
    """ICRF→RENDER 3×3 DCM such that v_render = R @ v_icrf."""
    return np.array([
        [1.0, 0.0,  0.0],
        [0.0, 0.0,  1.0],
        [0.0, -1.0, 0.0],
    ])


def render_to_icrf_matrix() -> NDArray:
    """RENDER→ICRF 3×3 rotation matrix (transpose of ICRF→RENDER)."""
    return icrf_to_render_matrix().T


# ════════════════════════════════════════════════════════════════════════════
#  Unit-vector Diagnostics
# ════════════════════════════════════════════════════════════════════════════

def validate_unit_vector(vec: ArrayLike,
                         tolerance: float = UNIT_VECTOR_TOLERANCE) -> bool:
    """Check that ``vec`` is a unit vector; log a warning if it is not.

    Never raises and never modifies the input — callers decide whether to
    re-normalize.

    Parameters
    ----------
    vec : (3,) — vector to check
    tolerance : float — allowed | |v| − 1 |

    Returns
    -------
    ok : bool
    """
    mag = magnitude(vec)
    ok = abs(mag - 1.0) <= tolerance
    if not ok:
        v = as_vector3(vec)
        logger.warning(
            "[NON_UNIT_VECTOR] Expected magnitude 1, got %.15g "
            "(tolerance %g). Vector: (%g, %g, %g)",
            mag, tolerance, v.x, v.y, v.z,
        )
    return ok


# ════════════════════════════════════════════════════════════════════════════
#  Unified Transform API
# ════════════════════════════════════════════════════════════════════════════

# Valid frame names
FRAMES = {"icrf", "render"}


def get_dcm(from_frame: str, to_frame: str) -> NDArray:
    """Get the 3×3 DCM for any supported frame pair.

    Parameters
    ----------
    from_frame, to_frame : str — one of 'icrf', 'render'

    Returns
    -------
    R : (3,3) ndarray — DCM such that v_to = R @ v_from
    """
    fr = from_frame.lower()
    to = to_frame.lower()
    if fr not in FRAMES or to not in FRAMES:
        raise ValueError(f"Unknown frame. Valid: {FRAMES}")
    if fr == to:
        return np.eye(3)
    if fr == "icrf":
        return icrf_to_render_matrix()
    return render_to_icrf_matrix()


def transform(vec: ArrayLike, from_frame: str, to_frame: str):
    """Transform vector(s) between any two frames by name.

    Uses the exact component mapping, not the DCM.

    Parameters
    ----------
    vec : (3,) or (N,3) — vector(s) in from_frame
    from_frame, to_frame : str — frame names ('icrf', 'render')

    Returns
    -------
    Vector3 for a single vector, (N,3) ndarray for a batch
    """
    fr = from_frame.lower()
    to = to_frame.lower()
    if fr not in FRAMES or to not in FRAMES:
        raise ValueError(f"Unknown frame. Valid: {FRAMES}")
    if fr == to:
        a = np.asarray(vec, dtype=np.float64)
        return as_vector3(a) if a.ndim == 1 else a.copy()
    if fr == "icrf":
        return icrf_to_render(vec)
    return render_to_icrf(vec)
