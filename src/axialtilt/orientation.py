"""
axialtilt.orientation — Render-Object Orientation
===================================================

Turns an ICRF spin axis into the orientation of a renderable object.

A target's orientation changes in exactly two ways:

**replace** — :func:`apply_spin_axis_orientation`
  Sets the base orientation to the minimal rotation taking the asset's
  north axis onto the (render-frame) spin axis.  Whatever the target held
  before is discarded, so repeated calls with the same inputs always land
  on the same quaternion.

**compose** — :func:`apply_daily_rotation`
  Pre-multiplies a rotation about the spin axis onto the current
  orientation.  Accumulates: one call per simulated step.

Per frame, replace must happen before compose, since replace drops any
composed spin.  Targets are assumed to have a single writer.

Targets that do not satisfy :class:`Orientable` are skipped with a
warning; a render loop must not die on a half-built object.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from numpy.typing import ArrayLike

from .frames import icrf_to_render, validate_unit_vector
from .model import DEFAULT_MODEL_CONFIG, ModelConfig
from .quaternion import (
    IDENTITY, Quaternion, angle_between, from_axis_angle, from_unit_vectors,
    multiply, normalize_quaternion, rotate_vector,
)
from .utils import (
    Vector3, Y_AXIS, ANGULAR_TOLERANCE, ZERO_MAGNITUDE,
    as_vector3, magnitude, normalize,
)

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Target Interface
# ════════════════════════════════════════════════════════════════════════════

@runtime_checkable
class Orientable(Protocol):
    """Anything with a readable and settable orientation quaternion."""

    @property
    def quaternion(self) -> Quaternion: ...

    def set_quaternion(self, q: Quaternion) -> None: ...


class RenderObject:
    """Reference :class:`Orientable` with an encapsulated orientation.

    The quaternion is private and read-only from outside; it should only be
    written by the functions in this module.
    """

    def __init__(self, name: str = "unnamed",
                 quaternion: Quaternion = IDENTITY):
        self.name = name
        self._quaternion = normalize_quaternion(quaternion)

    @property
    def quaternion(self) -> Quaternion:
        return self._quaternion

    def set_quaternion(self, q: Quaternion) -> None:
        self._quaternion = normalize_quaternion(q)

    def __repr__(self):
        return f"RenderObject(name={self.name!r}, quaternion={self._quaternion})"


def _check_target(target, op: str) -> bool:
    if target is None or not isinstance(target, Orientable):
        logger.warning("[%s] Invalid target %r: no settable quaternion; skipping",
                       op, target)
        return False
    return True


def _direction(v: ArrayLike, fallback: Vector3) -> Vector3:
    """Normalize, substituting ``fallback`` for a zero vector."""
    if magnitude(v) < ZERO_MAGNITUDE:
        logger.warning("Zero-length direction; using %s", fallback)
        return fallback
    return normalize(v)


# ════════════════════════════════════════════════════════════════════════════
#  Replace / Compose
# ════════════════════════════════════════════════════════════════════════════

def spin_axis_in_render_frame(spin_axis: ArrayLike) -> Vector3:
    """ICRF spin axis → unit vector in the render frame."""
    return _direction(icrf_to_render(spin_axis), Y_AXIS)


def apply_spin_axis_orientation(target: Orientable, spin_axis: ArrayLike,
                                model_config: ModelConfig = DEFAULT_MODEL_CONFIG
                                ) -> Quaternion | None:
    """Replace the target's orientation so its north axis lies along the spin axis.

    Parameters
    ----------
    target : Orientable — render object (caller-owned)
    spin_axis : (3,) — spin axis in **ICRF**
    model_config : ModelConfig — asset's local north axis (render frame)

    Returns
    -------
    q : Quaternion written to the target, or None if the target was invalid
    """
    if not _check_target(target, "apply_spin_axis_orientation"):
        return None

    validate_unit_vector(spin_axis)
    validate_unit_vector(model_config.north_axis)

    axis_render = spin_axis_in_render_frame(spin_axis)
    north = _direction(model_config.north_axis, Y_AXIS)

    q = from_unit_vectors(north, axis_render)
    target.set_quaternion(q)
    return q


def apply_daily_rotation(target: Orientable, spin_axis_render: ArrayLike,
                         angle: float) -> Quaternion | None:
    """Compose a spin of ``angle`` [rad] about the axis onto the target.

    Parameters
    ----------
    target : Orientable
    spin_axis_render : (3,) — spin axis already in the **render** frame
    angle : float — rotation this step [rad]

    Returns
    -------
    q : resulting orientation, or None if the target was invalid
    """
    if not _check_target(target, "apply_daily_rotation"):
        return None

    validate_unit_vector(spin_axis_render)
    axis = _direction(spin_axis_render, Y_AXIS)

    rot = from_axis_angle(axis, angle)
    q = normalize_quaternion(multiply(rot, target.quaternion))
    target.set_quaternion(q)
    return q


def effective_spin_axis(target: Orientable,
                        model_config: ModelConfig = DEFAULT_MODEL_CONFIG) -> Vector3:
    """Where the asset's north axis points now (render frame).

    An invalid target yields the unrotated north axis.
    """
    north = as_vector3(model_config.north_axis)
    if target is None or not isinstance(target, Orientable):
        return north
    return rotate_vector(target.quaternion, north)


# ════════════════════════════════════════════════════════════════════════════
#  Canonical-axis Consistency Check
# ════════════════════════════════════════════════════════════════════════════

@dataclass
class ConsistencyReport:
    """Outcome of :func:`check_canonical_consistency`."""
    is_consistent: bool
    issues: list = field(default_factory=list)        # list of str
    quaternions: dict = field(default_factory=dict)   # body → Quaternion


def check_canonical_consistency(body_names: list[str],
                                canonical_axis: ArrayLike = (0.0, 0.0, 1.0),
                                model_config: ModelConfig = DEFAULT_MODEL_CONFIG,
                                tolerance: float = ANGULAR_TOLERANCE
                                ) -> ConsistencyReport:
    """Give every body the same ICRF axis and check they end up identical.

    Separates pipeline/convention faults from per-body data faults: with a
    shared axis every body must get the same quaternion, and that
    quaternion must carry the north axis onto the transformed axis.

    Parameters
    ----------
    body_names : list[str]
    canonical_axis : (3,) — ICRF axis applied to all bodies (default ecliptic north)
    model_config : ModelConfig
    tolerance : float — [rad] allowed angular deviation

    Returns
    -------
    ConsistencyReport
    """
    report = ConsistencyReport(is_consistent=True)
    expected_axis = spin_axis_in_render_frame(canonical_axis)
    reference = None

    for name in body_names:
        obj = RenderObject(name)
        # Start from an arbitrary pose: the result must not depend on it.
        obj.set_quaternion(from_axis_angle((1.0, 1.0, 0.0), 1.234))
        q = apply_spin_axis_orientation(obj, canonical_axis, model_config)
        report.quaternions[name] = q

        if reference is None:
            reference = q
        elif angle_between(q, reference) > tolerance:
            report.issues.append(
                f"{name}: orientation differs from {body_names[0]} by "
                f"{angle_between(q, reference):.3e} rad"
            )

        got = effective_spin_axis(obj, model_config)
        err = magnitude(as_vector3(got).as_array() - expected_axis.as_array())
        if err > tolerance:
            report.issues.append(
                f"{name}: effective spin axis {tuple(got)} != expected "
                f"{tuple(expected_axis)}"
            )

    report.is_consistent = not report.issues
    if report.issues:
        for issue in report.issues:
            logger.warning("Canonical axis check: %s", issue)
    return report
