"""
axialtilt.model — Orientation Configuration & State
=====================================================

Input records (per body) and the derived, read-only orientation snapshot.

A body's orientation is configured one of two ways:

1. ``spin_axis`` — a vector in ICRF.  Authoritative when present.
2. ``obliquity_degrees`` (+ optional ``rotation_sense``) — legacy form,
   converted to a spin axis against the body's orbital plane.

The snapshot (:class:`CelestialBodyOrientationState`) never stores
obliquity independently; it is recomputed from the two vectors.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .errors import AxialTiltError, InvalidObliquity, MissingSpinAxis
from .frames import validate_unit_vector
from .orbits import OrbitalElements, ascending_node_direction, orbital_normal
from .spin import (
    RotationSense, infer_rotation_sense, obliquity, spin_axis,
)
from .utils import Vector3, Y_AXIS, as_vector3, normalize

logger = logging.getLogger(__name__)

J2000_JD = 2_451_545.0             # Julian Date of the J2000.0 epoch
OBLIQUITY_TOLERANCE_DEGREES = 0.1  # allowed error vs. reference obliquity

# NASA Planetary Fact Sheet obliquity to orbit [deg]
NASA_OBLIQUITY_REFERENCE = {
    "mercury": 0.034,
    "venus": 177.4,
    "earth": 23.44,
    "mars": 25.19,
    "jupiter": 3.13,
    "saturn": 26.73,
    "uranus": 97.77,
    "neptune": 28.32,
}


def _tuple3(v) -> tuple[float, float, float] | None:
    if v is None:
        return None
    return tuple(as_vector3(v))


# ════════════════════════════════════════════════════════════════════════════
#  Model Configuration
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ModelConfig:
    """Which local axis of a 3D asset points at its north pole."""
    north_axis: Vector3 = Y_AXIS

    def __post_init__(self):
        object.__setattr__(self, "north_axis", as_vector3(self.north_axis))


DEFAULT_MODEL_CONFIG = ModelConfig()


# ════════════════════════════════════════════════════════════════════════════
#  Per-body Configuration
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CelestialBodyOrientationConfig:
    """Orientation input for one body.

    At least one of ``spin_axis`` / ``obliquity_degrees`` must be set for the
    body to be orientable; ``spin_axis`` wins when both are.
    """
    spin_axis: tuple[float, float, float] | None = None
    obliquity_degrees: float | None = None
    rotation_sense: RotationSense | None = None
    model_north_axis: tuple[float, float, float] | None = None
    precession_rate: float | None = None   # [arcsec / century], reserved

    def __post_init__(self):
        object.__setattr__(self, "spin_axis", _tuple3(self.spin_axis))
        object.__setattr__(self, "model_north_axis", _tuple3(self.model_north_axis))
        if self.rotation_sense is not None:
            object.__setattr__(self, "rotation_sense",
                               RotationSense(self.rotation_sense))

    @property
    def model_config(self) -> ModelConfig:
        if self.model_north_axis is None:
            return DEFAULT_MODEL_CONFIG
        return ModelConfig(self.model_north_axis)

    def to_dict(self) -> dict:
        """JSON-safe dict with the camelCase keys used by stored configs.

        Unset fields are omitted.
        """
        d = {}
        if self.spin_axis is not None:
            d["spinAxis"] = list(self.spin_axis)
        if self.obliquity_degrees is not None:
            d["obliquityDegrees"] = self.obliquity_degrees
        if self.rotation_sense is not None:
            d["rotationSense"] = self.rotation_sense.value
        if self.model_north_axis is not None:
            d["modelNorthAxis"] = list(self.model_north_axis)
        if self.precession_rate is not None:
            d["precessionRate"] = self.precession_rate
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "CelestialBodyOrientationConfig":
        return cls(
            spin_axis=d.get("spinAxis"),
            obliquity_degrees=d.get("obliquityDegrees"),
            rotation_sense=d.get("rotationSense"),
            model_north_axis=d.get("modelNorthAxis"),
            precession_rate=d.get("precessionRate"),
        )


# ════════════════════════════════════════════════════════════════════════════
#  Derived State
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CelestialBodyOrientationState:
    """Evaluated orientation of one body at one epoch (ICRF)."""
    body_id: str
    orbital_normal: Vector3
    spin_axis: Vector3
    rotation_sense: RotationSense
    epoch: float = J2000_JD                # Julian Date
    precession_rate: float | None = None
    model_config: ModelConfig = field(default=DEFAULT_MODEL_CONFIG)

    @property
    def obliquity(self) -> float:
        """ε [rad], always recomputed from the vectors."""
        return obliquity(self.spin_axis, self.orbital_normal)

    @property
    def obliquity_deg(self) -> float:
        return float(np.rad2deg(self.obliquity))


def evaluate_orientation(config: CelestialBodyOrientationConfig,
                         elements: OrbitalElements,
                         body_id: str = "unknown",
                         epoch: float = J2000_JD) -> CelestialBodyOrientationState:
    """Evaluate a body's orientation config against its orbital plane.

    Parameters
    ----------
    config : CelestialBodyOrientationConfig
    elements : OrbitalElements — plane the obliquity is measured from
    body_id : str — used in log messages and carried on the state
    epoch : float — Julian Date the elements refer to

    Returns
    -------
    CelestialBodyOrientationState

    Raises
    ------
    MissingSpinAxis
        Neither ``spin_axis`` nor ``obliquity_degrees`` is configured.
    InvalidObliquity, InvalidInclination
        Domain errors in the inputs.
    """
    N = orbital_normal(elements)

    if config.spin_axis is not None:
        if not validate_unit_vector(config.spin_axis):
            logger.warning("Spin axis for %s is not unit length; normalizing", body_id)
        S = normalize(config.spin_axis)
    elif config.obliquity_degrees is not None:
        eps_deg = config.obliquity_degrees
        if not (0.0 <= eps_deg <= 180.0):
            raise InvalidObliquity(
                f"Obliquity for {body_id} must be in range [0, 180] degrees, "
                f"got {eps_deg}",
                body_id=body_id, obliquity_degrees=eps_deg,
            )
        A = ascending_node_direction(elements.longitude_of_ascending_node)
        S = spin_axis(N, A, min(float(np.deg2rad(eps_deg)), float(np.pi)))
    else:
        raise MissingSpinAxis(
            f"Body {body_id} has neither spin_axis nor obliquity_degrees",
            body_id=body_id,
        )

    if config.rotation_sense is not None:
        sense = config.rotation_sense
    else:
        sense = infer_rotation_sense(float(np.rad2deg(obliquity(S, N))))

    return CelestialBodyOrientationState(
        body_id=body_id,
        orbital_normal=N,
        spin_axis=S,
        rotation_sense=sense,
        epoch=epoch,
        precession_rate=config.precession_rate,
        model_config=config.model_config,
    )


def evaluate_all(configs: dict[str, CelestialBodyOrientationConfig],
                 elements: dict[str, OrbitalElements],
                 epoch: float = J2000_JD) -> dict[str, CelestialBodyOrientationState]:
    """Evaluate every body that has both a config and orbital elements.

    Bodies that fail (missing elements, domain errors, no orientation) are
    logged and left out, so none of them gets a wrong orientation.
    """
    states = {}
    for body_id, config in configs.items():
        if body_id not in elements:
            logger.error("No orbital elements for %s; leaving it unoriented", body_id)
            continue
        try:
            states[body_id] = evaluate_orientation(config, elements[body_id],
                                                   body_id=body_id, epoch=epoch)
        except AxialTiltError as ex:
            logger.error("Cannot orient %s: %s", body_id, ex)
    return states
