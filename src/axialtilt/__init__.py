"""
axialtilt — Physically Correct Axial Tilt for Rendered Bodies
===============================================================

Obliquity is not a rotation amount; it is a geometric relationship::

    ε = ∠(spin axis S, orbital normal N)

Pipeline (ICRF/J2000 ecliptic, Z-up, until the frame boundary)::

    (i, Ω) ─► orbits ─► N, A ─► spin (+ε) ─► S ─► frames ─► S_render
                                                         │
                                            orientation ◄┘  (replace / compose)

    legacy (ε°, sense?) ─► migration ─► spin-axis config  (+ round-trip check)

Coordinate Frame Definitions
-----------------------------

**ICRF (ICRF/J2000 ecliptic)**
  - X: Vernal equinox at J2000.0
  - Z: Ecliptic normal
  - Y: Completes RHS.

**RENDER (scene graph)**
  - X: Right
  - Y: Up
  - Z: Toward camera.  Only ``axialtilt.frames`` knows this mapping.
"""

import logging

from .errors import (
    AxialTiltError, InvalidInclination, InvalidObliquity,
    ZeroVector, MissingSpinAxis,
)

from .utils import (
    Vector3, as_vector3,
    magnitude, normalize, dot, cross, is_unit_vector, wrap_two_pi,
    rotation_matrix_axis_angle,
    ECLIPTIC_NORMAL,
    EPSILON, UNIT_VECTOR_TOLERANCE, CROSS_PRODUCT_TOLERANCE, ANGULAR_TOLERANCE,
)

from .frames import (
    icrf_to_render, render_to_icrf,
    icrf_to_render_matrix, render_to_icrf_matrix,
    validate_unit_vector,
    get_dcm, transform, FRAMES,
)

from .orbits import (
    OrbitalElements,
    orbital_normal,
    ascending_node_direction,
    elements_from_state,
)

from .spin import (
    RotationSense,
    spin_axis,
    obliquity,
    obliquity_deg,
    infer_rotation_sense,
    angular_velocity,
)

from .quaternion import (
    Quaternion, IDENTITY,
    from_axis_angle, from_unit_vectors,
    multiply, conjugate, rotate_vector, normalize_quaternion, angle_between,
)

from .model import (
    ModelConfig, DEFAULT_MODEL_CONFIG,
    CelestialBodyOrientationConfig,
    CelestialBodyOrientationState,
    evaluate_orientation, evaluate_all,
    NASA_OBLIQUITY_REFERENCE, OBLIQUITY_TOLERANCE_DEGREES, J2000_JD,
)

from .orientation import (
    Orientable, RenderObject,
    apply_spin_axis_orientation,
    apply_daily_rotation,
    effective_spin_axis,
    spin_axis_in_render_frame,
    ConsistencyReport, check_canonical_consistency,
)

from .migration import (
    LegacyObliquityConfig,
    MigrationMetadata, MigrationResult, MigrationValidation,
    migrate_legacy_obliquity,
    migrate_legacy_obliquity_batch,
    validate_migration,
    format_migration_report,
)

from .logging_config import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    # ── Errors ──
    "AxialTiltError", "InvalidInclination", "InvalidObliquity",
    "ZeroVector", "MissingSpinAxis",
    # ── Vectors / constants ──
    "Vector3", "as_vector3", "magnitude", "normalize", "dot", "cross",
    "is_unit_vector", "wrap_two_pi", "rotation_matrix_axis_angle",
    "ECLIPTIC_NORMAL", "EPSILON", "UNIT_VECTOR_TOLERANCE",
    "CROSS_PRODUCT_TOLERANCE", "ANGULAR_TOLERANCE",
    # ── Frame boundary ──
    "icrf_to_render", "render_to_icrf",
    "icrf_to_render_matrix", "render_to_icrf_matrix",
    "validate_unit_vector", "get_dcm", "transform", "FRAMES",
    # ── Orbital plane ──
    "OrbitalElements", "orbital_normal", "ascending_node_direction",
    "elements_from_state",
    # ── Spin axis ──
    "RotationSense", "spin_axis", "obliquity", "obliquity_deg",
    "infer_rotation_sense", "angular_velocity",
    # ── Quaternions ──
    "Quaternion", "IDENTITY", "from_axis_angle", "from_unit_vectors",
    "multiply", "conjugate", "rotate_vector", "normalize_quaternion",
    "angle_between",
    # ── Configuration / state ──
    "ModelConfig", "DEFAULT_MODEL_CONFIG",
    "CelestialBodyOrientationConfig", "CelestialBodyOrientationState",
    "evaluate_orientation", "evaluate_all",
    "NASA_OBLIQUITY_REFERENCE", "OBLIQUITY_TOLERANCE_DEGREES", "J2000_JD",
    # ── Render-object orientation ──
    "Orientable", "RenderObject",
    "apply_spin_axis_orientation", "apply_daily_rotation",
    "effective_spin_axis", "spin_axis_in_render_frame",
    "ConsistencyReport", "check_canonical_consistency",
    # ── Migration ──
    "LegacyObliquityConfig", "MigrationMetadata", "MigrationResult",
    "MigrationValidation", "migrate_legacy_obliquity",
    "migrate_legacy_obliquity_batch", "validate_migration",
    "format_migration_report",
    # ── Logging ──
    "setup_logging",
]
