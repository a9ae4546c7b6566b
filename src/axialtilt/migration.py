"""
axialtilt.migration — Legacy Obliquity → Spin-Axis Migration
==============================================================

Converts old per-body records (``obliquity_degrees`` + optional rotation
sense) into vector-based :class:`~axialtilt.model.CelestialBodyOrientationConfig`
records, and checks that the conversion is faithful.

Pipeline (per body)
-------------------
1. **Validate**: ε ∈ [0°, 180°].  Out of range is a *warning*; the record is
   still migrated (and will fail further down if it cannot be).
2. **Rotation sense**: explicit value kept; otherwise inferred with the
   lossy legacy rule ε > 90° ⇒ retrograde, and a warning is recorded.
3. **Geometry**: orbital normal, ascending node, spin axis.
4. **Round trip**: obliquity recomputed from the spin axis must match the
   legacy value within 0.1°; a mismatch is recorded as a warning.

Migration never raises.  Any failure comes back as ``success=False`` with
a fallback config whose spin axis is the ecliptic normal, so one bad
record cannot abort a batch.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

import numpy as np

from .model import CelestialBodyOrientationConfig, OBLIQUITY_TOLERANCE_DEGREES
from .orbits import OrbitalElements, ascending_node_direction, orbital_normal
from .spin import RotationSense, infer_rotation_sense, obliquity, spin_axis
from .utils import ECLIPTIC_NORMAL, EPSILON, as_vector3

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Data Structures
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LegacyObliquityConfig:
    """Pre-vector orientation record."""
    obliquity_degrees: float
    rotation_sense: RotationSense | None = None
    model_north_axis: tuple[float, float, float] | None = None
    precession_rate: float | None = None

    def __post_init__(self):
        if self.rotation_sense is not None:
            object.__setattr__(self, "rotation_sense",
                               RotationSense(self.rotation_sense))
        if self.model_north_axis is not None:
            object.__setattr__(self, "model_north_axis",
                               tuple(as_vector3(self.model_north_axis)))


@dataclass
class MigrationMetadata:
    success: bool
    timestamp: datetime
    warnings: list = field(default_factory=list)      # list of str
    computed_spin_axis: tuple = tuple(ECLIPTIC_NORMAL)
    derived_rotation_sense: RotationSense = RotationSense.PROGRADE


@dataclass
class MigrationResult:
    """Legacy record, its migrated form, and how the migration went."""
    legacy: LegacyObliquityConfig
    modern: CelestialBodyOrientationConfig
    metadata: MigrationMetadata

    @property
    def success(self) -> bool:
        return self.metadata.success


@dataclass
class MigrationValidation:
    """Outcome of :func:`validate_migration`."""
    valid: bool
    discrepancies: list = field(default_factory=list)  # list of str


def _fallback(legacy: LegacyObliquityConfig, warnings: list,
              timestamp: datetime) -> MigrationResult:
    sense = legacy.rotation_sense or RotationSense.PROGRADE
    modern = CelestialBodyOrientationConfig(
        spin_axis=ECLIPTIC_NORMAL,
        obliquity_degrees=legacy.obliquity_degrees,
        rotation_sense=sense,
        model_north_axis=legacy.model_north_axis,
        precession_rate=legacy.precession_rate,
    )
    meta = MigrationMetadata(
        success=False,
        timestamp=timestamp,
        warnings=warnings,
        computed_spin_axis=tuple(ECLIPTIC_NORMAL),
        derived_rotation_sense=sense,
    )
    return MigrationResult(legacy=legacy, modern=modern, metadata=meta)


# ════════════════════════════════════════════════════════════════════════════
#  Migration
# ════════════════════════════════════════════════════════════════════════════

def migrate_legacy_obliquity(legacy: LegacyObliquityConfig,
                             elements: OrbitalElements,
                             body_id: str = "unknown") -> MigrationResult:
    """Migrate one legacy record to a spin-axis config.

    Parameters
    ----------
    legacy : LegacyObliquityConfig
    elements : OrbitalElements — orbital plane of the body
    body_id : str — used in warnings

    Returns
    -------
    MigrationResult — never raises
    """
    warnings = []
    timestamp = datetime.now(timezone.utc)

    try:
        eps_deg = float(legacy.obliquity_degrees)
        if not (0.0 <= eps_deg <= 180.0):
            warnings.append(
                f"Invalid obliquity {eps_deg}° for {body_id}. "
                f"Must be in range [0, 180]."
            )

        if legacy.rotation_sense is not None:
            sense = legacy.rotation_sense
        else:
            sense = infer_rotation_sense(eps_deg)
            warnings.append(
                f"Inferred rotation sense '{sense.value}' for {body_id} "
                f"from obliquity {eps_deg}°"
            )

        N = orbital_normal(elements)
        A = ascending_node_direction(elements.longitude_of_ascending_node)
        eps_rad = float(np.deg2rad(eps_deg))
        if eps_deg <= 180.0:
            eps_rad = min(eps_rad, float(np.pi))   # deg2rad(180) may round past π
        S = spin_axis(N, A, eps_rad)

        rt_deg = float(np.rad2deg(obliquity(S, N)))
        err = abs(rt_deg - eps_deg)
        if err > OBLIQUITY_TOLERANCE_DEGREES:
            warnings.append(
                f"Round-trip obliquity error {err:.3f}° for {body_id}. "
                f"Expected {eps_deg}°, got {rt_deg:.3f}°"
            )

        modern = CelestialBodyOrientationConfig(
            spin_axis=S,
            obliquity_degrees=legacy.obliquity_degrees,   # kept for reference
            rotation_sense=sense,
            model_north_axis=legacy.model_north_axis,
            precession_rate=legacy.precession_rate,
        )
        meta = MigrationMetadata(
            success=True,
            timestamp=timestamp,
            warnings=warnings,
            computed_spin_axis=tuple(S),
            derived_rotation_sense=sense,
        )
        for w in warnings:
            logger.warning(w)
        return MigrationResult(legacy=legacy, modern=modern, metadata=meta)

    except Exception as ex:
        warnings.append(f"Migration failed for {body_id}: {ex}")
        logger.error("Migration failed for %s: %s", body_id, ex)
        return _fallback(legacy, warnings, timestamp)


def migrate_legacy_obliquity_batch(
    configs: dict[str, LegacyObliquityConfig],
    elements: dict[str, OrbitalElements],
) -> dict[str, MigrationResult]:
    """Migrate many bodies; each succeeds or fails on its own.

    A body with no orbital elements gets a failed result of its own and does
    not affect the rest of the batch.
    """
    results = {}
    for body_id, legacy in configs.items():
        el = elements.get(body_id)
        if el is None:
            msg = f"Missing orbital elements for {body_id}"
            logger.error(msg)
            results[body_id] = _fallback(legacy, [msg], datetime.now(timezone.utc))
            continue
        results[body_id] = migrate_legacy_obliquity(legacy, el, body_id)
    return results


# ════════════════════════════════════════════════════════════════════════════
#  Validation
# ════════════════════════════════════════════════════════════════════════════

def validate_migration(modern: CelestialBodyOrientationConfig,
                       legacy: LegacyObliquityConfig,
                       elements: OrbitalElements,
                       tolerance: float = OBLIQUITY_TOLERANCE_DEGREES
                       ) -> MigrationValidation:
    """Independently re-derive obliquity and sense from a migrated config.

    Parameters
    ----------
    modern : CelestialBodyOrientationConfig — migrated record
    legacy : LegacyObliquityConfig — the record it came from
    elements : OrbitalElements
    tolerance : float — allowed obliquity error [deg]

    Returns
    -------
    MigrationValidation
    """
    out = MigrationValidation(valid=False)

    if modern.spin_axis is None:
        out.discrepancies.append("Modern configuration missing spin axis vector")
        return out

    try:
        N = orbital_normal(elements)
        eps_deg = float(np.rad2deg(obliquity(modern.spin_axis, N)))
    except ValueError as ex:
        out.discrepancies.append(f"Validation failed: {ex}")
        return out

    err = abs(eps_deg - legacy.obliquity_degrees)
    if err > tolerance:
        out.discrepancies.append(
            f"Obliquity mismatch: expected {legacy.obliquity_degrees}°, "
            f"computed {eps_deg:.3f}° (error: {err:.3f}°)"
        )

    expected = legacy.rotation_sense or infer_rotation_sense(legacy.obliquity_degrees)
    if modern.rotation_sense is not expected:
        got = modern.rotation_sense.value if modern.rotation_sense else None
        out.discrepancies.append(
            f"Rotation sense mismatch: expected {expected.value}, got {got}"
        )

    if legacy.model_north_axis is not None and modern.model_north_axis is not None:
        for k, (a, b) in enumerate(zip(legacy.model_north_axis,
                                       modern.model_north_axis)):
            if abs(a - b) > EPSILON:
                out.discrepancies.append(
                    f"Model north axis mismatch at component {k}: "
                    f"expected {a}, got {b}"
                )
                break

    out.valid = not out.discrepancies
    return out


# ════════════════════════════════════════════════════════════════════════════
#  Reporting
# ════════════════════════════════════════════════════════════════════════════

def format_migration_report(results: dict[str, MigrationResult]) -> str:
    """Format batch migration results as a human-readable report.

    Parameters
    ----------
    results : dict[str, MigrationResult]

    Returns
    -------
    report : str
    """
    lines = []
    lines.append("=" * 60)
    lines.append("  AXIAL TILT MIGRATION REPORT")
    lines.append("=" * 60)

    n_ok = n_fail = 0
    for body_id, res in results.items():
        meta = res.metadata
        lines.append("")
        if meta.success:
            n_ok += 1
            axis = ", ".join(f"{c:.6f}" for c in meta.computed_spin_axis)
            lines.append(f"  ✓ {body_id.upper()}")
            lines.append(f"    Legacy obliquity:   {res.legacy.obliquity_degrees}°")
            lines.append(f"    Computed spin axis: [{axis}]")
            lines.append(f"    Rotation sense:     {meta.derived_rotation_sense.value}")
            if meta.warnings:
                lines.append(f"    Warnings: {len(meta.warnings)}")
        else:
            n_fail += 1
            lines.append(f"  ✗ {body_id.upper()} (FAILED)")
        for w in meta.warnings:
            lines.append(f"      - {w}")

    lines.append("")
    lines.append("  " + "-" * 58)
    lines.append(f"  Summary: {n_ok} successful, {n_fail} failed")
    lines.append(f"  Generated: {datetime.now(timezone.utc).isoformat()}")
    lines.append("=" * 60)
    return "\n".join(lines)
