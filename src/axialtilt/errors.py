"""
axialtilt.errors — Domain Validation Errors
=============================================

Only *domain* violations raise (inclination or obliquity outside [0, π],
a zero-length direction, a body with no orientation at all).  Numerical
degeneracies (parallel vectors, unit-vector drift) are resolved in place
and never surface here.

Every error carries a stable ``code`` string so callers that persist or
report failures do not have to match on message text.
"""


class AxialTiltError(ValueError):
    """Base class for all axial-tilt domain errors."""

    code = "AXIAL_TILT_ERROR"

    def __init__(self, message: str, **details):
        super().__init__(f"[{self.code}] {message}")
        self.details = details


class InvalidInclination(AxialTiltError):
    """Inclination outside [0, π]."""
    code = "INVALID_INCLINATION"


class InvalidObliquity(AxialTiltError):
    """Obliquity outside [0, π] (or [0°, 180°])."""
    code = "INVALID_OBLIQUITY"


class ZeroVector(AxialTiltError):
    """A direction was requested from a (near-)zero vector."""
    code = "ZERO_VECTOR"


class MissingSpinAxis(AxialTiltError):
    """Orientation config has neither ``spin_axis`` nor ``obliquity_degrees``."""
    code = "MISSING_SPIN_AXIS"
