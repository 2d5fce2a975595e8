"""
Exception taxonomy for the curve/surface kernel.

Every failure is local and synchronous: the operation that raised simply
does not produce a curve, surface or point. All exceptions derive from
ValueError so callers that only care about "bad input" can catch that.

- GeometryConstructionError: construction invariants violated
  (too few control points, knot count mismatch, empty control mesh)
- ParameterDomainError: evaluation parameter outside the valid domain
- EmptyCurveError: evaluation of a curve with no control points yet
- DegenerateGeometryError: numeric degeneracy that would otherwise
  produce NaN/Inf (zero-length knot span, zero-length segment,
  singular interpolation matrix)
"""


class GeometryConstructionError(ValueError):
    """Raised when a curve, surface or solver cannot be constructed."""


class ParameterDomainError(ValueError):
    """Raised when an evaluation parameter lies outside the valid domain."""

    def __init__(self, t: float, domain):
        self.t = t
        self.domain = (float(domain[0]), float(domain[1]))
        super().__init__(
            f"Parameter {t} outside domain [{self.domain[0]}, {self.domain[1]}]"
        )


class EmptyCurveError(ValueError):
    """Raised when evaluating a curve that has no control points."""


class DegenerateGeometryError(ValueError):
    """Base class for degenerate numeric situations."""


class DegenerateKnotSpanError(DegenerateGeometryError):
    """Zero-length knot span hit during de Boor evaluation."""


class DegenerateSegmentError(DegenerateGeometryError):
    """Projection onto a zero-length segment."""


class SingularSystemError(DegenerateGeometryError):
    """Interpolation matrix is singular."""
